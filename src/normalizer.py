# ABOUTME: Reshapes parsed OpenWeatherMap models into the normalized plugin output.
# ABOUTME: Pure transforms: unit conversion, local time, and condition mapping per reading.

import json

from src.conditions import map_condition
from src.conversions import kelvin_to_fahrenheit, local_breakdown, local_timestamp
from src.errors import DataError
from src.models import (
    Mode,
    NormalizedCity,
    NormalizedEntry,
    NormalizedForecast,
    RawCity,
    RawCurrentReading,
    RawForecastResponse,
)


def normalize_reading(reading: RawCurrentReading) -> NormalizedEntry:
    """Normalize one reading using its own timezone offset (0 when absent)."""
    local = local_breakdown(reading.dt, reading.offset)
    condition = reading.condition
    display = map_condition(condition.main, local.hour)
    return NormalizedEntry(
        date=local.date,
        time=local.time,
        day_of_week=local.day_of_week,
        temperature_f=kelvin_to_fahrenheit(reading.main.temp),
        feels_like_f=kelvin_to_fahrenheit(reading.main.feels_like),
        condition_label=display.label,
        description=condition.description,
        emoji=display.emoji,
    )


def normalize_city(city: RawCity) -> NormalizedCity:
    return NormalizedCity(
        name=city.name,
        population=city.population,
        sunrise_utc=city.sunrise,
        sunset_utc=city.sunset,
        sunrise_local=local_timestamp(city.sunrise, city.timezone),
        sunset_local=local_timestamp(city.sunset, city.timezone),
    )


def normalize_forecast(response: RawForecastResponse) -> NormalizedForecast:
    """Normalize a forecast, keeping the upstream (chronological) order.

    Entries do not inherit the city's offset; an entry without its own
    `timezone` is rendered in UTC.
    """
    return NormalizedForecast(
        city=normalize_city(response.city),
        entries=[normalize_reading(reading) for reading in response.readings],
    )


def normalize(parsed: RawCurrentReading | RawForecastResponse, mode: Mode, *, include_city: bool = False):
    """Produce the JSON-compatible output value for a parsed response."""
    if mode is Mode.CURRENT:
        return normalize_reading(parsed).model_dump(mode="json")

    forecast = normalize_forecast(parsed)
    entries = [entry.model_dump(mode="json") for entry in forecast.entries]
    if include_city:
        return {"city": forecast.city.model_dump(mode="json"), "list": entries}
    return entries


def to_json(value) -> str:
    """Serialize a normalized value as strict JSON.

    JSON has no NaN or Infinity, so a non-finite temperature is a DataError.
    """
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise DataError(f"Temperature is not a finite number: {e}", label="temperature") from e
