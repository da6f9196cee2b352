# ABOUTME: Unit and time conversions applied to raw OpenWeatherMap readings.
# ABOUTME: Kelvin to Fahrenheit, and UTC epoch plus offset to local date/time strings.

from datetime import datetime, timezone

from src.errors import DataError
from src.models import LocalTime


def kelvin_to_fahrenheit(kelvin: float) -> float:
    """Convert a Kelvin temperature to Fahrenheit without rounding.

    NaN passes through; negative Kelvin is rejected with DataError.
    """
    if kelvin < 0:
        raise DataError(f"Temperature below absolute zero: {kelvin} K", label="temperature")
    return 1.8 * (kelvin - 273.15) + 32.0


def local_breakdown(epoch_seconds: int, offset_seconds: int) -> LocalTime:
    """Break `epoch_seconds + offset_seconds` into calendar strings, read as a UTC instant."""
    dt = _shifted(epoch_seconds, offset_seconds)
    meridiem = "AM" if dt.hour < 12 else "PM"
    return LocalTime(
        date=f"{dt:%b} {dt.day} {dt.year}",
        time=f"{dt:%I:%M:%S} {meridiem}",
        day_of_week=f"{dt:%A}",
        hour=dt.hour,
    )


def local_timestamp(epoch_seconds: int, offset_seconds: int) -> str:
    """Render a local instant as a single "<date> <time>" string."""
    local = local_breakdown(epoch_seconds, offset_seconds)
    return f"{local.date} {local.time}"


def _shifted(epoch_seconds: int, offset_seconds: int) -> datetime:
    seconds = epoch_seconds + offset_seconds
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise DataError(f"Timestamp out of range: {seconds}", label="dt") from e

