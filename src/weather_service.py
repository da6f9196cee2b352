# ABOUTME: Service layer for OpenWeatherMap calls and response parsing.
# ABOUTME: Builds the endpoint URL, performs the single GET, and parses the body into raw models.

import logging

import httpx
from pydantic import ValidationError

from src.errors import ConfigError, TransportError, UpstreamFormatError
from src.models import Mode, RawCurrentReading, RawForecastResponse, WeatherQuery
from src.normalizer import normalize

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"
CURRENT_URL = f"{BASE_URL}/weather"
FORECAST_URL = f"{BASE_URL}/forecast"


def build_request_url(query: WeatherQuery) -> str:
    """Build the upstream URL for a query; httpx encodes the city and key."""
    if not query.api_key or not query.api_key.strip():
        raise ConfigError("Missing 'open_weather_api_key' key")

    if query.mode is Mode.CURRENT:
        url = httpx.URL(CURRENT_URL, params={"q": query.city, "appid": query.api_key})
    else:
        url = httpx.URL(FORECAST_URL, params={"q": query.city, "mode": "json", "appid": query.api_key})
    return str(url)


def redact(url: str) -> str:
    """Strip the appid value from a URL so it can be logged."""
    parsed = httpx.URL(url)
    if "appid" not in parsed.params:
        return url
    return str(parsed.copy_set_param("appid", "***"))


async def fetch_body(client: httpx.AsyncClient, url: str) -> str:
    """GET the URL and return the response text, mapping every httpx failure to TransportError."""
    logger.debug("GET %s", redact(url))
    try:
        resp = await client.get(url)
        resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise TransportError(f"Request to weather API timed out: {e}") from e
    except httpx.HTTPStatusError as e:
        raise TransportError(
            f"Weather API returned HTTP {e.response.status_code}: {_error_message(e.response)}"
        ) from e
    except httpx.HTTPError as e:
        raise TransportError(f"Could not reach weather API: {e}") from e
    return resp.text


def _error_message(resp: httpx.Response) -> str:
    """OpenWeatherMap error bodies look like {"cod": 404, "message": "city not found"}."""
    try:
        return str(resp.json().get("message", resp.reason_phrase))
    except (ValueError, AttributeError):
        return resp.reason_phrase


def parse_current(body: str) -> RawCurrentReading:
    return _parse(RawCurrentReading, body)


def parse_forecast(body: str) -> RawForecastResponse:
    return _parse(RawForecastResponse, body)


def parse_response(body: str, mode: Mode) -> RawCurrentReading | RawForecastResponse:
    """Parse a response body into the raw model for the given mode."""
    if mode is Mode.CURRENT:
        return parse_current(body)
    return parse_forecast(body)


def _parse(model, body: str):
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise UpstreamFormatError(
            f"Unexpected weather API response ({field}: {first['msg']})", label=field
        ) from e


async def get_weather(client: httpx.AsyncClient, query: WeatherQuery, include_city: bool = False):
    """Run one query end to end: build URL, fetch, parse, and normalize.

    Returns a dict for current mode and a list of dicts for forecast mode
    (or a dict with `city` and `list` when include_city is set).
    """
    url = build_request_url(query)
    body = await fetch_body(client, url)
    parsed = parse_response(body, query.mode)
    return normalize(parsed, query.mode, include_city=include_city)
