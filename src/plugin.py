# ABOUTME: The `weather` filter plugin: registers its signature and handles one invocation.
# ABOUTME: Turns host arguments into a WeatherQuery, runs the service, and labels any failure.

import asyncio
import logging
from typing import Any, Callable

from pydantic import ValidationError

from src.config import resolve_api_key
from src.deps import WeatherDeps
from src.errors import ConfigError, WeatherError
from src.models import DEFAULT_CITY, Mode, WeatherQuery
from src.normalizer import to_json
from src.protocol import AutoConvert, CallInfo, LabeledError, NamedParam, ReturnValue, Signature, Span
from src.weather_service import get_weather

logger = logging.getLogger(__name__)


def build_query(city: Any, info_type: Any, api_key: str) -> WeatherQuery:
    """Build the invocation's query from raw host arguments, applying defaults."""
    city = DEFAULT_CITY if city is None else str(city)
    info_type = Mode.CURRENT.value if info_type is None else str(info_type).lower()
    try:
        return WeatherQuery(city=city, mode=info_type, api_key=api_key)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid type '{info_type}', expected 'current' or 'forecast'", label="type"
        ) from e


class WeatherPlugin:
    """Filter plugin that emits one weather value per invocation.

    The instance keeps only its dependencies; every invocation builds its own
    query, so concurrent invocations never share state.
    """

    def __init__(self, deps: WeatherDeps, key_source: Callable[[], str] = resolve_api_key):
        self.deps = deps
        self.key_source = key_source

    def config(self) -> Signature:
        return Signature(
            name="weather",
            usage="Displays weather information",
            named={
                "city": NamedParam(kind="optional", desc="the city to retrieve weather for", short="c"),
                "type": NamedParam(kind="optional", desc="current or forecast", short="t"),
                "summary": NamedParam(
                    kind="switch", shape="boolean", desc="include the city summary in a forecast", short="s"
                ),
            },
            is_filter=True,
        )

    async def begin_filter(self, call_info: CallInfo) -> list[ReturnValue]:
        span = call_info.name_tag.span
        try:
            value = await self.run(
                call_info.args.get("city"),
                call_info.args.get("type"),
                include_city=bool(call_info.args.get("summary", False)),
            )
            text = to_json(value)
        except WeatherError as e:
            logger.warning("weather failed: %s", e.message)
            return [ReturnValue.failure(to_labeled_error(e, span))]
        return [ReturnValue.success(AutoConvert(value=text))]

    async def filter(self, value: Any) -> list[ReturnValue]:
        return []

    async def end_filter(self) -> list[ReturnValue]:
        return []

    async def run(self, city: Any = None, info_type: Any = None, include_city: bool = False):
        """Resolve the key, then fetch and normalize weather for one query."""
        api_key = await asyncio.to_thread(self.key_source)
        query = build_query(city, info_type, api_key)
        logger.debug("weather for %r (%s)", query.city, query.mode.value)
        return await get_weather(self.deps.http_client, query, include_city=include_city)


def to_labeled_error(error: WeatherError, span: Span) -> LabeledError:
    return LabeledError(message=error.message, label=error.label, span=span)
