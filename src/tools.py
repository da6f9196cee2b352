# ABOUTME: Agent toolset exposing the weather filter to pydantic-ai agent hosts.
# ABOUTME: Runs the same pipeline as the shell plugin and surfaces failures as ModelRetry.
# ABOUTME: Attach with Agent(model, deps_type=WeatherDeps, toolsets=[weather_toolset]).

from pydantic_ai import ModelRetry, RunContext
from pydantic_ai.toolsets import FunctionToolset

from src.deps import WeatherDeps
from src.errors import ConfigError, WeatherError
from src.models import DEFAULT_CITY
from src.plugin import WeatherPlugin

weather_toolset = FunctionToolset()


@weather_toolset.tool
async def get_weather(
    ctx: RunContext[WeatherDeps],
    city: str = DEFAULT_CITY,
    info_type: str = "current",
    summary: bool = False,
) -> dict | list:
    """Get current weather or a forecast for a city, temperatures in Fahrenheit.

    Args:
        ctx: Agent run context with HTTP client.
        city: City name (e.g. "Huntington", "New York").
        info_type: "current" for the latest reading, "forecast" for 3-hourly readings.
        summary: For forecasts, also return sunrise/sunset and population of the city.
    """
    plugin = WeatherPlugin(ctx.deps)
    try:
        return await plugin.run(city, info_type, include_city=summary)
    except ConfigError as e:
        if e.label == "type":
            raise ModelRetry(e.message) from e
        # A missing key is not something the model can fix
        raise
    except WeatherError as e:
        raise ModelRetry(f"Weather lookup failed for '{city}': {e.message}") from e
