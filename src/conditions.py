# ABOUTME: Maps OpenWeatherMap condition groups to a display label and emoji glyph.
# ABOUTME: Clear is the only hour-dependent group; unknown groups pass through with no emoji.

from src.models import ConditionDisplay, WeatherCondition

CLEAR_DAY = "☀"
CLEAR_NIGHT = "🌑"

EMOJI = {
    WeatherCondition.CLOUDS: "☁",
    WeatherCondition.RAIN: "🌧",
    WeatherCondition.SNOW: "🌨",
    WeatherCondition.THUNDERSTORM: "⛈",
    WeatherCondition.TORNADO: "🌪",
    WeatherCondition.HAZE: "🌫",
}


def is_daytime(hour: int) -> bool:
    """Fixed daylight window used for the Clear glyph, not real sunrise/sunset."""
    return 6 < hour < 16


def map_condition(condition: str, hour: int) -> ConditionDisplay:
    """Return the label and emoji for a condition group at a local hour (0-23)."""
    try:
        known = WeatherCondition(condition)
    except ValueError:
        return ConditionDisplay(label=condition, emoji="")

    if known is WeatherCondition.CLEAR:
        emoji = CLEAR_DAY if is_daytime(hour) else CLEAR_NIGHT
    else:
        emoji = EMOJI.get(known, "")
    return ConditionDisplay(label=known.value, emoji=emoji)
