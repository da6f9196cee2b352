# ABOUTME: Error taxonomy for the weather filter plugin.
# ABOUTME: Every failure of an invocation is one of these, carrying a short message and a label.


class WeatherError(Exception):
    """Base error for a single weather invocation.

    `label` is the short text the host shows under the offending span.
    """

    label = "weather"

    def __init__(self, message: str, label: str | None = None):
        super().__init__(message)
        self.message = message
        if label is not None:
            self.label = label


class ConfigError(WeatherError):
    """Missing or invalid API key, or an invalid invocation parameter."""

    label = "key"


class TransportError(WeatherError):
    """Network failure, timeout, or a non-2xx response from the weather API."""

    label = "could not load"


class UpstreamFormatError(WeatherError):
    """The weather API body is not valid JSON or lacks a required field."""

    label = "unexpected response"


class DataError(WeatherError):
    """A numeric value outside its physical domain."""

    label = "invalid value"
