# ABOUTME: Pydantic BaseModels for OpenWeatherMap payloads and the normalized plugin output.
# ABOUTME: Raw models mirror the two upstream shapes; normalized models are what the host receives.

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CITY = "huntington"


class Mode(str, Enum):
    """Which upstream endpoint to query."""

    CURRENT = "current"
    FORECAST = "forecast"


class WeatherCondition(str, Enum):
    """Condition groups documented by OpenWeatherMap (`weather[].main`)."""

    CLOUDS = "Clouds"
    CLEAR = "Clear"
    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    MIST = "Mist"
    SMOKE = "Smoke"
    HAZE = "Haze"
    DUST = "Dust"
    FOG = "Fog"
    SAND = "Sand"
    ASH = "Ash"
    SQUALL = "Squall"
    TORNADO = "Tornado"


class WeatherQuery(BaseModel):
    """Parameters of one invocation. Built once and never mutated."""

    model_config = ConfigDict(frozen=True)

    city: str = DEFAULT_CITY
    mode: Mode = Mode.CURRENT
    api_key: str = Field(repr=False)


class RawMain(BaseModel):
    """The `main` block of a reading. Temperatures are Kelvin."""

    temp: float
    feels_like: float
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    sea_level: float | None = None
    grnd_level: float | None = None
    temp_kf: float | None = None


class RawCondition(BaseModel):
    """One entry of a reading's `weather` list."""

    main: str
    description: str = ""
    id: int | None = None
    icon: str | None = None


class RawCurrentReading(BaseModel):
    """A single reading, as returned by /weather or as one /forecast list entry."""

    dt: int
    main: RawMain
    weather: list[RawCondition] = Field(min_length=1)
    timezone: int | None = None
    dt_txt: str | None = None
    name: str | None = None

    @property
    def offset(self) -> int:
        return self.timezone or 0

    @property
    def condition(self) -> RawCondition:
        return self.weather[0]


class RawCity(BaseModel):
    """The `city` block of a /forecast response."""

    id: int | None = None
    name: str
    population: int = 0
    timezone: int = 0
    sunrise: int
    sunset: int
    country: str | None = None


class RawForecastResponse(BaseModel):
    """Parsed /forecast response: city block plus chronological readings."""

    city: RawCity
    readings: list[RawCurrentReading] = Field(alias="list")


class LocalTime(BaseModel):
    """Calendar breakdown of a local instant."""

    date: str
    time: str
    day_of_week: str
    hour: int


class ConditionDisplay(BaseModel):
    label: str
    emoji: str


class NormalizedEntry(BaseModel):
    """One reading reshaped for display."""

    date: str
    time: str
    day_of_week: str
    temperature_f: float
    feels_like_f: float
    condition_label: str
    description: str
    emoji: str


class NormalizedCity(BaseModel):
    """City summary of a forecast, with sunrise/sunset in UTC and local time."""

    name: str
    population: int
    sunrise_utc: int
    sunset_utc: int
    sunrise_local: str
    sunset_local: str


class NormalizedForecast(BaseModel):
    city: NormalizedCity
    entries: list[NormalizedEntry] = []
