"""Legacy response schema (OpenWeatherMap-compatible shapes)."""

from pydantic import BaseModel, Field

from src.tools.api_tools.open_meteo.models import MaybeNumber

# Open-Meteo has no pressure field; the legacy schema requires one.
STANDARD_PRESSURE = 1013


class Coordinates(BaseModel):
    lat: float
    lon: float


class Country(BaseModel):
    country: str


class Condition(BaseModel):
    """One entry of the `weather` list."""

    id: int | None
    main: str
    description: str
    icon: str


class CurrentMain(BaseModel):
    temp: MaybeNumber
    feels_like: MaybeNumber
    humidity: MaybeNumber
    pressure: int = STANDARD_PRESSURE


class CurrentWind(BaseModel):
    speed: MaybeNumber
    deg: MaybeNumber


class WeatherSnapshot(BaseModel):
    """Current conditions as returned by GET /api/weather/{city}."""

    cod: int = 200
    name: str
    coord: Coordinates
    sys: Country
    main: CurrentMain
    weather: list[Condition]
    wind: CurrentWind


class DayMain(BaseModel):
    temp: MaybeNumber
    temp_max: MaybeNumber
    temp_min: MaybeNumber


class DayWind(BaseModel):
    speed: MaybeNumber


class ForecastDay(BaseModel):
    dt: int
    dt_txt: str
    main: DayMain
    weather: list[Condition]
    wind: DayWind
    pop: int


class ForecastCity(BaseModel):
    name: str
    coord: Coordinates


class ForecastSnapshot(BaseModel):
    """Daily forecast as returned by GET /api/forecast/{city}."""

    cod: str = '200'
    city: ForecastCity
    days: list[ForecastDay] = Field(serialization_alias='list')
