"""Pydantic models for the Open-Meteo forecast API responses."""

from pydantic import BaseModel, model_validator

# Keeps integers as integers so values pass through unchanged.
Number = int | float

# Open-Meteo reports missing readings as null.
MaybeNumber = Number | None


class CurrentConditions(BaseModel):
    """The `current` block of a current-conditions response."""

    temperature_2m: MaybeNumber
    relative_humidity_2m: MaybeNumber
    apparent_temperature: MaybeNumber
    precipitation: MaybeNumber = None
    weather_code: int | None
    wind_speed_10m: MaybeNumber
    wind_direction_10m: MaybeNumber


class OpenMeteoCurrentResponse(BaseModel):
    current: CurrentConditions


class DailyAggregates(BaseModel):
    """The `daily` block of a forecast response, one list entry per day."""

    time: list[str]
    weather_code: list[int | None]
    temperature_2m_max: list[MaybeNumber]
    temperature_2m_min: list[MaybeNumber]
    precipitation_sum: list[MaybeNumber]
    wind_speed_10m_max: list[MaybeNumber]

    @model_validator(mode='after')
    def check_lengths(self) -> 'DailyAggregates':
        days = len(self.time)
        columns = (
            self.weather_code,
            self.temperature_2m_max,
            self.temperature_2m_min,
            self.precipitation_sum,
            self.wind_speed_10m_max,
        )
        if any(len(column) != days for column in columns):
            raise ValueError('daily columns must have one value per day')
        return self


class OpenMeteoDailyResponse(BaseModel):
    daily: DailyAggregates
