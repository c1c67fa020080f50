"""Weather Gateway - city lookup, caching, upstream fetch and reshaping."""

import logging
from typing import Any

from observability import trace_span
from src.tools.api_tools.open_meteo.models import (
    OpenMeteoCurrentResponse,
    OpenMeteoDailyResponse,
)
from src.tools.api_tools.open_meteo.open_meteo import OpenMeteoClient
from src.tools.data_tools.city_directory.city_directory import (
    CityEntry,
    country_code_for,
    example_city_ids,
    lookup,
)
from src.tools.data_tools.response_cache.response_cache import ResponseCache
from src.tools.shared_libraries.helpers import (
    average_temperature,
    date_to_timestamp,
    precipitation_flag,
)
from src.tools.shared_libraries.weather_codes import describe, icon_for

from .schemas import (
    Condition,
    Coordinates,
    Country,
    CurrentMain,
    CurrentWind,
    DayMain,
    DayWind,
    ForecastCity,
    ForecastDay,
    ForecastSnapshot,
    WeatherSnapshot,
)


class WeatherGatewayError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500
    message = '서버 오류가 발생했습니다.'

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class CityNotFoundError(WeatherGatewayError):
    """Exception for a city missing from the directory."""

    status_code = 404

    def __init__(self, city_id: str):
        self.city_id = city_id
        examples = ', '.join(example_city_ids())
        super().__init__(f'지원하지 않는 도시입니다. ({examples} 등 사용 가능)')


class UpstreamError(WeatherGatewayError):
    """Exception for a non-success status from the weather provider."""

    def __init__(self, status_code: int, message: str):
        self.upstream_status = status_code
        super().__init__(message)


class InternalError(WeatherGatewayError):
    """Exception for network failures, malformed payloads and other bugs."""


def _condition(code: int | None) -> Condition:
    description = describe(code)
    return Condition(id=code, main=description, description=description, icon=icon_for(code))


def _coordinates(city: CityEntry) -> Coordinates:
    return Coordinates(lat=city.latitude, lon=city.longitude)


class WeatherGateway:
    """Serves current conditions and forecasts for supported cities.

    Each operation checks the cache, then falls through to one upstream call
    keyed by the city's coordinates. Only successful responses are cached.
    """

    def __init__(
        self,
        cache: ResponseCache,
        client: OpenMeteoClient,
        logger: logging.Logger | None = None,
    ):
        self.cache = cache
        self.client = client
        self.logger = logger or logging.getLogger(__name__)

    @trace_span('gateway.get_current_conditions')
    def get_current_conditions(self, city_id: str) -> dict[str, Any]:
        """Get current weather for a city in the legacy schema.

        Args:
            city_id: The city identifier, in any case.

        Returns:
            The WeatherSnapshot as a JSON-ready dictionary.

        Raises:
            CityNotFoundError: The city is not supported.
            UpstreamError: The provider answered with a non-success status.
            InternalError: Network failure or malformed provider payload.
        """
        city_id = city_id.lower()
        return self._serve(
            f'weather_{city_id}',
            city_id,
            self.client.fetch_current,
            self._reshape_current,
            '날씨 데이터를 가져올 수 없습니다.',
        )

    @trace_span('gateway.get_forecast')
    def get_forecast(self, city_id: str) -> dict[str, Any]:
        """Get the 7-day forecast for a city in the legacy schema.

        Args:
            city_id: The city identifier, in any case.

        Returns:
            The ForecastSnapshot as a JSON-ready dictionary.

        Raises:
            CityNotFoundError: The city is not supported.
            UpstreamError: The provider answered with a non-success status.
            InternalError: Network failure or malformed provider payload.
        """
        city_id = city_id.lower()
        return self._serve(
            f'forecast_{city_id}',
            city_id,
            self.client.fetch_daily,
            self._reshape_forecast,
            '예보 데이터를 가져올 수 없습니다.',
        )

    def _serve(self, cache_key, city_id, fetch, reshape, upstream_message):
        cached = self.cache.get(cache_key)
        if cached is not None:
            self.logger.info('Returning cached data for %s', cache_key)
            return cached

        city = lookup(city_id)
        if city is None:
            self.logger.info('Unsupported city requested: %r', city_id)
            raise CityNotFoundError(city_id)

        try:
            response = fetch(city.latitude, city.longitude)
            self.logger.info('Upstream status for %s: %s', cache_key, response.status_code)
            if not response.is_success:
                self.logger.warning(
                    'Upstream request for %s failed: %s %s',
                    cache_key,
                    response.status_code,
                    response.text,
                )
                raise UpstreamError(response.status_code, upstream_message)

            data = response.json()
            self.logger.info('Upstream data for %s: %s', cache_key, data)
            payload = reshape(city, data)
        except WeatherGatewayError:
            raise
        except Exception as e:
            self.logger.exception('Error while serving %s: %s', cache_key, e)
            raise InternalError() from e

        self.cache.put(cache_key, payload)
        return payload

    def _reshape_current(self, city: CityEntry, data: dict) -> dict[str, Any]:
        current = OpenMeteoCurrentResponse.model_validate(data).current
        snapshot = WeatherSnapshot(
            name=city.display_name,
            coord=_coordinates(city),
            sys=Country(country=country_code_for(city.id)),
            main=CurrentMain(
                temp=current.temperature_2m,
                feels_like=current.apparent_temperature,
                humidity=current.relative_humidity_2m,
            ),
            weather=[_condition(current.weather_code)],
            wind=CurrentWind(
                speed=current.wind_speed_10m,
                deg=current.wind_direction_10m,
            ),
        )
        return snapshot.model_dump(by_alias=True)

    def _reshape_forecast(self, city: CityEntry, data: dict) -> dict[str, Any]:
        daily = OpenMeteoDailyResponse.model_validate(data).daily
        days = []
        for index, date in enumerate(daily.time):
            temp_max = daily.temperature_2m_max[index]
            temp_min = daily.temperature_2m_min[index]
            days.append(ForecastDay(
                dt=date_to_timestamp(date),
                dt_txt=date,
                main=DayMain(
                    temp=average_temperature(temp_max, temp_min),
                    temp_max=temp_max,
                    temp_min=temp_min,
                ),
                weather=[_condition(daily.weather_code[index])],
                wind=DayWind(speed=daily.wind_speed_10m_max[index]),
                pop=precipitation_flag(daily.precipitation_sum[index]),
            ))

        snapshot = ForecastSnapshot(
            city=ForecastCity(name=city.display_name, coord=_coordinates(city)),
            days=days,
        )
        return snapshot.model_dump(by_alias=True)
