"""Shared fixtures for weather server tests."""

from unittest.mock import MagicMock

import pytest

from src.server.weather_server.gateway import WeatherGateway
from src.tools.data_tools.response_cache.response_cache import ResponseCache

CURRENT_PAYLOAD = {
    'latitude': 37.55,
    'longitude': 127.0,
    'current': {
        'time': '2024-01-01T12:00',
        'temperature_2m': 20.5,
        'relative_humidity_2m': 65,
        'apparent_temperature': 19.0,
        'precipitation': 0.0,
        'weather_code': 0,
        'wind_speed_10m': 3.5,
        'wind_direction_10m': 180,
    },
}

DAILY_PAYLOAD = {
    'latitude': 35.7,
    'longitude': 139.6875,
    'daily': {
        'time': [f'2024-01-0{day}' for day in range(1, 8)],
        'weather_code': [0, 1, 3, 61, 71, 95, 999],
        'temperature_2m_max': [10.0, 11.0, 12.0, 9.0, 3.0, 15.0, 8.0],
        'temperature_2m_min': [2.0, 3.0, 4.0, 1.0, -3.0, 7.0, 0.0],
        'precipitation_sum': [0.0, 0.1, 0.0, 5.2, 3.0, 12.4, 0.0],
        'wind_speed_10m_max': [5.0, 6.1, 7.2, 8.3, 9.4, 10.5, 11.6],
    },
}


def make_response(status_code: int = 200, payload=None) -> MagicMock:
    """Build a stand-in for an httpx.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def upstream():
    """Mocked OpenMeteoClient answering with canned payloads."""
    client = MagicMock()
    client.fetch_current.return_value = make_response(payload=CURRENT_PAYLOAD)
    client.fetch_daily.return_value = make_response(payload=DAILY_PAYLOAD)
    return client


@pytest.fixture
def gateway_logger():
    return MagicMock()


@pytest.fixture
def gateway(clock, upstream, gateway_logger):
    return WeatherGateway(
        cache=ResponseCache(clock=clock),
        client=upstream,
        logger=gateway_logger,
    )


@pytest.fixture
def response_factory():
    return make_response
