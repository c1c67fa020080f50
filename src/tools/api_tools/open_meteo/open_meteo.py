"""Open-Meteo API client - current conditions and daily forecasts.

Open-Meteo needs no API key. Requests are keyed by coordinates and let
the provider resolve the timezone.
"""

import os

import httpx

from observability import trace_tool

DEFAULT_BASE_URL = 'https://api.open-meteo.com/v1/forecast'

CURRENT_FIELDS = (
    'temperature_2m',
    'relative_humidity_2m',
    'apparent_temperature',
    'precipitation',
    'weather_code',
    'wind_speed_10m',
    'wind_direction_10m',
)

DAILY_FIELDS = (
    'weather_code',
    'temperature_2m_max',
    'temperature_2m_min',
    'precipitation_sum',
    'wind_speed_10m_max',
)

FORECAST_DAYS = 7


def get_base_url() -> str:
    """Get the Open-Meteo forecast endpoint URL."""
    return os.getenv('OPEN_METEO_BASE_URL', DEFAULT_BASE_URL)


class OpenMeteoClient:
    """Thin wrapper issuing one GET per call, without retries."""

    def __init__(self, http_client: httpx.Client, base_url: str | None = None):
        self.http_client = http_client
        self.base_url = base_url or get_base_url()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self.http_client.close()

    @trace_tool(name='open_meteo.fetch_current', capture_output=False, method=True)
    def fetch_current(self, latitude: float, longitude: float) -> httpx.Response:
        """Request current conditions for a location.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            The raw HTTP response. Status checking is left to the caller.
        """
        return self.http_client.get(
            self.base_url,
            params={
                'latitude': latitude,
                'longitude': longitude,
                'current': ','.join(CURRENT_FIELDS),
                'timezone': 'auto',
            },
        )

    @trace_tool(name='open_meteo.fetch_daily', capture_output=False, method=True)
    def fetch_daily(
        self,
        latitude: float,
        longitude: float,
        days: int = FORECAST_DAYS,
    ) -> httpx.Response:
        """Request daily aggregates for the next `days` days.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.
            days: Number of forecast days. Defaults to 7.

        Returns:
            The raw HTTP response. Status checking is left to the caller.
        """
        return self.http_client.get(
            self.base_url,
            params={
                'latitude': latitude,
                'longitude': longitude,
                'daily': ','.join(DAILY_FIELDS),
                'timezone': 'auto',
                'forecast_days': days,
            },
        )
