"""Unit tests for Weather Gateway."""

import copy

import httpx
import pytest

from src.server.weather_server.gateway import (
    CityNotFoundError,
    InternalError,
    UpstreamError,
)


class TestGetCurrentConditions:
    """Tests for get_current_conditions."""

    def test_reshapes_upstream_payload(self, gateway, upstream):
        """Test the legacy schema built from an Open-Meteo response."""
        result = gateway.get_current_conditions('Seoul')

        assert result == {
            'cod': 200,
            'name': '서울',
            'coord': {'lat': 37.5665, 'lon': 126.978},
            'sys': {'country': 'KR'},
            'main': {
                'temp': 20.5,
                'feels_like': 19.0,
                'humidity': 65,
                'pressure': 1013,
            },
            'weather': [{
                'id': 0,
                'main': '맑음',
                'description': '맑음',
                'icon': '01d',
            }],
            'wind': {'speed': 3.5, 'deg': 180},
        }
        upstream.fetch_current.assert_called_once_with(37.5665, 126.978)

    def test_unknown_city_skips_upstream(self, gateway, upstream):
        """Test an unsupported city fails without calling the provider."""
        with pytest.raises(CityNotFoundError) as exc_info:
            gateway.get_current_conditions('Atlantis')

        assert exc_info.value.status_code == 404
        assert 'seoul, busan, tokyo, london' in exc_info.value.message
        upstream.fetch_current.assert_not_called()
        assert len(gateway.cache) == 0

    def test_cached_within_ttl(self, gateway, upstream, clock):
        """Test a second request within the TTL is served from the cache."""
        first = gateway.get_current_conditions('seoul')
        clock.advance(299)
        second = gateway.get_current_conditions('SEOUL')

        assert second == first
        assert upstream.fetch_current.call_count == 1
        assert 'weather_seoul' in gateway.cache

    def test_refetches_after_ttl(self, gateway, upstream, clock):
        """Test an expired entry triggers a new upstream call."""
        gateway.get_current_conditions('seoul')
        gateway.get_current_conditions('seoul')
        clock.advance(300)
        gateway.get_current_conditions('seoul')

        assert upstream.fetch_current.call_count == 2

    def test_upstream_error_is_not_cached(self, gateway, upstream, response_factory):
        """Test a non-success status fails and leaves the cache empty."""
        upstream.fetch_current.return_value = response_factory(500, {'error': True})

        with pytest.raises(UpstreamError) as exc_info:
            gateway.get_current_conditions('seoul')

        assert exc_info.value.status_code == 500
        assert exc_info.value.upstream_status == 500
        assert exc_info.value.message == '날씨 데이터를 가져올 수 없습니다.'
        assert 'weather_seoul' not in gateway.cache

        with pytest.raises(UpstreamError):
            gateway.get_current_conditions('seoul')
        assert upstream.fetch_current.call_count == 2

    def test_network_failure(self, gateway, upstream, gateway_logger):
        """Test transport errors become InternalError and are logged."""
        upstream.fetch_current.side_effect = httpx.ConnectError('connection refused')

        with pytest.raises(InternalError) as exc_info:
            gateway.get_current_conditions('seoul')

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == '서버 오류가 발생했습니다.'
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert 'connection refused' not in exc_info.value.message
        gateway_logger.exception.assert_called_once()
        assert len(gateway.cache) == 0

    def test_malformed_payload(self, gateway, upstream, response_factory):
        """Test a payload missing fields becomes InternalError."""
        upstream.fetch_current.return_value = response_factory(200, {'current': {}})

        with pytest.raises(InternalError):
            gateway.get_current_conditions('seoul')
        assert len(gateway.cache) == 0

    def test_invalid_json(self, gateway, upstream, response_factory):
        """Test an undecodable body becomes InternalError."""
        response = response_factory(200)
        response.json.side_effect = ValueError('Expecting value')
        upstream.fetch_current.return_value = response

        with pytest.raises(InternalError):
            gateway.get_current_conditions('seoul')

    def test_null_reading_passes_through(self, gateway, upstream, response_factory):
        """Test a missing provider value is reported as null instead of failing."""
        payload = copy.deepcopy(upstream.fetch_current.return_value.json.return_value)
        payload['current']['wind_direction_10m'] = None
        upstream.fetch_current.return_value = response_factory(200, payload)

        result = gateway.get_current_conditions('seoul')

        assert result['wind'] == {'speed': 3.5, 'deg': None}
        assert 'weather_seoul' in gateway.cache

    def test_logs_raw_upstream_payload(self, gateway, gateway_logger):
        """Test the raw provider payload is logged for diagnostics."""
        gateway.get_current_conditions('seoul')

        logged = [call.args for call in gateway_logger.info.call_args_list]
        assert any('Upstream data' in args[0] for args in logged)


class TestGetForecast:
    """Tests for get_forecast."""

    def test_reshapes_daily_payload(self, gateway, upstream):
        """Test the 7-day forecast in the legacy schema."""
        result = gateway.get_forecast('Tokyo')

        assert result['cod'] == '200'
        assert result['city'] == {
            'name': '도쿄',
            'coord': {'lat': 35.6762, 'lon': 139.6503},
        }
        assert len(result['list']) == 7
        assert result['list'][0] == {
            'dt': 1704067200,
            'dt_txt': '2024-01-01',
            'main': {'temp': 6.0, 'temp_max': 10.0, 'temp_min': 2.0},
            'weather': [{
                'id': 0,
                'main': '맑음',
                'description': '맑음',
                'icon': '01d',
            }],
            'wind': {'speed': 5.0},
            'pop': 0,
        }
        upstream.fetch_daily.assert_called_once_with(35.6762, 139.6503)

    def test_days_keep_upstream_order(self, gateway):
        """Test one record per returned day, in order."""
        days = gateway.get_forecast('tokyo')['list']

        assert [day['dt_txt'] for day in days] == [f'2024-01-0{n}' for n in range(1, 8)]
        assert [day['dt'] for day in days] == [1704067200 + 86400 * n for n in range(7)]

    def test_precipitation_flag(self, gateway):
        """Test pop is 1 only for a strictly positive precipitation sum."""
        days = gateway.get_forecast('tokyo')['list']

        assert [day['pop'] for day in days] == [0, 1, 0, 1, 1, 1, 0]

    def test_null_daily_values(self, gateway, upstream, response_factory):
        """Test null daily readings keep the day instead of failing the forecast."""
        payload = copy.deepcopy(upstream.fetch_daily.return_value.json.return_value)
        payload['daily']['precipitation_sum'][6] = None
        payload['daily']['wind_speed_10m_max'][6] = None
        payload['daily']['temperature_2m_min'][5] = None
        upstream.fetch_daily.return_value = response_factory(200, payload)

        days = gateway.get_forecast('tokyo')['list']

        assert len(days) == 7
        assert days[6]['pop'] == 0
        assert days[6]['wind'] == {'speed': None}
        assert days[5]['main'] == {'temp': None, 'temp_max': 15.0, 'temp_min': None}

    def test_unknown_weather_code(self, gateway):
        """Test an unmapped code gets the unknown description and clear-sky icon."""
        condition = gateway.get_forecast('tokyo')['list'][6]['weather'][0]

        assert condition == {
            'id': 999,
            'main': '알 수 없음',
            'description': '알 수 없음',
            'icon': '01d',
        }

    def test_forecast_and_weather_cached_separately(self, gateway, upstream):
        """Test the two endpoint kinds use distinct cache keys."""
        gateway.get_current_conditions('tokyo')
        gateway.get_forecast('tokyo')
        gateway.get_forecast('tokyo')

        assert upstream.fetch_current.call_count == 1
        assert upstream.fetch_daily.call_count == 1
        assert 'weather_tokyo' in gateway.cache
        assert 'forecast_tokyo' in gateway.cache

    def test_unknown_city_skips_upstream(self, gateway, upstream):
        """Test an unsupported city fails without calling the provider."""
        with pytest.raises(CityNotFoundError):
            gateway.get_forecast('gotham')

        upstream.fetch_daily.assert_not_called()

    def test_upstream_error(self, gateway, upstream, response_factory):
        """Test a non-success status uses the forecast error message."""
        upstream.fetch_daily.return_value = response_factory(503, {'reason': 'busy'})

        with pytest.raises(UpstreamError) as exc_info:
            gateway.get_forecast('tokyo')

        assert exc_info.value.message == '예보 데이터를 가져올 수 없습니다.'
        assert 'forecast_tokyo' not in gateway.cache
