"""WMO weather code translation.

Open-Meteo reports conditions as WMO codes
(https://open-meteo.com/en/docs). The legacy schema expects a readable
description plus an OpenWeatherMap icon id, so both are looked up here.
"""

from types import MappingProxyType

UNKNOWN_DESCRIPTION = '알 수 없음'
DEFAULT_ICON = '01d'

WEATHER_DESCRIPTIONS = MappingProxyType({
    0: '맑음',
    1: '대체로 맑음',
    2: '부분적으로 흐림',
    3: '흐림',
    45: '안개',
    48: '짙은 안개',
    51: '가벼운 이슬비',
    53: '이슬비',
    55: '강한 이슬비',
    61: '약한 비',
    63: '비',
    65: '강한 비',
    71: '약한 눈',
    73: '눈',
    75: '강한 눈',
    77: '진눈깨비',
    80: '약한 소나기',
    81: '소나기',
    82: '강한 소나기',
    85: '약한 눈 소나기',
    86: '눈 소나기',
    95: '천둥번개',
    96: '우박을 동반한 천둥번개',
    99: '강한 우박을 동반한 천둥번개',
})

WEATHER_ICONS = MappingProxyType({
    0: '01d',
    1: '02d',
    2: '03d',
    3: '04d',
    45: '50d',
    48: '50d',
    51: '09d',
    53: '09d',
    55: '09d',
    61: '10d',
    63: '10d',
    65: '10d',
    71: '13d',
    73: '13d',
    75: '13d',
    77: '13d',
    80: '09d',
    81: '09d',
    82: '09d',
    85: '13d',
    86: '13d',
    95: '11d',
    96: '11d',
    99: '11d',
})


def describe(code: int | None) -> str:
    """Translate a WMO weather code to a description.

    Args:
        code: WMO weather code reported by Open-Meteo, or None if missing.

    Returns:
        The description, or UNKNOWN_DESCRIPTION for unmapped codes.
    """
    return WEATHER_DESCRIPTIONS.get(code, UNKNOWN_DESCRIPTION)


def icon_for(code: int | None) -> str:
    """Translate a WMO weather code to an OpenWeatherMap icon id.

    Unmapped codes get the clear-sky icon, not an "unknown" marker.
    """
    return WEATHER_ICONS.get(code, DEFAULT_ICON)
