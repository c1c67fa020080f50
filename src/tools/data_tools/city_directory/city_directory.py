"""City Directory - static coordinates for the supported cities."""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class CityEntry:
    """A supported city with its coordinates and display name."""

    id: str
    latitude: float
    longitude: float
    display_name: str
    country_code: str


def _entries(*entries: CityEntry) -> MappingProxyType:
    return MappingProxyType({entry.id: entry for entry in entries})


CITIES = _entries(
    CityEntry('seoul', 37.5665, 126.9780, '서울', 'KR'),
    CityEntry('busan', 35.1796, 129.0756, '부산', 'KR'),
    CityEntry('incheon', 37.4563, 126.7052, '인천', 'KR'),
    CityEntry('daegu', 35.8714, 128.6014, '대구', 'KR'),
    CityEntry('daejeon', 36.3504, 127.3845, '대전', 'KR'),
    CityEntry('gwangju', 35.1595, 126.8526, '광주', 'KR'),
    CityEntry('ulsan', 35.5384, 129.3114, '울산', 'KR'),
    CityEntry('suwon', 37.2636, 127.0286, '수원', 'KR'),
    CityEntry('jeju', 33.4996, 126.5312, '제주', 'KR'),
    CityEntry('tokyo', 35.6762, 139.6503, '도쿄', 'JP'),
    CityEntry('london', 51.5074, -0.1278, '런던', 'GB'),
    CityEntry('paris', 48.8566, 2.3522, '파리', 'FR'),
    CityEntry('new york', 40.7128, -74.0060, '뉴욕', 'US'),
)

COUNTRY_CODES = MappingProxyType(
    {city_id: entry.country_code for city_id, entry in CITIES.items()}
)

EXAMPLE_CITY_IDS = ('seoul', 'busan', 'tokyo', 'london')


def lookup(city_id: str) -> CityEntry | None:
    """Find a supported city.

    Args:
        city_id: The city identifier (e.g., "seoul", "New York").

    Returns:
        The matching CityEntry, or None if the city is not supported.
    """
    return CITIES.get(city_id.lower())


def country_code_for(city_id: str) -> str:
    """Get the ISO country code for a city, or an empty string if unknown."""
    return COUNTRY_CODES.get(city_id.lower(), '')


def example_city_ids() -> tuple[str, ...]:
    return EXAMPLE_CITY_IDS
