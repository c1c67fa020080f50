"""Shared helper functions for reshaping forecast days."""

from datetime import datetime, timezone


def date_to_timestamp(date: str) -> int:
    """Convert a provider date string to epoch seconds.

    Args:
        date: Date in "YYYY-MM-DD" format, as returned by Open-Meteo.

    Returns:
        Seconds since the epoch for midnight UTC of that date.
    """
    day = datetime.strptime(date, '%Y-%m-%d').replace(tzinfo=timezone.utc)
    return int(day.timestamp())


def average_temperature(
    temp_max: float | None,
    temp_min: float | None,
) -> float | None:
    """Get a day's representative temperature as the mean of max and min.

    Returns None when either reading is missing.
    """
    if temp_max is None or temp_min is None:
        return None
    return (temp_max + temp_min) / 2


def precipitation_flag(precipitation_sum: float | None) -> int:
    """Return 1 if any precipitation is expected, otherwise 0.

    A missing sum counts as no precipitation.
    """
    return 1 if precipitation_sum is not None and precipitation_sum > 0 else 0
