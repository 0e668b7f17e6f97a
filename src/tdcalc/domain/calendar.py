"""Proleptic Gregorian calendar helpers.

Flat functions over plain integers. Day numbers count days since
1970-01-01 (day 0); negative values are earlier dates.
"""

from __future__ import annotations

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3_600
SECONDS_PER_DAY = 86_400
NANOS_PER_SECOND = 1_000_000_000

MIN_YEAR = 0
MAX_YEAR = 9999

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    """Return True when *year* has a February 29th.

    Examples:
        >>> is_leap_year(2024), is_leap_year(2023)
        (True, False)
        >>> is_leap_year(1900), is_leap_year(2000)
        (False, True)
    """
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* (1-12) of *year*."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def is_valid_date(year: int, month: int, day: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= days_in_month(year, month)


def days_from_civil(year: int, month: int, day: int) -> int:
    """Day number of a valid calendar date.

    Works in 400-year eras shifted to start on March 1st so the leap day
    falls at the end of each computational year.
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400
    mp = (month + 9) % 12
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146_097 + doe - 719_468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`: ``(year, month, day)``."""
    z = days + 719_468
    era = z // 146_097
    doe = z - era * 146_097
    yoe = (doe - doe // 1_460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


# Wall-clock second bounds for years MIN_YEAR..MAX_YEAR inclusive.
MIN_LOCAL_SECONDS = days_from_civil(MIN_YEAR, 1, 1) * SECONDS_PER_DAY
MAX_LOCAL_SECONDS = days_from_civil(MAX_YEAR + 1, 1, 1) * SECONDS_PER_DAY - 1

# UTC second bounds of any Instant: every wall-clock reading in
# MIN_YEAR..MAX_YEAR, under any offset up to one day either way.
MIN_INSTANT_SECONDS = MIN_LOCAL_SECONDS - SECONDS_PER_DAY
MAX_INSTANT_SECONDS = MAX_LOCAL_SECONDS + SECONDS_PER_DAY
