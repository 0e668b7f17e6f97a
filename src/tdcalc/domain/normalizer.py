"""Normalizer: CalendarFields ⇄ Instant.

A timestamp without an offset is read as UTC. No ambient timezone or
clock state is ever consulted, so results are identical on every machine.
"""

from __future__ import annotations

import logging

from tdcalc.domain.calendar import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    civil_from_days,
    days_from_civil,
    days_in_month,
    is_valid_date,
)
from tdcalc.domain.errors import NormalizationError, NormalizationReason
from tdcalc.domain.types import CalendarFields, Instant

logger = logging.getLogger(__name__)

MAX_OFFSET_MINUTES = 24 * 60


def format_offset(offset_minutes: int) -> str:
    """Render an offset as ``±HH:MM``."""
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def normalize(fields: CalendarFields, *, text: str = "") -> Instant:
    """Resolve calendar fields to an absolute Instant.

    Args:
        fields: Parsed calendar fields (individual ranges already checked).
        text: Original input, attached to any error for reporting.

    Raises:
        NormalizationError: ``InvalidCalendarDate`` for impossible dates
            such as Feb 30 or Feb 29 of a common year; ``InvalidOffset``
            when the offset exceeds ±24:00.
    """
    if not is_valid_date(fields.year, fields.month, fields.day):
        if 1 <= fields.month <= 12:
            limit = f"{days_in_month(fields.year, fields.month)} days"
        else:
            limit = "no such month"
        raise NormalizationError(
            NormalizationReason.INVALID_CALENDAR_DATE,
            f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d} does not exist ({limit})",
            text=text,
            fragment=f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}",
        )

    offset = fields.offset_minutes
    if offset is not None and abs(offset) > MAX_OFFSET_MINUTES:
        raise NormalizationError(
            NormalizationReason.INVALID_OFFSET,
            "UTC offset must be within ±24:00",
            text=text,
            fragment=format_offset(offset),
        )

    local_seconds = (
        days_from_civil(fields.year, fields.month, fields.day) * SECONDS_PER_DAY
        + fields.hour * SECONDS_PER_HOUR
        + fields.minute * SECONDS_PER_MINUTE
        + fields.second
    )
    instant = Instant(
        seconds=local_seconds - (offset or 0) * SECONDS_PER_MINUTE,
        nanos=fields.nanosecond,
        offset_minutes=offset,
    )
    logger.debug("Normalized %s -> %s", fields, instant)
    return instant


def to_calendar_fields(instant: Instant) -> CalendarFields:
    """Read an Instant back as calendar fields in its own offset."""
    days, second_of_day = divmod(instant.local_seconds, SECONDS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, rest = divmod(second_of_day, SECONDS_PER_HOUR)
    minute, second = divmod(rest, SECONDS_PER_MINUTE)
    return CalendarFields(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        nanosecond=instant.nanos,
        offset_minutes=instant.offset_minutes,
    )
