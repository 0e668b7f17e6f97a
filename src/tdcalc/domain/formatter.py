"""Formatter: Durations and Instants → display strings.

Duration display policy, applied to every duration the engine renders:

* ``-`` prefix iff the duration is negative.
* Leading zero units among days, hours and minutes are dropped; once a
  unit is shown, every smaller unit is shown too. Seconds always appear.
* Days are unpadded; hours, minutes and seconds are two-digit padded.
* A non-zero sub-second part is appended to the seconds as a decimal
  fraction with trailing zeros trimmed.

So ``1d 03h 04m 05s``, ``-1d 02h 03m 04s``, ``03m 00s``, ``00s``, ``05.5s``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from tdcalc.domain.calendar import (
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from tdcalc.domain.normalizer import format_offset, to_calendar_fields
from tdcalc.domain.types import Duration, FormattedResult, Instant


def _fraction(nanos: int) -> str:
    return f".{nanos:09d}".rstrip("0") if nanos else ""


def format_duration(duration: Duration) -> FormattedResult:
    """Break *duration* into units and render it per the display policy."""
    magnitude = abs(duration.total_nanos)
    total_seconds, nanos = divmod(magnitude, NANOS_PER_SECOND)
    days, rest = divmod(total_seconds, SECONDS_PER_DAY)
    hours, rest = divmod(rest, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if parts or hours:
        parts.append(f"{hours:02d}h")
    if parts or minutes:
        parts.append(f"{minutes:02d}m")
    parts.append(f"{seconds:02d}{_fraction(nanos)}s")

    negative = duration.is_negative
    display = ("-" if negative else "") + " ".join(parts)
    return FormattedResult(
        negative=negative,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        nanos=nanos,
        display=display,
    )


def format_instant(instant: Instant) -> str:
    """Render *instant* in its own offset, e.g. ``2024-03-11T02:30:00-05:00``.

    Instants without an offset (read as UTC) are rendered without a suffix,
    mirroring how they were written. Years outside 0000-9999, reachable only
    by reading an edge instant in another offset, use the ISO 8601 expanded
    form (``-0001``, ``+10000``).
    """
    f = to_calendar_fields(instant)
    year = f"{f.year:04d}" if 0 <= f.year <= 9999 else f"{f.year:+05d}"
    text = (
        f"{year}-{f.month:02d}-{f.day:02d}"
        f"T{f.hour:02d}:{f.minute:02d}:{f.second:02d}{_fraction(f.nanosecond)}"
    )
    if f.offset_minutes is not None:
        text += format_offset(f.offset_minutes)
    return text


def format_hours(duration: Duration, *, precision: int = 2) -> str:
    """Render a duration as decimal hours, e.g. ``8.50 hours``."""
    hours = Decimal(duration.total_nanos) / (SECONDS_PER_HOUR * NANOS_PER_SECOND)
    rounded = hours.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return f"{rounded} hours"
