"""Exact arithmetic on Instants and Durations.

Everything runs on integer seconds plus a nanosecond remainder; the
carry/borrow between the two components is explicit. Results that leave
the representable range raise instead of wrapping.
"""

from __future__ import annotations

from tdcalc.domain.calendar import MAX_INSTANT_SECONDS, MIN_INSTANT_SECONDS, NANOS_PER_SECOND
from tdcalc.domain.errors import ArithmeticReason, DurationArithmeticError
from tdcalc.domain.types import INT64_MAX, INT64_MIN, Duration, Instant


def _carry(seconds: int, nanos: int) -> tuple[int, int]:
    """Fold a nanosecond value in ``(-2e9, 2e9)`` back into ``[0, 1e9)``."""
    if nanos >= NANOS_PER_SECOND:
        return seconds + 1, nanos - NANOS_PER_SECOND
    if nanos < 0:
        return seconds - 1, nanos + NANOS_PER_SECOND
    return seconds, nanos


def _checked_duration(seconds: int, nanos: int, *, text: str = "") -> Duration:
    if not INT64_MIN <= seconds <= INT64_MAX:
        raise DurationArithmeticError(
            ArithmeticReason.OVERFLOW,
            "result exceeds the signed 64-bit second range",
            text=text,
        )
    return Duration(seconds, nanos)


def difference(first: Instant, second: Instant) -> Duration:
    """Elapsed time from *first* to *second* (``second - first``).

    Negative when *first* is chronologically after *second*; the inputs
    are never reordered.
    """
    seconds, nanos = _carry(second.seconds - first.seconds, second.nanos - first.nanos)
    return _checked_duration(seconds, nanos)


def shift(instant: Instant, duration: Duration, *, text: str = "") -> Instant:
    """Move *instant* by *duration*, keeping its display offset.

    Raises:
        DurationArithmeticError: When the result leaves the Instant range:
            years 0000-9999 with one day of slack on either side, the span
            any timestamp the parser accepts can denote.
    """
    seconds, nanos = _carry(instant.seconds + duration.seconds, instant.nanos + duration.nanos)
    if not MIN_INSTANT_SECONDS <= seconds <= MAX_INSTANT_SECONDS:
        direction = "after" if seconds > MAX_INSTANT_SECONDS else "before"
        raise DurationArithmeticError(
            ArithmeticReason.OVERFLOW,
            f"resulting timestamp falls more than a day {direction} years 0000-9999",
            text=text,
        )
    return Instant(seconds, nanos, offset_minutes=instant.offset_minutes)


def negate(duration: Duration) -> Duration:
    """Flip the sign of *duration*.

    Examples:
        >>> negate(Duration(1, 500_000_000))
        Duration(seconds=-2, nanos=500000000)
    """
    if duration.nanos == 0:
        return _checked_duration(-duration.seconds, 0)
    return _checked_duration(-duration.seconds - 1, NANOS_PER_SECOND - duration.nanos)


def add_durations(left: Duration, right: Duration, *, text: str = "") -> Duration:
    seconds, nanos = _carry(left.seconds + right.seconds, left.nanos + right.nanos)
    return _checked_duration(seconds, nanos, text=text)


def subtract_durations(left: Duration, right: Duration, *, text: str = "") -> Duration:
    seconds, nanos = _carry(left.seconds - right.seconds, left.nanos - right.nanos)
    return _checked_duration(seconds, nanos, text=text)
