"""Wall-clock hour ranges within a single day, e.g. ``9:00AM-5:30PM``.

Times are 12-hour clock readings ``H:MM`` or ``HH:MM`` with an optional
``AM``/``PM`` suffix attached directly (case-insensitive). In a range,
either both ends carry a suffix or neither does; with neither, the start
and end meridiems come from the caller (by default ``AM`` and ``PM``).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from tdcalc.domain.calendar import SECONDS_PER_MINUTE
from tdcalc.domain.errors import (
    NormalizationError,
    NormalizationReason,
    ParseError,
    ParseReason,
)
from tdcalc.domain.types import Duration

logger = logging.getLogger(__name__)

_CLOCK_PATTERN = re.compile(r"(?P<hour>[0-9]{1,2}):(?P<minute>[0-9]{2})(?P<meridiem>[AaPp][Mm])?")


@dataclass(frozen=True)
class ClockTime:
    """A 12-hour clock reading, meridiem optional."""

    hour: int
    minute: int
    meridiem: str | None = None

    def minutes_since_midnight(self, default_meridiem: str = "AM") -> int:
        meridiem = self.meridiem or default_meridiem
        hour24 = self.hour % 12
        if meridiem == "PM":
            hour24 += 12
        return hour24 * 60 + self.minute


def parse_clock_time(text: str) -> ClockTime:
    """Parse ``9:00AM``, ``09:00``, ``10:30pm`` and the like.

    Raises:
        ParseError: ``MalformedTime`` for anything not shaped like a clock
            reading (``900AM``, ``9:0``, ``10:30 AM``); ``OutOfRangeField``
            for hour outside 1..12 or minute outside 0..59.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(ParseReason.EMPTY_INPUT, "time is empty", text=text)
    match = _CLOCK_PATTERN.fullmatch(stripped)
    if match is None:
        raise ParseError(
            ParseReason.MALFORMED_TIME,
            "expected H:MM or HH:MM, optionally followed by AM/PM",
            text=text,
        )
    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if not 1 <= hour <= 12:
        raise ParseError(
            ParseReason.OUT_OF_RANGE_FIELD,
            f"hour {hour} is outside 1..12",
            text=text,
            fragment=match.group("hour"),
        )
    if minute > 59:
        raise ParseError(
            ParseReason.OUT_OF_RANGE_FIELD,
            f"minute {minute} is outside 0..59",
            text=text,
            fragment=match.group("minute"),
        )
    meridiem = match.group("meridiem")
    return ClockTime(hour, minute, meridiem.upper() if meridiem else None)


def clock_range(
    text: str,
    *,
    implicit_start: str = "AM",
    implicit_end: str = "PM",
) -> Duration:
    """Elapsed time across a same-day range such as ``9:00AM-5:30PM``.

    Raises:
        ParseError: ``MalformedTime`` when the text is not two times joined
            by ``-``; ``AmbiguousRange`` when only one end has AM/PM.
        NormalizationError: ``InvalidRange`` when the end precedes the start.
    """
    parts = text.split("-")
    if len(parts) != 2:
        raise ParseError(
            ParseReason.MALFORMED_TIME,
            "expected START-END, e.g. 9:00AM-5:30PM",
            text=text,
        )
    raw_start, raw_end = (part.strip() for part in parts)
    if not raw_start or not raw_end:
        raise ParseError(
            ParseReason.MALFORMED_TIME,
            "start or end time is empty",
            text=text,
        )
    start = parse_clock_time(raw_start)
    end = parse_clock_time(raw_end)
    if (start.meridiem is None) != (end.meridiem is None):
        raise ParseError(
            ParseReason.AMBIGUOUS_RANGE,
            "both times must specify AM/PM, or neither should",
            text=text,
        )
    return _between(
        text,
        start,
        end,
        start_meridiem=start.meridiem or implicit_start,
        end_meridiem=end.meridiem or implicit_end,
    )


def clock_since(
    text: str,
    *,
    now_hour: int,
    now_minute: int,
    implicit_start: str = "AM",
) -> Duration:
    """Elapsed time from a single clock reading until the supplied "now".

    *now_hour* (0..23) and *now_minute* are the caller's wall-clock reading;
    the engine never looks at the system clock. The start may not carry a
    meridiem: it is always read as *implicit_start*.
    """
    start = parse_clock_time(text)
    if start.meridiem is not None:
        raise ParseError(
            ParseReason.AMBIGUOUS_RANGE,
            "a single start time must not specify AM/PM",
            text=text,
        )
    meridiem = "PM" if now_hour >= 12 else "AM"
    end = ClockTime(now_hour % 12 or 12, now_minute, meridiem)
    return _between(text, start, end, start_meridiem=implicit_start, end_meridiem=meridiem)


def _between(
    text: str,
    start: ClockTime,
    end: ClockTime,
    *,
    start_meridiem: str,
    end_meridiem: str,
) -> Duration:
    start_minutes = start.minutes_since_midnight(start_meridiem)
    end_minutes = end.minutes_since_midnight(end_meridiem)
    if end_minutes < start_minutes:
        raise NormalizationError(
            NormalizationReason.INVALID_RANGE,
            f"end {end.hour}:{end.minute:02d}{end_meridiem} is before "
            f"start {start.hour}:{start.minute:02d}{start_meridiem}; "
            "the range must stay within one day",
            text=text,
        )
    logger.debug("Clock range %r -> %d minutes", text, end_minutes - start_minutes)
    return Duration((end_minutes - start_minutes) * SECONDS_PER_MINUTE)
