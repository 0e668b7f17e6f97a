"""Parser: raw text → CalendarFields (timestamps) or Duration (expressions).

Recognized timestamp grammar::

    YYYY-MM-DD[(T|' ')HH:MM[:SS[.fffffffff]]][Z|±HH:MM|±HHMM]

Recognized duration grammar::

    [+|-] <n>d <n>h <n>m <n>[.fffffffff]s     (any non-empty subset, in order)

Field ranges are checked here and never clamped. Whether a day exists in
its month is decided later by the normalizer.
"""

from __future__ import annotations

import logging
import re

from tdcalc.domain.calendar import (
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from tdcalc.domain.errors import ArithmeticReason, DurationArithmeticError, ParseError, ParseReason
from tdcalc.domain.types import CalendarFields, Duration, Instant

logger = logging.getLogger(__name__)

NOW_KEYWORD = "now"

_TIMESTAMP_PATTERN = re.compile(
    r"""
    (?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})
    (?:
        [Tt\ ]
        (?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})
        (?::(?P<second>[0-9]{2})(?:\.(?P<fraction>[0-9]{1,9}))?)?
        (?P<offset>[Zz]|(?P<sign>[+-])(?P<offset_hour>[0-9]{2}):?(?P<offset_minute>[0-9]{2}))?
    )?
    """,
    re.VERBOSE,
)
_TIMESTAMP_PREFIX = re.compile(r"[0-9]{4}-")
_DURATION_COMPONENT = re.compile(r"(?P<value>[0-9]+)(?:\.(?P<fraction>[0-9]+))?(?P<unit>[A-Za-z]*)")
# 2**63 seconds has 19 digits; any 21-digit value overflows in every unit.
_MAX_VALUE_DIGITS = 20

# unit -> (order rank, nanoseconds per unit)
_UNITS: dict[str, tuple[int, int]] = {
    "d": (0, SECONDS_PER_DAY * NANOS_PER_SECOND),
    "h": (1, SECONDS_PER_HOUR * NANOS_PER_SECOND),
    "m": (2, SECONDS_PER_MINUTE * NANOS_PER_SECOND),
    "s": (3, NANOS_PER_SECOND),
}

_FIELD_LIMITS: dict[str, tuple[int, int]] = {
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
    "offset_minute": (0, 59),
}

ParsedValue = CalendarFields | Duration | Instant


def parse_input(text: str, *, now: Instant | None = None) -> ParsedValue:
    """Parse one user-supplied argument.

    Args:
        text: A timestamp, a duration expression, or ``now``.
        now: The already-resolved current instant. Required only when
            *text* is ``now``; the engine never reads the clock itself.

    Returns:
        CalendarFields for timestamps, Duration for duration expressions,
        or *now* itself for the ``now`` keyword.

    Raises:
        ParseError: When *text* is empty or matches no recognized grammar.
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError(ParseReason.EMPTY_INPUT, "input is empty", text=text)

    if stripped.lower() == NOW_KEYWORD:
        if now is None:
            raise ParseError(
                ParseReason.MALFORMED_DATE,
                "'now' is not available in this context",
                text=text,
            )
        return now

    if _TIMESTAMP_PREFIX.match(stripped):
        return parse_timestamp(stripped)
    if stripped[0] in "+-" or stripped[0].isdigit():
        return parse_duration(stripped)

    raise ParseError(
        ParseReason.MALFORMED_DATE,
        "not a recognized timestamp or duration expression",
        text=text,
    )


def parse_timestamp(text: str) -> CalendarFields:
    """Parse an ISO-8601-like timestamp into calendar fields."""
    match = _TIMESTAMP_PATTERN.fullmatch(text.strip())
    if match is None:
        raise ParseError(
            ParseReason.MALFORMED_DATE,
            "expected YYYY-MM-DD[THH:MM[:SS]][±HH:MM]",
            text=text,
        )

    for name, (low, high) in _FIELD_LIMITS.items():
        raw = match.group(name)
        if raw is not None and not low <= int(raw) <= high:
            raise ParseError(
                ParseReason.OUT_OF_RANGE_FIELD,
                f"{name.replace('_', ' ')} {int(raw)} is outside {low}..{high}",
                text=text,
                fragment=raw,
            )

    fraction = match.group("fraction") or ""
    fields = CalendarFields(
        year=int(match.group("year")),
        month=int(match.group("month")),
        day=int(match.group("day")),
        hour=int(match.group("hour") or 0),
        minute=int(match.group("minute") or 0),
        second=int(match.group("second") or 0),
        nanosecond=int(fraction.ljust(9, "0")) if fraction else 0,
        offset_minutes=_offset_minutes(match),
    )
    logger.debug("Parsed timestamp %r -> %s", text, fields)
    return fields


def _offset_minutes(match: re.Match[str]) -> int | None:
    offset = match.group("offset")
    if offset is None:
        return None
    if offset in ("Z", "z"):
        return 0
    minutes = int(match.group("offset_hour")) * 60 + int(match.group("offset_minute"))
    return -minutes if match.group("sign") == "-" else minutes


def parse_duration(text: str) -> Duration:
    """Parse a compound duration expression such as ``-1d2h30m``.

    Units must appear at most once each, largest first. Only the seconds
    component may carry a fractional part.

    Examples:
        >>> parse_duration("1d2h30m")
        Duration(seconds=95400, nanos=0)
        >>> parse_duration("-1.5s")
        Duration(seconds=-2, nanos=500000000)
    """
    stripped = text.strip()
    sign = 1
    body = stripped
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if not body:
        raise ParseError(ParseReason.MALFORMED_DATE, "expected a duration after the sign", text=text)

    total = 0
    last_rank = -1
    cursor = 0
    while cursor < len(body):
        match = _DURATION_COMPONENT.match(body, cursor)
        if match is None:
            raise ParseError(
                ParseReason.MALFORMED_DATE,
                "expected <number><unit>",
                text=text,
                fragment=body[cursor:],
            )
        unit = match.group("unit")
        if not unit:
            raise ParseError(
                ParseReason.UNKNOWN_UNIT,
                "number is missing a unit (d, h, m, s)",
                text=text,
                fragment=match.group(0),
            )
        if unit not in _UNITS:
            raise ParseError(
                ParseReason.UNKNOWN_UNIT,
                f"unknown unit {unit!r}; expected d, h, m or s",
                text=text,
                fragment=unit,
            )
        rank, unit_nanos = _UNITS[unit]
        if rank <= last_rank:
            raise ParseError(
                ParseReason.MALFORMED_DATE,
                "units must appear once each, largest first",
                text=text,
                fragment=match.group(0),
            )
        value = match.group("value").lstrip("0")
        if len(value) > _MAX_VALUE_DIGITS:
            raise DurationArithmeticError(
                ArithmeticReason.OVERFLOW,
                "duration exceeds the signed 64-bit second range",
                text=text,
                fragment=match.group(0),
            )
        total += int(value or "0") * unit_nanos
        fraction = match.group("fraction")
        if fraction is not None:
            if unit != "s":
                raise ParseError(
                    ParseReason.MALFORMED_DATE,
                    "only seconds may have a fractional part",
                    text=text,
                    fragment=match.group(0),
                )
            if len(fraction) > 9:
                raise ParseError(
                    ParseReason.OUT_OF_RANGE_FIELD,
                    "at most 9 fractional digits are supported",
                    text=text,
                    fragment=match.group(0),
                )
            total += int(fraction.ljust(9, "0"))
        last_rank = rank
        cursor = match.end()

    duration = Duration.from_nanos(sign * total, text=text)
    logger.debug("Parsed duration %r -> %s", text, duration)
    return duration
