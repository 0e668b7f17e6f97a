"""DurationService — runs the parse → normalize → compute → format pipeline.

Every public method returns a ServiceResult; engine exceptions are turned
into failed results and never escape. "Now" is never read here: callers
pass an already-resolved value in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from tdcalc.domain.arithmetic import add_durations, difference, shift, subtract_durations
from tdcalc.domain.clock import clock_range, clock_since
from tdcalc.domain.errors import EngineError, ParseError, ParseReason
from tdcalc.domain.formatter import format_duration, format_hours, format_instant
from tdcalc.domain.normalizer import normalize
from tdcalc.domain.parser import ParsedValue, parse_duration, parse_input
from tdcalc.domain.types import CalendarFields, Duration, Instant
from tdcalc.services.base import BaseService, error_from_exception
from tdcalc.services.result import ServiceResult
from tdcalc.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


def _duration_payload(duration: Duration) -> dict[str, Any]:
    formatted = format_duration(duration)
    return {
        "kind": "duration",
        "display": formatted.display,
        "total_seconds": duration.seconds,
        "nanos": duration.nanos,
        "breakdown": formatted.breakdown(),
    }


def _instant_payload(instant: Instant) -> dict[str, Any]:
    return {
        "kind": "timestamp",
        "display": format_instant(instant),
        "epoch_seconds": instant.seconds,
        "nanos": instant.nanos,
    }


class DurationService(BaseService):
    """Elapsed-time, shifted-timestamp, duration-sum and clock-range operations."""

    @traced
    def calculate(self, first: str, second: str, *, now: Instant | None = None) -> ServiceResult:
        """Combine two inputs according to their kinds.

        * timestamp, timestamp → elapsed duration ``second - first``
        * timestamp, duration (either order) → shifted timestamp
        * duration, duration → their sum
        """
        try:
            data = self._calculate(first, second, now=now)
        except EngineError as exc:
            return self._failure("calculate", exc)
        return ServiceResult(ok=True, op="calculate", data=data)

    def _calculate(self, first: str, second: str, *, now: Instant | None) -> dict[str, Any]:
        with trace_span("parse"):
            parsed_first = parse_input(first, now=now)
            parsed_second = parse_input(second, now=now)
        with trace_span("normalize"):
            left = _resolve(parsed_first, first)
            right = _resolve(parsed_second, second)
        with trace_span("compute") as span:
            if isinstance(left, Instant) and isinstance(right, Instant):
                data = _duration_payload(difference(left, right))
                data.update({"from": format_instant(left), "to": format_instant(right)})
            elif isinstance(left, Instant) and isinstance(right, Duration):
                data = _instant_payload(shift(left, right, text=second))
                data.update({"from": format_instant(left), "shift": format_duration(right).display})
            elif isinstance(left, Duration) and isinstance(right, Instant):
                data = _instant_payload(shift(right, left, text=first))
                data.update({"from": format_instant(right), "shift": format_duration(left).display})
            else:
                assert isinstance(left, Duration) and isinstance(right, Duration)
                data = _duration_payload(add_durations(left, right, text=second))
            if span:
                span.annotate(kind=data["kind"])
        logger.debug("calculate %r %r -> %s", first, second, data["display"])
        return data

    @traced
    def add(self, first: str, second: str, *, subtract: bool = False) -> ServiceResult:
        """Add (or subtract) two duration expressions."""
        op = "subtract" if subtract else "add"
        try:
            with trace_span("parse"):
                left = parse_duration(first)
                right = parse_duration(second)
            with trace_span("compute"):
                combine = subtract_durations if subtract else add_durations
                total = combine(left, right, text=second)
        except EngineError as exc:
            return self._failure(op, exc)
        return ServiceResult(ok=True, op=op, data=_duration_payload(total))

    @traced
    def hours(self, text: str, *, now_clock: tuple[int, int] | None = None) -> ServiceResult:
        """Hours across a same-day clock range, or from one time until *now_clock*.

        Args:
            text: ``START-END`` (e.g. ``9:00AM-5:30PM``) or a single ``H:MM``.
            now_clock: The caller's local ``(hour, minute)``; required for
                single-time input.
        """
        clock = self._settings.clock
        try:
            if "-" in text:
                duration = clock_range(
                    text,
                    implicit_start=clock.implicit_start,
                    implicit_end=clock.implicit_end,
                )
            elif now_clock is None:
                raise ParseError(
                    ParseReason.MALFORMED_TIME,
                    "a single time needs the current wall-clock time",
                    text=text,
                )
            else:
                duration = clock_since(
                    text,
                    now_hour=now_clock[0],
                    now_minute=now_clock[1],
                    implicit_start=clock.implicit_start,
                )
        except EngineError as exc:
            return self._failure("hours", exc)

        data = {
            "kind": "hours",
            "display": format_hours(duration, precision=self._settings.display.hours_precision),
            "minutes": duration.seconds // 60,
            "duration": format_duration(duration).display,
        }
        return ServiceResult(ok=True, op="hours", data=data)

    @traced
    def batch(self, lines: Iterable[str], *, now: Instant | None = None) -> ServiceResult:
        """Run :meth:`calculate` over ``A B`` pairs, one per line.

        Blank lines and ``#`` comments are skipped. Item failures are
        reported as warnings and never stop the batch unless
        ``[batch] fail_fast`` is set. ``data["exit_code"]`` is the most
        severe exit code among failed items (0 when all succeed).
        """
        items: list[dict[str, Any]] = []
        warnings: list[str] = []
        exit_code = 0
        with trace_span("lines") as span:
            for lineno, raw in enumerate(lines, start=1):
                line = raw.strip()
                if not line or line.startswith("#"):
                    continue
                item: dict[str, Any] = {"line": lineno, "input": line}
                try:
                    tokens = line.split()
                    if len(tokens) != 2:
                        raise ParseError(
                            ParseReason.MALFORMED_DATE,
                            "expected exactly two whitespace-separated values",
                            text=line,
                        )
                    payload = self._calculate(tokens[0], tokens[1], now=now)
                except EngineError as exc:
                    logger.debug("batch line %d failed: %s", lineno, exc)
                    item.update(ok=False, error=error_from_exception(exc).model_dump())
                    warnings.append(f"line {lineno}: {exc}")
                    exit_code = max(exit_code, exc.exit_code)
                else:
                    item.update(ok=True, **payload)
                items.append(item)
                if not item["ok"] and self._settings.batch.fail_fast:
                    break

            failed = sum(1 for item in items if not item["ok"])
            if span:
                span.annotate(count=len(items), failed=failed)

        data = {
            "items": items,
            "count": len(items),
            "failed": failed,
            "exit_code": exit_code,
        }
        return ServiceResult(ok=True, op="batch", data=data, warnings=warnings)


def _resolve(value: ParsedValue, text: str) -> Instant | Duration:
    if isinstance(value, CalendarFields):
        return normalize(value, text=text)
    return value
