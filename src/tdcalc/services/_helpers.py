"""Clock readings taken by the calling wrapper and handed to the engine.

These are the only places tdcalc looks at the system clock. Each is
called at most once per command invocation.
"""

from __future__ import annotations

from datetime import UTC, datetime

from tdcalc.domain.types import Instant

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def utc_now_instant() -> Instant:
    """Current moment as an Instant (UTC, rendered with a ``+00:00`` suffix)."""
    elapsed = datetime.now(UTC) - _EPOCH
    return Instant(
        seconds=elapsed.days * 86_400 + elapsed.seconds,
        nanos=elapsed.microseconds * 1000,
        offset_minutes=0,
    )


def local_wall_clock() -> tuple[int, int]:
    """Current local ``(hour, minute)`` for same-day clock ranges."""
    now = datetime.now().astimezone()
    return now.hour, now.minute
