"""Value types flowing through the parse → normalize → compute pipeline.

INVARIANT: ``nanos`` is always in ``[0, NANOS_PER_SECOND)``, whatever the
sign of ``seconds``. A span of -1.5s is ``seconds=-2, nanos=500_000_000``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tdcalc.domain.calendar import NANOS_PER_SECOND
from tdcalc.domain.errors import ArithmeticReason, DurationArithmeticError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Duration:
    """Signed elapsed span: whole seconds plus a non-negative nanosecond remainder."""

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos must be in [0, 1e9), got {self.nanos}")
        if not INT64_MIN <= self.seconds <= INT64_MAX:
            raise DurationArithmeticError(
                ArithmeticReason.OVERFLOW,
                "duration exceeds the signed 64-bit second range",
            )

    @classmethod
    def from_nanos(cls, total_nanos: int, *, text: str = "") -> Duration:
        """Build a Duration from a signed nanosecond count (range checked)."""
        seconds, nanos = divmod(total_nanos, NANOS_PER_SECOND)
        if not INT64_MIN <= seconds <= INT64_MAX:
            raise DurationArithmeticError(
                ArithmeticReason.OVERFLOW,
                "duration exceeds the signed 64-bit second range",
                text=text,
            )
        return cls(seconds, nanos)

    @property
    def total_nanos(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    @property
    def is_negative(self) -> bool:
        return self.seconds < 0


@dataclass(frozen=True)
class Instant:
    """Absolute point in time relative to 1970-01-01T00:00:00Z.

    ``offset_minutes`` is the UTC offset the instant was written in, kept
    only for display. It takes no part in equality or ordering: the same
    moment written in two offsets compares equal.
    """

    seconds: int
    nanos: int = 0
    offset_minutes: int | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos must be in [0, 1e9), got {self.nanos}")

    @property
    def total_nanos(self) -> int:
        return self.seconds * NANOS_PER_SECOND + self.nanos

    @property
    def local_seconds(self) -> int:
        """Wall-clock seconds in the instant's own offset."""
        return self.seconds + (self.offset_minutes or 0) * 60


@dataclass(frozen=True)
class CalendarFields:
    """Human calendar reading of a timestamp, before normalization."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0
    offset_minutes: int | None = None


@dataclass(frozen=True)
class FormattedResult:
    """Unit breakdown of a Duration's magnitude plus its rendered string."""

    negative: bool
    days: int
    hours: int
    minutes: int
    seconds: int
    nanos: int
    display: str

    def breakdown(self) -> dict[str, int | bool]:
        return {
            "negative": self.negative,
            "days": self.days,
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "nanos": self.nanos,
        }
