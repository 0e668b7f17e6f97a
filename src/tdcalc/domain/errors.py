"""Exception hierarchy for the duration engine.

Three terminal failure kinds, each carrying a reason code, the full
input text and the offending fragment of it:

- ParseError: the text does not follow a recognized grammar.
- NormalizationError: well-formed, but calendrically impossible.
- DurationArithmeticError: the result leaves the representable range.

The CLI maps parse/normalization failures to exit code 1 and arithmetic
failures to exit code 2.
"""

from __future__ import annotations

from enum import StrEnum


class ParseReason(StrEnum):
    EMPTY_INPUT = "EmptyInput"
    MALFORMED_DATE = "MalformedDate"
    MALFORMED_TIME = "MalformedTime"
    UNKNOWN_UNIT = "UnknownUnit"
    OUT_OF_RANGE_FIELD = "OutOfRangeField"
    AMBIGUOUS_RANGE = "AmbiguousRange"


class NormalizationReason(StrEnum):
    INVALID_CALENDAR_DATE = "InvalidCalendarDate"
    INVALID_OFFSET = "InvalidOffset"
    INVALID_RANGE = "InvalidRange"


class ArithmeticReason(StrEnum):
    OVERFLOW = "Overflow"


class EngineError(Exception):
    """Base exception for every engine failure.

    Attributes:
        reason: Machine-readable reason code.
        text: The complete text that was being processed.
        fragment: The offending substring of *text* (may equal it).
    """

    kind = "engine"
    exit_code = 1

    def __init__(
        self,
        reason: StrEnum,
        message: str,
        *,
        text: str = "",
        fragment: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.text = text
        self.fragment = text if fragment is None else fragment

    @property
    def code(self) -> str:
        return f"{type(self).__name__}.{self.reason}"

    def __str__(self) -> str:
        if self.fragment:
            return f"{self.code}: {self.message} (at {self.fragment!r})"
        return f"{self.code}: {self.message}"


class ParseError(EngineError):
    """Raised when input text does not match any recognized grammar."""

    kind = "parse"


class NormalizationError(EngineError):
    """Raised when parsed fields describe an impossible point in time."""

    kind = "normalization"


class DurationArithmeticError(EngineError):
    """Raised when a computed value leaves the representable range."""

    kind = "arithmetic"
    exit_code = 2
