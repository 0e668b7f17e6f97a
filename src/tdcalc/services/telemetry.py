"""Per-call timing for DurationService, shown under ``--verbose``.

A ``@traced`` service method opens a root span; ``trace_span`` opens the
parse / normalize / compute stages beneath it. Stages may carry notes
(the kind of value computed, how many batch lines failed). The finished
tree lands in ``ServiceResult.meta["telemetry"]``.

While tracing is off every helper costs one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from tdcalc.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """One timed stage of a service call."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def end(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, **notes: Any) -> None:
        self.annotations.update(notes)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 3)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a stage under the active service call.

    Yields None outside a traced call, so callers guard with ``if span:``
    before annotating.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return

    stage = Span(name=name)
    parent.children.append(stage)
    token = _current_span.set(stage)
    try:
        yield stage
    finally:
        stage.end()
        _current_span.reset(token)


def _log_span(span: Span) -> None:
    structlog.get_logger("tdcalc.telemetry").debug(
        "service.timed",
        call=span.name,
        duration_ms=round(span.duration_ms, 3),
        stages=[child.name for child in span.children],
        **span.annotations,
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach its span tree to the returned result.

    The root span is annotated with the result's ``ok`` flag and, on
    failure, its error code.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _current_span.set(root)
        try:
            result = func(*args, **kwargs)
        except Exception:
            root.end()
            _current_span.reset(token)
            root.annotate(ok=False)
            _log_span(root)
            raise
        root.end()
        _current_span.reset(token)

        if not isinstance(result, ServiceResult):
            _log_span(root)
            return result
        root.annotate(ok=result.ok)
        if result.error is not None:
            root.annotate(code=result.error.code)
        _log_span(root)
        meta = {**(result.meta or {}), "telemetry": root.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)
