"""BaseService — shared foundation for tdcalc services.

Services receive only frozen configuration at construction time and keep
no state between calls, so one instance may serve any number of
independent computations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tdcalc.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from tdcalc.config.settings import TdcalcSettings
    from tdcalc.domain.errors import EngineError

logger = logging.getLogger(__name__)


def error_from_exception(exc: EngineError) -> ServiceError:
    """Convert an engine exception into a structured ServiceError."""
    return ServiceError(
        code=exc.code,
        message=exc.message,
        detail={
            "kind": exc.kind,
            "reason": str(exc.reason),
            "input": exc.text,
            "fragment": exc.fragment,
            "exit_code": exc.exit_code,
        },
    )


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DurationService(BaseService):
            def calculate(self, first: str, second: str) -> ServiceResult:
                try:
                    ...
                except EngineError as exc:
                    return self._failure("calculate", exc)
    """

    def __init__(self, settings: TdcalcSettings) -> None:
        self._settings = settings

    def _failure(self, op: str, exc: EngineError) -> ServiceResult:
        logger.debug("%s failed: %s", op, exc)
        return ServiceResult(ok=False, op=op, error=error_from_exception(exc))
