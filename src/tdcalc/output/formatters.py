"""Output-mode dispatch for ServiceResult.

JSON (``--json``) dumps the whole result; quiet (``-q``) prints the bare
value; the default human mode goes through the Rich renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from tdcalc.output.renderers import describe_error, render_result

if TYPE_CHECKING:
    from tdcalc.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output switches taken from the global CLI flags."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def render_quiet(result: ServiceResult) -> str:
    """Bare values only: one display string per line, or the error."""
    if not result.ok:
        return f"ERROR: {describe_error(result)}"
    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["display"]) for item in items if item.get("ok"))
    return str(result.data.get("display", ""))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display in the requested output mode."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
