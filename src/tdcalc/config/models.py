"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tdcalc.toml only contains
overrides. No section is required.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Meridiem = Literal["AM", "PM"]


class ClockConfig(BaseModel):
    """[clock] section — meridiems assumed for times written without AM/PM."""

    model_config = {"frozen": True}

    implicit_start: Meridiem = "AM"
    implicit_end: Meridiem = "PM"


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    hours_precision: int = Field(default=2, ge=0, le=9)


class BatchConfig(BaseModel):
    """[batch] section."""

    model_config = {"frozen": True}

    fail_fast: bool = False
