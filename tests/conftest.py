"""Shared pytest fixtures for tdcalc tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from tdcalc.config.settings import TdcalcSettings
from tdcalc.domain.normalizer import normalize
from tdcalc.domain.parser import parse_timestamp
from tdcalc.domain.types import Instant
from tdcalc.services.duration import DurationService
from tdcalc.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Run every test from an empty directory, free of TDCALC_* env vars.

    Also restores the root logger and telemetry state, which the CLI
    reconfigures on every invocation.
    """
    for name in list(os.environ):
        if name.startswith("TDCALC_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    tdcalc_level = logging.getLogger("tdcalc").level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    logging.getLogger("tdcalc").setLevel(tdcalc_level)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> TdcalcSettings:
    """Settings with code defaults only."""
    return TdcalcSettings.from_cli(search_from=tmp_path)


@pytest.fixture
def service(settings: TdcalcSettings) -> DurationService:
    return DurationService(settings)


def _instant(text: str) -> Instant:
    return normalize(parse_timestamp(text), text=text)


@pytest.fixture
def at() -> Callable[[str], Instant]:
    """Parse-and-normalize helper for building Instants from timestamps."""
    return _instant
