"""Tests for the calc CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from tdcalc.cli import cli
from tdcalc.domain.types import Instant


class TestCalcCommand:
    def test_elapsed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-01-01T00:00:00", "2024-01-02T03:04:05"])
        assert result.exit_code == 0
        assert result.stdout == "1d 03h 04m 05s\n"

    def test_reversed(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-01-02T03:04:05", "2024-01-01T00:00:00"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "-1d 03h 04m 05s"

    def test_shift_keeps_offset(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-03-10T02:30:00-05:00", "+1d"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2024-03-11T02:30:00-05:00"

    def test_negative_duration_argument(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-06-01T12:00:00Z", "-1d2h30m"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2024-05-31T09:30:00+00:00"

    def test_space_separated_timestamp(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-01-01 00:00", "2024-01-01 00:03"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "03m 00s"

    def test_now_uses_system_clock(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            "tdcalc.services._helpers.utc_now_instant",
            lambda: Instant(1_704_110_400, offset_minutes=0),
        )
        result = cli_runner.invoke(cli, ["calc", "2024-01-01", "now"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "12h 00m 00s"

    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "calc", "2024-01-01", "2024-01-02T03:04:05"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "calculate"
        assert data["data"]["display"] == "1d 03h 04m 05s"
        assert data["data"]["breakdown"]["hours"] == 3

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "calc", "2024-01-01", "2024-01-01T00:00:05.5"])
        assert result.exit_code == 0
        assert result.stdout == "05.5s\n"

    def test_verbose_breakdown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-v", "calc", "2024-01-01", "2024-01-02T03:04:05"])
        assert result.exit_code == 0
        assert "1d 03h 04m 05s" in result.stdout
        assert "days" in result.stdout
        assert "total_seconds: 97445" in result.stdout
        assert "DurationService.calculate" in result.stdout
        assert "kind=duration" in result.stdout


class TestCalcErrors:
    def test_out_of_range_field(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-13-01", "2024-01-01"])
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "ParseError.OutOfRangeField" in result.stderr
        assert "'2024-13-01'" in result.stderr
        assert "at '13'" in result.stderr

    def test_invalid_calendar_date(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2023-02-29", "2024-01-01"])
        assert result.exit_code == 1
        assert "NormalizationError.InvalidCalendarDate" in result.stderr

    def test_unknown_unit(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-01-01", "3w"])
        assert result.exit_code == 1
        assert "ParseError.UnknownUnit" in result.stderr

    def test_overflow_exit_code(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "9999-12-31T23:59:59", "999999999999d"])
        assert result.exit_code == 2
        assert result.stdout == ""
        assert "DurationArithmeticError.Overflow" in result.stderr

    def test_json_error_on_stderr(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "calc", "2024-13-01", "2024-01-01"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["ok"] is False
        assert payload["error"]["code"] == "ParseError.OutOfRangeField"
        assert payload["error"]["detail"]["fragment"] == "13"

    def test_quiet_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "calc", "garbage", "1d"])
        assert result.exit_code == 1
        assert result.stderr.startswith("ERROR: calculate")

    def test_missing_argument_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["calc", "2024-01-01"])
        assert result.exit_code == 2
        assert "Missing argument" in result.stderr
