"""Tests for the format_result dispatcher and OutputSettings."""

import json

from tdcalc.output.formatters import OutputSettings, format_result, render_quiet
from tdcalc.services.result import ServiceError, ServiceResult


def _ok(op: str = "calculate", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str = "calculate") -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(
            code="ParseError.OutOfRangeField",
            message="month 13 is outside 1..12",
            detail={"input": "2024-13-01", "fragment": "13", "exit_code": 1},
        ),
    )


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResultJSON:
    def test_json_mode_returns_valid_json(self) -> None:
        output = format_result(_ok(display="03m 00s"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["op"] == "calculate"
        assert data["data"]["display"] == "03m 00s"
        assert data["error"] is None

    def test_json_mode_error(self) -> None:
        data = json.loads(format_result(_err(), settings=OutputSettings(json_output=True)))
        assert data["ok"] is False
        assert data["error"]["code"] == "ParseError.OutOfRangeField"
        assert data["error"]["detail"]["fragment"] == "13"

    def test_json_beats_quiet(self) -> None:
        output = format_result(_ok(display="00s"), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["data"]["display"] == "00s"


class TestQuiet:
    def test_bare_value(self) -> None:
        assert render_quiet(_ok(display="-1d 02h 03m 04s")) == "-1d 02h 03m 04s"

    def test_batch_items(self) -> None:
        result = _ok(
            "batch",
            items=[
                {"line": 1, "ok": True, "display": "00s"},
                {"line": 2, "ok": False, "error": {}},
                {"line": 3, "ok": True, "display": "01h 00m 00s"},
            ],
        )
        assert render_quiet(result) == "00s\n01h 00m 00s"

    def test_error(self) -> None:
        output = format_result(_err(), settings=OutputSettings(quiet=True))
        assert output.startswith("ERROR: calculate")
        assert "ParseError.OutOfRangeField" in output


class TestHumanMode:
    def test_default_is_human(self) -> None:
        output = format_result(_ok(kind="duration", display="1d 03h 04m 05s"))
        assert output == "1d 03h 04m 05s"

    def test_error(self) -> None:
        output = format_result(_err())
        assert output.startswith("ERROR")
        assert "month 13 is outside 1..12" in output
