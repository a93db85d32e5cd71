"""Tests for the format_result dispatcher and renderers."""

import json

from polycalc.output.formatters import OutputSettings, format_result
from polycalc.services.result import ServiceError, ServiceResult

_COUNTS = {"total": 3, "accepted": 2, "rejected": 1, "skipped": 0}


def _parsed() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="parse",
        data={
            "items": [
                {"line": 1, "kind": "poly", "value": "(3,0)+(1,2)"},
                {"line": 3, "kind": "command", "value": "AT", "arg": -7},
            ],
            "rejected": [{"line": 2, "message": "WRONG POLY"}],
            "counts": _COUNTS,
        },
    )


def _failed() -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="check",
        data={"counts": _COUNTS},
        error=ServiceError(code="REJECTED_LINES", message="1 of 3 lines rejected"),
    )


class TestJsonMode:
    def test_round_trips_result(self) -> None:
        output = format_result(_parsed(), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["items"][1]["arg"] == -7

    def test_json_wins_over_quiet(self) -> None:
        output = format_result(_parsed(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(output)["op"] == "parse"


class TestHumanMode:
    def test_parse_table(self) -> None:
        output = format_result(_parsed())
        assert output.startswith("OK")
        assert "parse" in output
        assert "(3,0)+(1,2)" in output
        assert "AT -7" in output
        assert "rejected=1" in output

    def test_check_summary(self) -> None:
        result = ServiceResult(ok=True, op="check", data={"counts": _COUNTS})
        output = format_result(result)
        assert "accepted=2" in output

    def test_error(self) -> None:
        output = format_result(_failed())
        assert output.startswith("ERROR")
        assert "1 of 3 lines rejected" in output

    def test_unknown_op_uses_generic(self) -> None:
        output = format_result(ServiceResult(ok=True, op="other", data={"k": "v"}))
        assert "k: v" in output


class TestQuietMode:
    def test_one_value_per_line(self) -> None:
        output = format_result(_parsed(), settings=OutputSettings(quiet=True))
        assert output.splitlines() == ["(3,0)+(1,2)", "AT -7"]

    def test_plain_command(self) -> None:
        result = ServiceResult(
            ok=True, op="parse", data={"items": [{"line": 1, "kind": "command", "value": "ADD"}]}
        )
        assert format_result(result, settings=OutputSettings(quiet=True)) == "ADD"

    def test_no_items(self) -> None:
        result = ServiceResult(ok=True, op="check", data={"counts": _COUNTS})
        assert format_result(result, settings=OutputSettings(quiet=True)) == "OK: check"

    def test_error(self) -> None:
        output = format_result(_failed(), settings=OutputSettings(quiet=True))
        assert output == "ERROR: check - 1 of 3 lines rejected"
