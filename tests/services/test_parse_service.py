"""Tests for ParseService."""

from __future__ import annotations

import json
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from polycalc.config.settings import PolycalcSettings
from polycalc.services.parse import ParseService

if TYPE_CHECKING:
    from tests.conftest import DiagnosticCollector

SAMPLE = """\
# sample session
(1,2)+(3,0)
5

DEG_BY 2
AT -7
(1,2)+
COMPOSE abc
ADD
"""


class _BrokenStream(StringIO):
    def __iter__(self):  # type: ignore[override]
        raise OSError("device not ready")


class TestParseStream:
    def test_items_and_rejections(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector
    ) -> None:
        result = ParseService(settings, collect_diagnostics).parse_stream(StringIO(SAMPLE))
        assert result.ok
        assert result.op == "parse"
        items = result.data["items"]
        assert [item["line"] for item in items] == [2, 3, 5, 6, 9]
        assert items[1] == {"line": 3, "kind": "poly", "value": "5"}
        assert items[2] == {"line": 5, "kind": "command", "value": "DEG_BY", "arg": 2}
        assert items[3] == {"line": 6, "kind": "command", "value": "AT", "arg": -7}
        assert items[4] == {"line": 9, "kind": "command", "value": "ADD"}
        assert items[0]["value"] == "(3,0)+(1,2)"

    def test_diagnostics_reported_in_order(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector
    ) -> None:
        result = ParseService(settings, collect_diagnostics).parse_stream(StringIO(SAMPLE))
        assert collect_diagnostics.lines == [
            "ERROR 7 WRONG POLY",
            "ERROR 8 COMPOSE WRONG PARAMETER",
        ]
        assert result.data["rejected"] == [
            {"line": 7, "message": "WRONG POLY"},
            {"line": 8, "message": "COMPOSE WRONG PARAMETER"},
        ]

    def test_counts(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector
    ) -> None:
        result = ParseService(settings, collect_diagnostics).parse_stream(StringIO(SAMPLE))
        assert result.data["counts"] == {"total": 9, "accepted": 5, "rejected": 2, "skipped": 2}
        assert "skipped" not in result.data

    def test_show_skipped(self, collect_diagnostics: DiagnosticCollector) -> None:
        settings = PolycalcSettings(output={"show_skipped": True})
        result = ParseService(settings, collect_diagnostics).parse_stream(StringIO(SAMPLE))
        assert result.data["skipped"] == [1, 4]

    def test_blank_lines_parsed_when_not_skipped(
        self, collect_diagnostics: DiagnosticCollector
    ) -> None:
        settings = PolycalcSettings(input={"skip_blank": False})
        ParseService(settings, collect_diagnostics).parse_stream(StringIO("\nADD\n"))
        assert collect_diagnostics.lines == ["ERROR 1 WRONG POLY"]

    def test_read_error(self, settings: PolycalcSettings) -> None:
        result = ParseService(settings, lambda _d: None).parse_stream(_BrokenStream())
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "READ_ERROR"

    def test_default_reporter_is_stderr(
        self, settings: PolycalcSettings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        ParseService(settings).parse_stream(StringIO("DEGREE\n"))
        assert "ERROR 1 WRONG COMMAND\n" in capsys.readouterr().err

    @pytest.mark.parametrize("depth", [260, 320, 450, 5000])
    def test_deeply_nested_lines(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector, depth: int
    ) -> None:
        text = "(" * depth + "1" + ",1)" * depth
        result = ParseService(settings, collect_diagnostics).parse_stream(StringIO(text + "\n"))
        assert result.ok
        assert result.data["items"] == [{"line": 1, "kind": "poly", "value": text}]
        assert collect_diagnostics.lines == []
        assert json.loads(result.model_dump_json())["data"]["items"][0]["value"] == text

    def test_stack_exhaustion_becomes_result(
        self, settings: PolycalcSettings, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def overflow(*_args: object) -> None:
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr("polycalc.services.parse.parse_line", overflow)
        result = ParseService(settings, lambda _d: None).parse_stream(StringIO("(1,1)\n"))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NESTING_ERROR"


class TestCheckStream:
    def test_clean_input(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector
    ) -> None:
        result = ParseService(settings, collect_diagnostics).check_stream(StringIO("ADD\n(1,1)\n"))
        assert result.ok
        assert result.op == "check"
        assert result.data == {
            "counts": {"total": 2, "accepted": 2, "rejected": 0, "skipped": 0}
        }

    def test_rejections_fail(
        self, settings: PolycalcSettings, collect_diagnostics: DiagnosticCollector
    ) -> None:
        result = ParseService(settings, collect_diagnostics).check_stream(StringIO(SAMPLE))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "REJECTED_LINES"
        assert result.error.message == "2 of 9 lines rejected"
        assert result.error.detail == {"lines": [7, 8]}
        assert len(collect_diagnostics.diagnostics) == 2
