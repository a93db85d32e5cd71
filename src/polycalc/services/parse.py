"""ParseService -- run the line parser over a whole input stream.

Lines are processed strictly in order: each one is read, parsed, and its
diagnostic (if any) reported before the next line is read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TextIO

import structlog

from polycalc.config.logging import input_context, line_context
from polycalc.infrastructure.reader import LineReader
from polycalc.parsing.lines import Reporter, parse_line, report_to_stderr
from polycalc.parsing.types import Invalid
from polycalc.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from polycalc.config.settings import PolycalcSettings
    from polycalc.parsing.errors import Diagnostic

log = structlog.get_logger(__name__)


@dataclass
class _Tally:
    items: list[dict[str, Any]] = field(default_factory=list)
    rejected: list[dict[str, Any]] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)
    total: int = 0

    def counts(self) -> dict[str, int]:
        return {
            "total": self.total,
            "accepted": len(self.items),
            "rejected": len(self.rejected),
            "skipped": len(self.skipped),
        }


class ParseService:
    """Parse every line of a stream and summarize the outcome.

    Args:
        settings: Supplies the ``[input]`` reader options.
        report: Receives each diagnostic as soon as its line is rejected.
            Defaults to writing ``ERROR <n> <message>`` to stderr.
    """

    def __init__(self, settings: PolycalcSettings, report: Reporter | None = None) -> None:
        self._settings = settings
        self._report = report or report_to_stderr

    def _run(self, stream: TextIO) -> _Tally:
        tally = _Tally()

        def forward(diagnostic: Diagnostic) -> None:
            tally.rejected.append(diagnostic.to_dict())
            self._report(diagnostic)

        with input_context(getattr(stream, "name", "<stream>")):
            for raw in LineReader(stream, self._settings.input):
                tally.total += 1
                if raw.skipped:
                    tally.skipped.append(raw.line_no)
                    continue
                with line_context(raw.line_no):
                    parsed = parse_line(raw.text, raw.line_no, forward)
                if not isinstance(parsed, Invalid):
                    tally.items.append({"line": raw.line_no, **parsed.to_dict()})

            log.debug("stream parsed", **tally.counts())
        return tally

    def _collect(self, op: str, stream: TextIO) -> _Tally | ServiceResult:
        try:
            return self._run(stream)
        except (OSError, UnicodeDecodeError) as exc:
            return _read_failure(op, exc)
        except RecursionError:
            log.error("input exhausted the call stack", op=op)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="NESTING_ERROR", message="Input nested too deeply"),
            )

    def parse_stream(self, stream: TextIO) -> ServiceResult:
        """Parse all lines; accepted ones are returned in ``data["items"]``."""
        tally = self._collect("parse", stream)
        if isinstance(tally, ServiceResult):
            return tally

        data: dict[str, Any] = {
            "items": tally.items,
            "rejected": tally.rejected,
            "counts": tally.counts(),
        }
        if self._settings.output.show_skipped:
            data["skipped"] = tally.skipped
        return ServiceResult(ok=True, op="parse", data=data)

    def check_stream(self, stream: TextIO) -> ServiceResult:
        """Validate all lines; fails with ``REJECTED_LINES`` if any is rejected."""
        tally = self._collect("check", stream)
        if isinstance(tally, ServiceResult):
            return tally

        counts = tally.counts()
        if tally.rejected:
            return ServiceResult(
                ok=False,
                op="check",
                data={"counts": counts},
                error=ServiceError(
                    code="REJECTED_LINES",
                    message=f"{counts['rejected']} of {counts['total']} lines rejected",
                    detail={"lines": [r["line"] for r in tally.rejected]},
                ),
            )
        return ServiceResult(ok=True, op="check", data={"counts": counts})


def _read_failure(op: str, exc: Exception) -> ServiceResult:
    log.warning("input read failed", op=op, error=str(exc))
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code="READ_ERROR", message=f"Cannot read input: {exc}"),
    )
