"""Line reader -- supplies raw input lines with their 1-based numbers.

The reader owns the line counter.  Every physical line advances it,
including comment and blank lines that are skipped, so diagnostics refer
to positions in the original input.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TextIO

from polycalc.config.models import InputConfig


@dataclass(frozen=True)
class RawLine:
    """One input line with its trailing newline stripped."""

    line_no: int
    text: str
    skipped: bool = False


class LineReader:
    """Iterate a text stream as :class:`RawLine` records.

    Usage::

        for raw in LineReader(sys.stdin, settings.input):
            if not raw.skipped:
                parse_line(raw.text, raw.line_no)
    """

    def __init__(self, stream: TextIO, config: InputConfig | None = None) -> None:
        self._stream = stream
        self._config = config or InputConfig()

    def _is_skipped(self, text: str) -> bool:
        prefix = self._config.comment_prefix
        if prefix and text.startswith(prefix):
            return True
        return self._config.skip_blank and text == ""

    def __iter__(self) -> Iterator[RawLine]:
        for line_no, line in enumerate(self._stream, start=1):
            text = line[:-1] if line.endswith("\n") else line
            yield RawLine(line_no=line_no, text=text, skipped=self._is_skipped(text))
