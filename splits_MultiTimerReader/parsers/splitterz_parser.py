# splits_MultiTimerReader/parsers/splitterz_parser.py
from __future__ import annotations

from ..core.errors import FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.normalize import parse_clock, parse_count
from ..core.segments import build_segments
from .base import SplitParser, decode_text
from .text_rows import decode_rows

COMMA_ESCAPE = "‡"


def _unescape(s: str) -> str:
    return s.replace(COMMA_ESCAPE, ",")


class SplitterZParser(SplitParser):
    """
    SplitterZ .szs files.

        Title,Attempts[,...]
        Split name,cumulative time,best segment[,...]
    """

    program = ProgramId.SPLITTERZ

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        lines = decode_text(data).splitlines()
        if not lines:
            raise FormatMismatch("empty file")
        header = lines[0].split(",")
        if len(header) < 2:
            raise FormatMismatch("header is not 'title,attempts'")
        attempts = parse_count(header[1])
        if attempts is None:
            raise FormatMismatch("header has no attempt count")

        records = decode_rows(lines, 1, sep=",", parse_time=parse_clock, unescape=_unescape)
        return RunResult(
            program=self.program,
            name=_unescape(header[0].strip()) or None,
            attempts=attempts,
            segments=build_segments(records, cumulative=True),
        )
