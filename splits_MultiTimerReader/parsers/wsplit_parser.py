# splits_MultiTimerReader/parsers/wsplit_parser.py
from __future__ import annotations
import re

from ..core.errors import FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.normalize import parse_count, parse_seconds, to_float
from ..core.segments import RowLayout, build_segments
from .base import SplitParser, decode_text
from .text_rows import decode_rows

_HEADER_RE = re.compile(r"^(?P<key>Title|Attempts|Offset|Size)=(?P<value>.*)$")
_ROW = RowLayout(name=0, time=2, best=3)   # name,old,pb,best


class WSplitParser(SplitParser):
    """
    WSplit files: Key=value header (Title first), comma rows, Icons= trailer.
    Offset is the start delay in milliseconds.
    """

    program = ProgramId.WSPLIT

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        lines = decode_text(data).splitlines()
        if not lines or not lines[0].startswith("Title="):
            raise FormatMismatch("first line is not Title=")

        header: dict[str, str] = {}
        idx = 0
        while idx < len(lines):
            m = _HEADER_RE.match(lines[idx].strip())
            if m is None:
                break
            header[m.group("key").lower()] = m.group("value").strip()
            idx += 1

        stop = next((i for i in range(idx, len(lines)) if lines[i].startswith("Icons=")), len(lines))
        records = decode_rows(lines, idx, stop, sep=",", parse_time=parse_seconds,
                              columns=_ROW, from_right=True)

        delay_ms = parse_seconds(header.get("offset"))
        return RunResult(
            program=self.program,
            name=header.get("title") or None,
            attempts=parse_count(header.get("attempts")),
            offset=None if delay_ms is None else to_float(0 - delay_ms / 1000),
            segments=build_segments(records, cumulative=True),
        )
