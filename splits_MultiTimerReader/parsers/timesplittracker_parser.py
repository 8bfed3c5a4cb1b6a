# splits_MultiTimerReader/parsers/timesplittracker_parser.py
from __future__ import annotations

from ..core.errors import FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.normalize import parse_count, parse_seconds, to_float
from ..core.segments import build_segments
from .base import SplitParser, decode_text
from .text_rows import decode_rows


class TimeSplitTrackerParser(SplitParser):
    """
    Time Split Tracker files, tab separated:

        attempts  offset
        title     [image]
        split     cumulative_seconds  best_segment_seconds  [...]
    """

    program = ProgramId.TIMESPLITTRACKER

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        lines = decode_text(data).splitlines()
        if len(lines) < 3:
            raise FormatMismatch("need header, title and at least one split line")
        header = lines[0].split("\t")
        if len(header) < 2:
            raise FormatMismatch("first line is not 'attempts<TAB>offset'")
        attempts = parse_count(header[0])
        if attempts is None:
            raise FormatMismatch("first line has no attempt count")
        offset = parse_seconds(header[1])
        title = lines[1].split("\t")[0].strip()

        records = decode_rows(lines, 2, sep="\t", parse_time=parse_seconds)
        return RunResult(
            program=self.program,
            name=title or None,
            attempts=attempts,
            offset=to_float(offset),
            segments=build_segments(records, cumulative=True),
        )
