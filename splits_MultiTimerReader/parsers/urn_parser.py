# splits_MultiTimerReader/parsers/urn_parser.py
from __future__ import annotations
import json

from ..core.errors import CorruptData, FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.normalize import nonzero, parse_clock, to_float
from ..core.segments import SegmentRecord, build_segments
from .base import SplitParser, decode_text


def _text(value) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise CorruptData(f"expected a string, got {type(value).__name__}")
    return value


class UrnParser(SplitParser):
    """Urn .json split files: cumulative PB split times plus best segments."""

    program = ProgramId.URN

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        try:
            doc = json.loads(decode_text(data))
        except RecursionError:
            raise CorruptData("JSON nested too deeply") from None
        if not isinstance(doc, dict) or not isinstance(doc.get("splits"), list):
            raise FormatMismatch("no 'splits' list in JSON object")

        attempts = doc.get("attempt_count")
        if attempts is not None and (isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 0):
            raise CorruptData(f"bad attempt_count {attempts!r}")

        records = []
        for split in doc["splits"]:
            if not isinstance(split, dict):
                raise CorruptData("split entry is not an object")
            records.append(SegmentRecord(
                name=_text(split.get("title")) or "",
                time=nonzero(parse_clock(_text(split.get("time")))),
                best=nonzero(parse_clock(_text(split.get("best_segment")))),
            ))

        delay = parse_clock(_text(doc.get("start_delay")))
        return RunResult(
            program=self.program,
            name=_text(doc.get("title")) or None,
            attempts=attempts,
            offset=None if delay is None else to_float(0 - delay),
            segments=build_segments(records, cumulative=True),
        )
