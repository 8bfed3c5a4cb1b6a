# splits_MultiTimerReader/parsers/llanfair_parser.py
from __future__ import annotations

from ..core.errors import CorruptData, FormatMismatch, TruncatedData
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.segments import (
    MIN_BINARY_RECORD, TC_OBJECT, ByteCursor, build_segments, decode_binary_record,
)
from .base import SplitParser

STREAM_MAGIC = b"\xac\xed\x00\x05"
TC_CLASSDESC = 0x72
RUN_CLASS = "org.fenix.llanfair.Run"


class LlanfairParser(SplitParser):
    """
    Llanfair .lfs files: a Java object stream holding one Run.

    Fixed header: magic, TC_OBJECT, TC_CLASSDESC, class name, 8-byte serial
    UID. Body: title, goal, i32 attempts, i64 start delay (ms), i32 segment
    count, then the segment records.
    """

    program = ProgramId.LLANFAIR

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        if not data.startswith(STREAM_MAGIC):
            raise FormatMismatch("missing Java stream magic")
        cur = ByteCursor(data, len(STREAM_MAGIC))
        cur.expect(TC_OBJECT, "run object")
        cur.expect(TC_CLASSDESC, "class descriptor")
        class_name = cur.take(cur.u16()).decode("utf-8")
        if class_name != RUN_CLASS:
            raise FormatMismatch(f"not a Llanfair run: {class_name}")
        cur.skip(8)  # serialVersionUID

        title = cur.java_string()
        cur.java_string()  # goal
        attempts = cur.i32()
        if attempts < 0:
            raise CorruptData(f"negative attempt count {attempts}")
        delay_ms = cur.i64()
        count = cur.i32()
        if count < 0:
            raise CorruptData(f"negative segment count {count}")
        if count * MIN_BINARY_RECORD > cur.remaining:
            raise TruncatedData(f"{count} segments cannot fit in {cur.remaining} bytes")

        records = []
        offset = cur.offset
        for _ in range(count):
            rec, offset = decode_binary_record(data, offset, skip_name=mode is ParseMode.FAST)
            records.append(rec)

        return RunResult(
            program=self.program,
            name=title or None,
            attempts=attempts,
            offset=-delay_ms / 1000 if delay_ms else 0.0,
            segments=build_segments(records, cumulative=False),
        )
