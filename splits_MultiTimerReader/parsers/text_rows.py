# splits_MultiTimerReader/parsers/text_rows.py
from __future__ import annotations
from typing import Sequence

from ..core.errors import FormatMismatch
from ..core.segments import SegmentRecord, decode_delimited_record


def decode_rows(lines: Sequence[str], start: int, stop: int | None = None, **layout) -> list[SegmentRecord]:
    """Decode every non-blank split row in lines[start:stop]; at least one is required."""
    stop = len(lines) if stop is None else stop
    window = list(lines[:stop])
    last = max((i for i in range(start, stop) if window[i].strip()), default=None)
    if last is None:
        raise FormatMismatch("no split rows")
    records = []
    offset = start
    while offset <= last:
        rec, offset = decode_delimited_record(window, offset, **layout)
        records.append(rec)
    return records
