# splits_MultiTimerReader/core/segments.py
"""
Per-segment record decoding shared by the format parsers.

Every decoder takes a source plus an offset into it (a byte offset, a line
index or a node index), decodes one record and returns it together with the
offset of the next record. Running out of input raises TruncatedData, input
that is there but undecodable raises CorruptData.
"""
from __future__ import annotations
import struct
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Sequence
import xml.etree.ElementTree as ET

from .errors import CorruptData, TruncatedData
from .model import Segment
from .normalize import millis_to_seconds, nonzero, parse_clock, to_float

# Java object stream tags used by Llanfair files
TC_NULL = 0x70
TC_OBJECT = 0x73
TC_STRING = 0x74

# smallest possible binary segment record: marker + three TC_NULLs
MIN_BINARY_RECORD = 4


@dataclass(frozen=True)
class SegmentRecord:
    name: str
    time: Decimal | None               # as stored: cumulative or per-segment
    best: Decimal | None
    history: tuple[Decimal, ...] = ()


@dataclass(frozen=True)
class RowLayout:
    """Column positions of a delimited split row."""
    name: int = 0
    time: int = 1
    best: int = 2

    @property
    def width(self) -> int:
        return max(self.name, self.time, self.best) + 1


# ---------- binary (length-prefixed strings, tagged times) ----------
class ByteCursor:
    def __init__(self, data: bytes, offset: int = 0):
        self.data = data
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def take(self, n: int) -> bytes:
        if n < 0 or n > self.remaining:
            raise TruncatedData(f"need {n} bytes at offset {self.offset}, have {self.remaining}")
        chunk = self.data[self.offset:self.offset + n]
        self.offset += n
        return chunk

    def skip(self, n: int) -> None:
        self.take(n)

    def _unpack(self, fmt: str, size: int):
        return struct.unpack(fmt, self.take(size))[0]

    def u8(self) -> int:
        return self._unpack(">B", 1)

    def u16(self) -> int:
        return self._unpack(">H", 2)

    def i32(self) -> int:
        return self._unpack(">i", 4)

    def i64(self) -> int:
        return self._unpack(">q", 8)

    def expect(self, tag: int, what: str) -> None:
        at = self.offset
        got = self.u8()
        if got != tag:
            raise CorruptData(f"expected {what} (0x{tag:02x}) at offset {at}, got 0x{got:02x}")

    def java_string(self, skip: bool = False) -> str | None:
        """TC_STRING + u16 length + UTF-8, or TC_NULL. With skip=True the bytes are stepped over."""
        at = self.offset
        tag = self.u8()
        if tag == TC_NULL:
            return None
        if tag != TC_STRING:
            raise CorruptData(f"expected string at offset {at}, got 0x{tag:02x}")
        raw = self.take(self.u16())
        if skip:
            return ""
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise CorruptData(f"undecodable string at offset {at}") from None

    def java_millis(self) -> Decimal | None:
        """TC_NULL for "no time", else TC_OBJECT + i64 milliseconds."""
        at = self.offset
        tag = self.u8()
        if tag == TC_NULL:
            return None
        if tag != TC_OBJECT:
            raise CorruptData(f"expected time at offset {at}, got 0x{tag:02x}")
        ms = self.i64()
        if ms < 0:
            raise CorruptData(f"negative time {ms}ms at offset {at}")
        return millis_to_seconds(ms)


def decode_binary_record(data: bytes, offset: int, skip_name: bool = False) -> tuple[SegmentRecord, int]:
    cur = ByteCursor(data, offset)
    cur.expect(TC_OBJECT, "segment")
    name = cur.java_string(skip=skip_name) or ""
    best = cur.java_millis()
    time = cur.java_millis()
    return SegmentRecord(name=name, time=time, best=best), cur.offset


# ---------- delimited text rows ----------
def decode_delimited_record(lines: Sequence[str], offset: int, *,
                            sep: str,
                            parse_time: Callable[[str], Decimal | None],
                            columns: RowLayout = RowLayout(),
                            unescape: Callable[[str], str] | None = None,
                            from_right: bool = False) -> tuple[SegmentRecord, int]:
    """
    Decode the next non-blank row at or after ``offset``.
    Zero times are read as "not recorded" for both the split and the best.
    With ``from_right`` the row is split from the right so the leading name
    column may itself contain the separator.
    """
    idx = offset
    while idx < len(lines) and not lines[idx].strip():
        idx += 1
    if idx >= len(lines):
        raise TruncatedData(f"no split row at or after line {offset}")

    row = lines[idx].rstrip("\r\n")
    fields = row.rsplit(sep, columns.width - 1) if from_right else row.split(sep)
    if len(fields) < columns.width:
        raise CorruptData(f"line {idx}: expected {columns.width} fields, got {len(fields)}")
    name = fields[columns.name].strip()
    if unescape is not None:
        name = unescape(name)
    time = nonzero(parse_time(fields[columns.time]))
    best = nonzero(parse_time(fields[columns.best]))
    return SegmentRecord(name=name, time=time, best=best), idx + 1


# ---------- tagged XML nodes ----------
def timed_text(el: ET.Element | None, timing_method: str) -> str | None:
    """
    Text of a LiveSplit time element: <X><RealTime>..</RealTime></X>, or the
    older form where the real time is the element's own text.
    """
    if el is None:
        return None
    child = el.find(timing_method)
    if child is not None:
        return child.text
    if len(el) == 0 and timing_method == "RealTime":
        return el.text
    return None


def _personal_best_split(node: ET.Element) -> ET.Element | None:
    for split_time in node.iterfind("SplitTimes/SplitTime"):
        if split_time.get("name") == "Personal Best":
            return split_time
    # files without named comparisons keep a bare <SplitTime>
    return node.find("SplitTime")


def decode_xml_record(nodes: Sequence[ET.Element], offset: int, *,
                      timing_method: str = "RealTime",
                      skip_history: bool = False) -> tuple[SegmentRecord, int]:
    if offset >= len(nodes):
        raise TruncatedData(f"no segment node at index {offset}")
    node = nodes[offset]
    if node.tag != "Segment":
        raise CorruptData(f"expected <Segment>, got <{node.tag}>")

    name = (node.findtext("Name") or "").strip()
    time = parse_clock(timed_text(_personal_best_split(node), timing_method))
    best = parse_clock(timed_text(node.find("BestSegmentTime"), timing_method))

    history: tuple[Decimal, ...] = ()
    if not skip_history:
        values = []
        for entry in node.iterfind("SegmentHistory/Time"):
            value = parse_clock(timed_text(entry, timing_method))
            if value is not None and value >= 0:
                values.append(value)
        history = tuple(values)

    return SegmentRecord(name=name, time=time, best=best, history=history), offset + 1


# ---------- records -> segments ----------
def build_segments(records: Sequence[SegmentRecord], cumulative: bool) -> tuple[Segment, ...]:
    """
    Turn stored records into Segments. With cumulative split times each
    duration is the difference to the last recorded split; a record without a
    time is a skipped split (zero duration) and the next recorded split
    absorbs its time.
    """
    segments: list[Segment] = []
    previous = Decimal(0)
    for rec in records:
        if rec.time is None:
            duration = Decimal(0)
        elif cumulative:
            duration = rec.time - previous
            previous = rec.time
        else:
            duration = rec.time
        if duration < 0:
            raise CorruptData(f"segment {rec.name!r} ends before the previous one")
        if rec.best is not None and rec.best < 0:
            raise CorruptData(f"segment {rec.name!r} has a negative best")
        segments.append(Segment(
            name=rec.name,
            duration=to_float(duration),
            best=to_float(rec.best),
            history=tuple(to_float(h) for h in rec.history),
        ))
    return tuple(segments)
