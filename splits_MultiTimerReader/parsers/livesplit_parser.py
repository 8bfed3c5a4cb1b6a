# splits_MultiTimerReader/parsers/livesplit_parser.py
from __future__ import annotations
import logging
import xml.etree.ElementTree as ET

from ..core.errors import CorruptData, FormatMismatch
from ..core.model import ParseMode, ProgramId, RunResult
from ..core.normalize import parse_clock, parse_count, to_float
from ..core.segments import build_segments, decode_xml_record, timed_text
from .base import SplitParser

_LOG = logging.getLogger(__name__)

TIMING_METHODS = ("RealTime", "GameTime")


def _clean(text: str | None) -> str | None:
    s = (text or "").strip()
    return s or None


class LiveSplitParser(SplitParser):
    """
    LiveSplit .lss XML files.

    Split times are cumulative per timing method. In FAST mode segment and
    attempt histories are not decoded.
    """

    program = ProgramId.LIVESPLIT

    def __init__(self, timing_method: str = "RealTime"):
        if timing_method not in TIMING_METHODS:
            raise ValueError(f"unknown timing method {timing_method!r}; expected one of {TIMING_METHODS}")
        self.timing_method = timing_method

    def __repr__(self) -> str:
        return f"LiveSplitParser(timing_method={self.timing_method!r})"

    def _decode(self, data: bytes, mode: ParseMode) -> RunResult | None:
        root = ET.fromstring(data)
        if root.tag != "Run":
            raise FormatMismatch(f"root element is <{root.tag}>, not <Run>")
        segments_el = root.find("Segments")
        if segments_el is None:
            raise FormatMismatch("no <Segments> element")

        full = mode is ParseMode.FULL
        nodes = list(segments_el)
        records = []
        offset = 0
        while offset < len(nodes):
            rec, offset = decode_xml_record(nodes, offset,
                                            timing_method=self.timing_method,
                                            skip_history=not full)
            records.append(rec)

        game = _clean(root.findtext("GameName"))
        category = _clean(root.findtext("CategoryName"))
        srdc_run = root.find("Metadata/Run")
        offset_value = parse_clock(root.findtext("Offset"))

        history: tuple[float, ...] = ()
        if full:
            history = self._attempt_history(root)

        _LOG.debug("livesplit: %d segments, version %s", len(records), root.get("version", "?"))
        return RunResult(
            program=self.program,
            name=" ".join(p for p in (game, category) if p) or None,
            game_name=game,
            category_name=category,
            attempts=parse_count(root.findtext("AttemptCount")),
            srdc_id=None if srdc_run is None else _clean(srdc_run.get("id")),
            offset=to_float(offset_value),
            segments=build_segments(records, cumulative=True),
            history=history,
        )

    def _attempt_history(self, root: ET.Element) -> tuple[float, ...]:
        times = []
        for attempt in root.iterfind("AttemptHistory/Attempt"):
            value = parse_clock(timed_text(attempt, self.timing_method))
            if value is None:
                continue
            if value < 0:
                raise CorruptData(f"attempt {attempt.get('id')} has a negative time")
            times.append(float(value))
        return tuple(times)
