# splits_MultiTimerReader/core/registry.py
from __future__ import annotations
from typing import Iterable, Iterator

from .model import ProgramId
from ..parsers.base import FormatParser
from ..parsers.livesplit_parser import LiveSplitParser
from ..parsers.llanfair_parser import LlanfairParser
from ..parsers.splitterz_parser import SplitterZParser
from ..parsers.timesplittracker_parser import TimeSplitTrackerParser
from ..parsers.urn_parser import UrnParser
from ..parsers.wsplit_parser import WSplitParser


class FormatRegistry:
    """
    Ordered, immutable list of parsers used for format detection.
    Order is priority: the first parser that returns a result wins, so
    reordering changes which program ambiguous files are attributed to.
    """

    def __init__(self, parsers: Iterable[FormatParser]):
        parsers = tuple(parsers)
        seen: set[ProgramId] = set()
        for p in parsers:
            if p.program in seen:
                raise ValueError(f"duplicate parser for {p.program.key}")
            seen.add(p.program)
        self._parsers = parsers

    def supported_programs(self) -> tuple[ProgramId, ...]:
        return tuple(p.program for p in self._parsers)

    def get(self, program: ProgramId | None) -> FormatParser | None:
        for p in self._parsers:
            if p.program is program:
                return p
        return None

    def __iter__(self) -> Iterator[FormatParser]:
        return iter(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def __contains__(self, program: object) -> bool:
        return any(p.program is program for p in self._parsers)

    def __repr__(self) -> str:
        return f"FormatRegistry({', '.join(p.key for p in self.supported_programs())})"


def build_registry(cfg: dict | None = None) -> FormatRegistry:
    """Default priority order, with the ``parsing`` config section applied."""
    parsing = (cfg or {}).get("parsing", {}) or {}
    timing_method = str(parsing.get("timing_method", "RealTime"))
    return FormatRegistry([
        LlanfairParser(),
        UrnParser(),
        LiveSplitParser(timing_method=timing_method),
        SplitterZParser(),
        TimeSplitTrackerParser(),
        WSplitParser(),
    ])


DEFAULT_REGISTRY = build_registry()
