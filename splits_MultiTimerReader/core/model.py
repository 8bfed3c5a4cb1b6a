# splits_MultiTimerReader/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ProgramId(Enum):
    """Timer programs whose split files we understand (closed set)."""

    LLANFAIR = ("llanfair", "Llanfair", "lfs")
    URN = ("urn", "Urn", "json")
    LIVESPLIT = ("livesplit", "LiveSplit", "lss")
    SPLITTERZ = ("splitterz", "SplitterZ", "szs")
    TIMESPLITTRACKER = ("timesplittracker", "Time Split Tracker", "timesplittracker")
    WSPLIT = ("wsplit", "WSplit", "wsplit")

    def __init__(self, key: str, display_name: str, file_extension: str):
        self.key = key
        self.display_name = display_name
        self.file_extension = file_extension

    def __str__(self) -> str:
        return self.key

    @classmethod
    def lookup(cls, value) -> "ProgramId | None":
        """Resolve a member, its key ('livesplit') or its name ('LIVESPLIT'); None if unknown."""
        if isinstance(value, cls):
            return value
        if value is None:
            return None
        s = str(value).strip().lower()
        for member in cls:
            if s in (member.key, member.name.lower()):
                return member
        return None


class ParseMode(Enum):
    FAST = "fast"         # totals + metadata, per-segment detail may be skipped
    FULL = "full"         # every segment and every optional field
    CONVERT = "convert"   # FULL depth, own cache slot, never persisted

    @property
    def decode_depth(self) -> "ParseMode":
        return ParseMode.FAST if self is ParseMode.FAST else ParseMode.FULL


@dataclass(frozen=True)
class Segment:
    name: str
    duration: float                    # seconds, >= 0
    best: float | None = None          # best-ever segment duration
    history: tuple[float, ...] = ()    # per-segment attempt history (full parses only)


@dataclass(frozen=True)
class RunResult:
    program: ProgramId | None = None
    name: str | None = None
    game_name: str | None = None
    category_name: str | None = None
    attempts: int | None = None
    srdc_id: str | None = None
    offset: float | None = None        # seconds; negative = start delay
    segments: tuple[Segment, ...] = ()
    history: tuple[float, ...] = ()    # completed attempt times
    # derived by the coordinator
    total_time: float = 0.0
    sum_of_best: float | None = None

    @property
    def matched(self) -> bool:
        return self.program is not None


EMPTY_RESULT = RunResult()
