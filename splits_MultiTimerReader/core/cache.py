# splits_MultiTimerReader/core/cache.py
from __future__ import annotations
from dataclasses import dataclass, field

from .model import ParseMode, RunResult


class ParseCache:
    """
    Memo of parse results for one RawSplitFile, one slot per ParseMode.
    Slots fill lazily and live as long as the owning handle; nothing expires.
    No locking: concurrent writers to the same slot simply overwrite each other.
    """

    def __init__(self) -> None:
        self._slots: dict[ParseMode, RunResult] = {}

    def get(self, mode: ParseMode) -> RunResult | None:
        return self._slots.get(mode)

    def store(self, mode: ParseMode, result: RunResult) -> None:
        self._slots[mode] = result

    def __contains__(self, mode: ParseMode) -> bool:
        return mode in self._slots

    def __len__(self) -> int:
        return len(self._slots)


@dataclass(frozen=True, eq=False)
class RawSplitFile:
    data: bytes
    digest: str | None = None          # assigned by whoever stores the blob
    cache: ParseCache = field(default_factory=ParseCache, repr=False)

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    def __len__(self) -> int:
        return len(self.data)
