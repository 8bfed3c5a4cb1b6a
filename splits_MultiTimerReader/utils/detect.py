# splits_MultiTimerReader/utils/detect.py
from __future__ import annotations
from pathlib import Path
from dataclasses import dataclass

from ..core.model import ProgramId

_BY_EXTENSION = {f".{p.file_extension}": p for p in ProgramId}


@dataclass(frozen=True)
class DetectedItem:
    path: Path               # actual path on disk
    hint: ProgramId          # program usually writing this extension; the content decides


def extension_hint(p: Path) -> ProgramId | None:
    return _BY_EXTENSION.get(p.suffix.lower())


def discover_inputs(root: Path, recurse: bool = True) -> list[DetectedItem]:
    """
    If 'root' is a file -> return that one item (if its extension is known).
    If 'root' is a folder -> walk (optionally recursively) and collect split files.
    """
    items: list[DetectedItem] = []
    if root.is_file():
        hint = extension_hint(root)
        if hint is not None:
            items.append(DetectedItem(root.resolve(), hint))
        return items

    it = root.rglob("*") if recurse else root.glob("*")
    for p in it:
        if not p.is_file():
            continue
        hint = extension_hint(p)
        if hint is not None:
            items.append(DetectedItem(p.resolve(), hint))

    # deterministic ordering
    items.sort(key=lambda x: (x.hint.key, str(x.path)))
    return items
