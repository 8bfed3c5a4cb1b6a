# splits_MultiTimerReader/core/convert.py
from __future__ import annotations
import json
from decimal import Decimal
from typing import Callable

from .model import ProgramId, RunResult


def filename(stem: str, program: ProgramId) -> str:
    return f"{stem}.{program.file_extension}"


def _exact(seconds: float) -> Decimal:
    # shortest repr keeps what the source file had (85.7, not 85.69999...)
    return Decimal(repr(seconds))


def _cumulative(result: RunResult) -> list[Decimal]:
    out, running = [], Decimal(0)
    for seg in result.segments:
        running += _exact(seg.duration)
        out.append(running)
    return out


def _clock(value: Decimal | None) -> str:
    if value is None:
        return ""
    if value < 0:
        return "-" + _clock(-value)
    hours, rem = divmod(value, 3600)
    minutes, seconds = divmod(rem, 60)
    return f"{int(hours)}:{int(minutes):02d}:{seconds:09.6f}"


def _plain(value: Decimal | None) -> str:
    return "0" if value is None else format(value.normalize(), "f")


def _best(seg) -> Decimal | None:
    return None if seg.best is None else _exact(seg.best)


def to_wsplit(result: RunResult) -> str:
    delay_ms = 0 if not result.offset else int(round(-result.offset * 1000))
    lines = [
        f"Title={result.name or ''}",
        f"Attempts={result.attempts or 0}",
        f"Offset={delay_ms}",
        "Size=152,25",
    ]
    for seg, cum in zip(result.segments, _cumulative(result)):
        lines.append(f"{seg.name},0,{_plain(cum)},{_plain(_best(seg))}")
    lines.append("Icons=" + ",".join('""' for _ in result.segments))
    return "\n".join(lines) + "\n"


def to_splitterz(result: RunResult) -> str:
    def esc(s: str) -> str:
        return s.replace(",", "‡")

    lines = [f"{esc(result.name or '')},{result.attempts or 0}"]
    for seg, cum in zip(result.segments, _cumulative(result)):
        best = _best(seg)
        lines.append(f"{esc(seg.name)},{_clock(cum)},{'0' if best is None else _clock(best)}")
    return "\n".join(lines) + "\n"


def to_urn(result: RunResult) -> str:
    splits = []
    best_running: Decimal | None = Decimal(0)
    for seg, cum in zip(result.segments, _cumulative(result)):
        best = _best(seg)
        best_running = None if best is None or best_running is None else best_running + best
        splits.append({
            "title": seg.name,
            "time": _clock(cum),
            "best_time": _clock(best_running),
            "best_segment": _clock(best),
        })
    doc = {
        "title": result.name or "",
        "attempt_count": result.attempts or 0,
        "start_delay": _clock(_exact(-result.offset)) if result.offset else "",
        "splits": splits,
    }
    return json.dumps(doc, indent=4, ensure_ascii=False) + "\n"


_WRITERS: dict[ProgramId, Callable[[RunResult], str]] = {
    ProgramId.WSPLIT: to_wsplit,
    ProgramId.SPLITTERZ: to_splitterz,
    ProgramId.URN: to_urn,
}


def convertible_programs() -> tuple[ProgramId, ...]:
    return tuple(_WRITERS)


def render(result: RunResult, program: ProgramId) -> bytes:
    """Serialize a parsed run in another timer's format."""
    if not result.matched:
        raise ValueError("cannot convert a run that did not parse")
    writer = _WRITERS.get(program)
    if writer is None:
        supported = ", ".join(p.key for p in _WRITERS)
        raise ValueError(f"no writer for {program.key}; supported: {supported}")
    return writer(result).encode("utf-8")
