# splits_MultiTimerReader/core/metrics.py
from __future__ import annotations
import math
from dataclasses import replace
from typing import Sequence
import numpy as np
import pandas as pd

from .model import RunResult, Segment


def total_time(segments: Sequence[Segment]) -> float:
    return math.fsum(s.duration for s in segments)


def sum_of_best(segments: Sequence[Segment]) -> float | None:
    """All-or-nothing: one segment without a best makes the sum undefined."""
    if not segments or any(s.best is None for s in segments):
        return None
    return math.fsum(s.best for s in segments)


def with_aggregates(result: RunResult) -> RunResult:
    return replace(result,
                   total_time=total_time(result.segments),
                   sum_of_best=sum_of_best(result.segments))


def segment_frame(result: RunResult) -> pd.DataFrame:
    """One row per segment: duration, best, possible time save and running clock."""
    cols = ["index", "segment", "duration_s", "best_s", "time_save_s", "cumulative_s"]
    if not result.segments:
        return pd.DataFrame(columns=cols)
    dur = np.array([s.duration for s in result.segments], dtype=float)
    best = np.array([np.nan if s.best is None else s.best for s in result.segments], dtype=float)
    return pd.DataFrame({
        "index": np.arange(1, len(dur) + 1),
        "segment": [s.name for s in result.segments],
        "duration_s": dur,
        "best_s": best,
        "time_save_s": np.round(dur - best, 6),
        "cumulative_s": np.round(np.cumsum(dur), 6),
    }, columns=cols)


def run_metrics(result: RunResult, label: str) -> dict:
    time_save = None
    if result.sum_of_best is not None:
        time_save = round(result.total_time - result.sum_of_best, 6)
    return {
        "file": label,
        "program": "" if result.program is None else result.program.key,
        "name": result.name or "",
        "game": result.game_name or "",
        "category": result.category_name or "",
        "attempts": result.attempts,
        "n_segments": len(result.segments),
        "total_time_s": round(result.total_time, 6),
        "sum_of_best_s": None if result.sum_of_best is None else round(result.sum_of_best, 6),
        "possible_time_save_s": time_save,
    }
