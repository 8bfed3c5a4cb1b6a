# splits_MultiTimerReader/core/plotting.py
from __future__ import annotations
import re
from pathlib import Path
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from .model import RunResult


def _plot_stem(label: str) -> str:
    stem = re.sub(r"[^\w.-]+", "_", label, flags=re.ASCII).strip("_.")
    return stem[:120] or "run"


def save_run_plot(label: str, result: RunResult, out_dir: Path) -> Path | None:
    """
    Bar chart of segment durations (PB) with best-segment markers.
    Returns the written path, or None when there is nothing to draw.
    """
    if not result.segments:
        print(f"[INFO] {label}: no segments; skipping plot.")
        return None
    out_dir.mkdir(parents=True, exist_ok=True)

    names = [s.name or f"#{i}" for i, s in enumerate(result.segments, start=1)]
    x = np.arange(len(names))
    dur = np.array([s.duration for s in result.segments], dtype=float)
    best = np.array([np.nan if s.best is None else s.best for s in result.segments], dtype=float)

    plt.figure(figsize=(max(6, 0.5 * len(names) + 2), 5))
    plt.bar(x, dur, color="tab:blue", alpha=0.7, label="PB segment")
    if np.isfinite(best).any():
        plt.scatter(x, best, color="tab:orange", zorder=3, label="Best segment")
    plt.xticks(x, names, rotation=60, ha="right", fontsize=8)
    plt.ylabel("Duration [s]")
    heading = result.name or label
    program = result.program.display_name if result.program else "?"
    sob = "n/a" if result.sum_of_best is None else f"{result.sum_of_best:.3f}s"
    plt.title(f"{heading} ({program}): total {result.total_time:.3f}s, sum of best {sob}")
    plt.grid(True, axis="y", alpha=0.3)
    plt.legend(fontsize=8, frameon=False)
    plt.tight_layout()

    out_path = out_dir / f"{_plot_stem(label)}_segments.png"
    plt.savefig(out_path, dpi=160)
    plt.close()
    print(f"[OK] {label}: {len(names)} segments → {out_path}")
    return out_path
