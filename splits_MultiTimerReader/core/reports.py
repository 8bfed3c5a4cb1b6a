# splits_MultiTimerReader/core/reports.py
from __future__ import annotations
from pathlib import Path
from typing import Literal, Sequence
import numpy as np
import pandas as pd
from scipy.io import savemat

from .metrics import run_metrics, segment_frame
from .model import RunResult

ReportFormat = Literal["csv", "mat", "both"]

RUN_COLUMNS = [
    "file", "program", "name", "game", "category", "attempts", "n_segments",
    "total_time_s", "sum_of_best_s", "possible_time_save_s",
]
_RUN_STRING_COLUMNS = ("file", "program", "name", "game", "category")


def _build_dataframe(entries: Sequence[tuple[RunResult, str]]) -> pd.DataFrame:
    """Per-run rows + TOTAL row."""
    rows = [run_metrics(result, label) for result, label in entries]
    total = {
        "file": "TOTAL", "program": "", "name": "", "game": "", "category": "",
        "attempts": sum(r["attempts"] or 0 for r in rows),
        "n_segments": sum(r["n_segments"] for r in rows),
        "total_time_s": round(sum(r["total_time_s"] for r in rows), 6),
        "sum_of_best_s": None,
        "possible_time_save_s": None,
    }
    return pd.DataFrame(rows + [total], columns=RUN_COLUMNS)


def _cellstr(values: list) -> np.ndarray:
    # MATLAB Nx1 cell array; missing labels become ''
    cells = np.empty((len(values), 1), dtype=object)
    for i, v in enumerate(values):
        cells[i, 0] = "" if v is None or (isinstance(v, float) and np.isnan(v)) else str(v)
    return cells


def _write_mat(df_out: pd.DataFrame, out_mat: Path, varname: str, title: str,
               string_columns: Sequence[str]) -> None:
    """
    Save a MATLAB struct with fields matching the CSV columns.
    Strings become cell arrays (Nx1), numerics become double (Nx1) with NaN for blanks.
    """
    out_mat.parent.mkdir(parents=True, exist_ok=True)
    mat_struct = {}
    for col in df_out.columns:
        if col in string_columns:
            mat_struct[col] = _cellstr(df_out[col].tolist())
        else:
            values = pd.to_numeric(df_out[col], errors="coerce")
            mat_struct[col] = values.to_numpy(dtype=float).reshape(-1, 1)
    savemat(out_mat, {varname: mat_struct})
    print(f"[OK] wrote report: {title} → {out_mat}")


def _write(df_out: pd.DataFrame, out_base: Path, title: str, fmt: ReportFormat,
           mat_variable: str, string_columns: Sequence[str]) -> None:
    if fmt in ("csv", "both"):
        out_csv = out_base.with_suffix(".csv")
        out_csv.parent.mkdir(parents=True, exist_ok=True)
        df_out.to_csv(out_csv, index=False, encoding="utf-8")
        print(f"[OK] wrote report: {title} → {out_csv}")
    if fmt in ("mat", "both"):
        _write_mat(df_out, out_base.with_suffix(".mat"), mat_variable, title, string_columns)


def write_report(entries: Sequence[tuple[RunResult, str]],
                 out_base: Path,
                 title: str,
                 fmt: ReportFormat = "csv",
                 mat_variable: str = "report") -> None:
    """
    Write the run summary report in the requested format.
    - entries: (RunResult, label) pairs, label is usually the file name
    - out_base is a *base path without extension* (e.g., .../report)
    - fmt: "csv" | "mat" | "both"
    """
    if not entries:
        return
    _write(_build_dataframe(entries), out_base, title, fmt, mat_variable, _RUN_STRING_COLUMNS)


def write_segment_report(result: RunResult,
                         out_base: Path,
                         title: str,
                         fmt: ReportFormat = "csv",
                         mat_variable: str = "segments") -> None:
    if not result.segments:
        return
    _write(segment_frame(result), out_base, title, fmt, mat_variable, ("segment",))
