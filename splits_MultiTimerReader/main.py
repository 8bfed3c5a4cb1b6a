# splits_MultiTimerReader/main.py
from __future__ import annotations
import logging
import sys
from collections import Counter
from pathlib import Path
import yaml

from .core.cache import RawSplitFile
from .core.convert import convertible_programs, filename, render
from .core.coordinator import ParseCoordinator
from .core.model import ParseMode, ProgramId
from .core.plotting import save_run_plot
from .core.registry import build_registry
from .core.reports import write_report, write_segment_report
from .utils.detect import discover_inputs

_LOG = logging.getLogger(__name__)


def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _parse_mode(value) -> ParseMode:
    mode = ParseMode(str(value or "fast").lower())
    if mode is ParseMode.CONVERT:
        raise ValueError("parsing.mode must be 'fast' or 'full'; conversion is configured under 'convert'")
    return mode


def _convert_target(value) -> ProgramId | None:
    if value in (None, ""):
        return None
    target = ProgramId.lookup(value)
    if target not in convertible_programs():
        supported = ", ".join(p.key for p in convertible_programs())
        raise ValueError(f"convert.to={value!r} is not supported; choose one of: {supported}")
    return target


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg_path = Path(argv[0]) if argv else here / "config.yaml"
    cfg = load_config(cfg_path)

    log_cfg = cfg.get("logging", {}) or {}
    verbose = bool(log_cfg.get("verbose", True))
    logging.basicConfig(level=str(log_cfg.get("level", "WARNING")).upper(),
                        format="%(levelname)s %(name)s: %(message)s")

    in_cfg = cfg.get("input", {}) or {}
    in_path = Path(in_cfg.get("path", ".")).resolve()
    recurse = bool(in_cfg.get("recurse", True))
    out_root = Path((cfg.get("output", {}) or {}).get("root", "out")).resolve()
    out_root.mkdir(parents=True, exist_ok=True)

    parsing = cfg.get("parsing", {}) or {}
    mode = _parse_mode(parsing.get("mode"))
    forced = parsing.get("force_program")
    rep_cfg = cfg.get("reports", {}) or {}
    fmt = str(rep_cfg.get("format", "csv")).lower()
    mat_var = str(rep_cfg.get("mat_variable", "report"))
    segment_reports = bool(rep_cfg.get("segments", True))
    plots = bool((cfg.get("plots", {}) or {}).get("enabled", True))
    target = _convert_target((cfg.get("convert", {}) or {}).get("to"))

    if verbose:
        print(f"[cfg] input={in_path} (recurse={recurse})")
        print(f"[cfg] output={out_root}")
        print(f"[cfg] mode={mode.value} force_program={forced or '-'} convert_to={target or '-'}")

    # ---------- discover ----------
    detected = discover_inputs(in_path, recurse=recurse)
    if not detected:
        print(f"[INFO] No split files found under: {in_path}")
        return 0
    if verbose:
        kinds = Counter(d.hint.key for d in detected)
        print(f"[detector] found {len(detected)} inputs → {dict(kinds)}")

    coordinator = ParseCoordinator(build_registry(cfg))

    # ---------- parse ----------
    parsed = []
    for item in detected:
        try:
            split_file = RawSplitFile(item.path.read_bytes(), digest=item.path.name)
        except OSError as e:
            print(f"[WARN] could not read {item.path.name}: {e}")
            continue

        result = coordinator.parse(split_file, mode, known_program=forced)
        if not result.matched:
            print(f"[WARN] {item.path.name}: not a supported split file")
            continue
        if verbose:
            if result.program is not item.hint:
                print(f"  [parse] {item.path.name}: extension suggests {item.hint.key}, content is {result.program.key}")
            print(f"  [parse] {result.program.key:16} {item.path.name} "
                  f"({len(result.segments)} segments, {result.total_time:.3f}s)")
        parsed.append((item, split_file, result))

    if not parsed:
        print("[INFO] No split files parsed; nothing to report.")
        return 0

    # ---------- reports / plots ----------
    write_report([(r, item.path.name) for item, _, r in parsed],
                 out_root / "report", "runs", fmt=fmt, mat_variable=mat_var)
    for item, split_file, result in parsed:
        stem = item.path.stem
        if segment_reports or plots:
            # segment detail needs names, which fast parses may skip
            detail = result if mode is ParseMode.FULL else coordinator.parse(split_file, ParseMode.FULL, result.program)
            if not detail.matched:
                print(f"[WARN] {item.path.name}: full decode failed; skipping segment detail")
            else:
                if segment_reports:
                    write_segment_report(detail, out_root / "segments" / stem, f"{item.path.name} segments",
                                         fmt=fmt, mat_variable="segments")
                if plots:
                    save_run_plot(stem, detail, out_root / "plots")

        # ---------- conversion ----------
        if target is not None:
            converted = coordinator.parse(split_file, ParseMode.CONVERT, result.program)
            if not converted.matched:
                print(f"[WARN] {item.path.name}: full decode failed; not converted")
                continue
            out_path = out_root / "converted" / filename(stem, target)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_bytes(render(converted, target))
            print(f"[OK] converted {item.path.name} → {out_path}")

    if verbose:
        print(f"[summary] parsed {len(parsed)} of {len(detected)} file(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
