# recharge_basin/scenario_runner.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional
import csv
import json
import logging

from .engine import InputParameters, evaluate
from .errors import FeasibilityError, ValidationError
from .validate import _mode_from_env_or_flag, load_params_from_file

logger = logging.getLogger(__name__)

SCENARIO_GLOBS = ("*.yaml", "*.yml", "*.json")
FORMATS = ("jsonl", "csv", "json")


@dataclass
class RunResult:
    summary: Dict[str, Any]
    summary_path: Optional[Path] = None
    results_path: Optional[Path] = None
    rows: List[Dict[str, Any]] = field(default_factory=list)


def _write_jsonl(path: Path, rows: List[Dict[str, Any]]) -> None:
    with path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False) + "\n")


def _write_csv(path: Path, rows: List[Dict[str, Any]]) -> None:
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    cols: List[str] = []
    for d in rows:
        for k in d.keys():
            if k not in cols:
                cols.append(k)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=cols)
        w.writeheader()
        for d in rows:
            w.writerow({k: d.get(k, "") for k in cols})


def _write_rows(out: Path, stem: str, rows: List[Dict[str, Any]], fmt: str) -> Path:
    if fmt == "csv":
        path = out / f"{stem}.csv"
        _write_csv(path, rows)
    elif fmt in ("jsonl", "json"):
        path = out / f"{stem}.jsonl"
        _write_jsonl(path, rows)
    else:
        raise ValidationError(f"unknown fmt: {fmt}")
    return path


def run_params(params: Dict[str, Any], *, mode: str = "relaxed") -> Dict[str, Any]:
    """One scenario mapping -> JSON-style result dict."""
    return evaluate(InputParameters.from_mapping(params, mode=mode)).to_dict()


def scenario_files(cfg_dir: Path) -> List[Path]:
    found: List[Path] = []
    for pattern in SCENARIO_GLOBS:
        found.extend(p for p in cfg_dir.glob(pattern) if p.is_file())
    return sorted(found)


def run_file(cfg_path: Path, *, mode: str = "relaxed") -> Dict[str, Any]:
    params = load_params_from_file(cfg_path)
    logger.debug("running scenario %s", cfg_path)
    return evaluate(InputParameters.from_mapping(params, mode=mode)).to_row()


def run_dir(
    config: str | Path,
    out_dir: str | Path,
    *,
    fmt: str = "jsonl",
    mode: str | None = None,
) -> RunResult:
    """
    Single file: evaluate it, write summary.json (+ one-row results file).
    Directory: evaluate every scenario file, write scenarios.<fmt>; a failing
    scenario becomes a row carrying its error instead of stopping the batch.
    """
    if fmt not in FORMATS:
        raise ValidationError(f"unknown fmt: {fmt}")
    mode = _mode_from_env_or_flag(mode)
    cfg_path = Path(config)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    if cfg_path.is_dir():
        files = scenario_files(cfg_path)
        if not files:
            raise ValidationError(f"{cfg_path}: no scenario files found")
        rows: List[Dict[str, Any]] = []
        failed = 0
        for f in files:
            try:
                row = run_file(f, mode=mode)
            except FeasibilityError as e:
                failed += 1
                logger.warning("scenario %s failed: %s", f.name, e)
                row = e.to_dict()
            rows.append({"scenario": f.stem, **row})
        results_path = _write_rows(out, "scenarios", rows, fmt)
        summary = {"scenarios": len(rows), "failed": failed}
        logger.info("ran %d scenarios (%d failed) -> %s", len(rows), failed, results_path)
        return RunResult(summary=summary, results_path=results_path, rows=rows)

    params = load_params_from_file(cfg_path)
    result = evaluate(InputParameters.from_mapping(params, mode=mode))
    summary = result.to_dict()

    summary_path = out / "summary.json"
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
    row = {"scenario": cfg_path.stem, **result.to_row()}
    results_path = _write_rows(out, f"{cfg_path.stem}_results", [row], fmt)
    logger.info("scenario %s -> %s", cfg_path.name, summary_path)
    return RunResult(summary=summary, summary_path=summary_path, results_path=results_path, rows=[row])


__all__ = ["RunResult", "run_params", "run_file", "run_dir", "scenario_files"]
