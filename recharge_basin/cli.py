# recharge_basin/cli.py
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from .engine import InputParameters, evaluate
from .finance.amortization import amortization_schedule
from .errors import FeasibilityError
from .scenario_runner import _write_rows, run_dir
from .validate import _mode_from_env_or_flag, load_params_from_file

logger = logging.getLogger(__name__)

# flag dest -> request key
_OVERRIDES = {
    "acres": "acres",
    "soil": "soilType",
    "pipeline_length": "pipelineLength",
    "land_cost_per_acre": "landCostPerAcre",
    "water_cost": "waterCost",
    "water_value": "waterValue",
    "discount_rate": "discountRate",
    "loan_years": "loanYears",
    "wet_year_frequency": "wetYearFrequency",
    "wet_year_duration": "wetYearDuration",
    "evaporation_loss": "evaporationLoss",
}


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="recharge_basin",
        description="Recharge basin techno-economic feasibility CLI",
    )
    p.add_argument(
        "--mode",
        default="feasibility",
        choices=["feasibility", "schedule", "scenarios", "sensitivity", "montecarlo"],
        help="Execution mode (default: feasibility).",
    )
    p.add_argument(
        "--config",
        required=False,
        default=None,
        help="Path to a scenario YAML/JSON, or a directory of scenarios in 'scenarios' mode.",
    )
    p.add_argument(
        "--outputs-dir",
        default="outputs",
        help="Directory to write result files (default: outputs). Will be created if missing.",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default="text",
        choices=["text", "json", "jsonl", "csv"],
        help="text/json print to stdout; jsonl/csv write files under --outputs-dir.",
    )
    site = p.add_argument_group("scenario overrides (take precedence over --config)")
    site.add_argument("--acres", type=float)
    site.add_argument("--soil", help="Soil map-unit symbol, e.g. SiCl2")
    site.add_argument("--pipeline-length", type=float)
    site.add_argument("--land-cost-per-acre", type=float)
    site.add_argument("--water-cost", type=float)
    site.add_argument("--water-value", type=float)
    site.add_argument("--discount-rate", type=float)
    site.add_argument("--loan-years", type=int)
    site.add_argument("--wet-year-frequency", type=float)
    site.add_argument("--wet-year-duration", type=int)
    site.add_argument("--evaporation-loss", type=float)

    mc = p.add_argument_group("analysis")
    mc.add_argument("--iterations", type=int, default=1000, help="Monte Carlo draws (default: 1000).")
    mc.add_argument("--seed", type=int, default=None, help="Random seed for Monte Carlo.")
    mc.add_argument("--swing", type=float, default=0.2, help="Sensitivity swing as a fraction (default: 0.2).")

    v = p.add_mutually_exclusive_group()
    v.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (unknown keys raise).",
    )
    v.add_argument(
        "--relaxed",
        action="store_true",
        help="Enable relaxed validation (unknown keys ignored).",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    return p.parse_args(argv)


def _apply_validation_mode(ns: argparse.Namespace) -> None:
    # Default: leave env as-is; flags override explicitly.
    if ns.strict:
        os.environ["VALIDATION_MODE"] = "strict"
    elif ns.relaxed:
        os.environ["VALIDATION_MODE"] = "relaxed"


def _collect_params(ns: argparse.Namespace) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if ns.config:
        params.update(load_params_from_file(Path(ns.config)))
    for dest, key in _OVERRIDES.items():
        val = getattr(ns, dest)
        if val is not None:
            params[key] = val
    return params


def _print_text(res: Dict[str, Any]) -> None:
    d, c, r, e = res["dimensions"], res["costs"], res["recharge"], res["economics"]
    soil = res["soilType"] + (" (default rate)" if res["soilFallback"] else "")
    print(f"Soil: {soil}, infiltration {res['infiltrationRate']} ft/day")
    print(f"Basin: {d['sideLength']} ft side, {d['perimeter']} ft perimeter, {d['wettedArea']} wetted acres")
    print(f"Total cost: ${c['totalCost']:,.2f}  annual payment: ${c['annualCapitalPayment']:,.2f}")
    print(f"Net recharge: {r['netRecharge']} ac-ft/yr over {r['daysPerYear']} days")
    print(f"NPV: {e['npv']}  BC ratio: {e['bcRatio']}  ROI: {e['roi']}%")


def _run_feasibility(ns: argparse.Namespace, outputs_dir: Path, mode: str) -> int:
    result = evaluate(InputParameters.from_mapping(_collect_params(ns), mode=mode))
    res = result.to_dict()
    if ns.fmt == "json":
        print(json.dumps({"success": True, "results": res}, indent=2))
    elif ns.fmt == "text":
        _print_text(res)
    else:
        outputs_dir.mkdir(parents=True, exist_ok=True)
        (outputs_dir / "summary.json").write_text(json.dumps(res, indent=2), encoding="utf-8")
        path = _write_rows(outputs_dir, "feasibility_results", [result.to_row()], ns.fmt)
        print(f"Wrote {path}")
    return 0


def _run_schedule(ns: argparse.Namespace, outputs_dir: Path, mode: str) -> int:
    result = evaluate(InputParameters.from_mapping(_collect_params(ns), mode=mode))
    p = result.inputs
    rows = amortization_schedule(result.total_cost, p.discount_rate, p.loan_years)
    logger.debug("schedule: %d years on %.2f at %.4f", p.loan_years, result.total_cost, p.discount_rate)
    if ns.fmt == "json":
        print(json.dumps({"totalCost": result.total_cost, "rows": rows}, indent=2))
    elif ns.fmt == "text":
        print(f"{'year':>4} {'interest':>14} {'principal':>14} {'debt service':>14} {'balance':>14}")
        for r in rows:
            print(
                f"{int(r['year']):>4} {r['interest']:>14,.2f} {r['principal']:>14,.2f} "
                f"{r['debt_service']:>14,.2f} {r['balance']:>14,.2f}"
            )
    else:
        outputs_dir.mkdir(parents=True, exist_ok=True)
        path = _write_rows(outputs_dir, "schedule", rows, ns.fmt)
        print(f"Wrote {path}")
    return 0


def _emit_frame(df, ns: argparse.Namespace, outputs_dir: Path, stem: str) -> None:
    if ns.fmt == "json":
        print(json.dumps({"rows": df.to_dict(orient="records"), "summary": dict(df.attrs)}, indent=2))
    elif ns.fmt == "text":
        print(df.to_string(index=False))
    else:
        path = _write_rows(outputs_dir, stem, df.to_dict(orient="records"), ns.fmt)
        print(f"Wrote {path}")


def main(argv: list[str] | None = None) -> int:
    ns = _parse_args(argv)
    _apply_validation_mode(ns)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    mode = _mode_from_env_or_flag(None)
    outputs_dir = Path(ns.outputs_dir).resolve()
    logger.debug("mode=%s validation=%s config=%s", ns.mode, mode, ns.config)

    try:
        if ns.mode == "feasibility":
            return _run_feasibility(ns, outputs_dir, mode)
        if ns.mode == "schedule":
            return _run_schedule(ns, outputs_dir, mode)

        if ns.mode == "scenarios":
            if not ns.config:
                print("ERROR: --config is required in scenarios mode", file=sys.stderr)
                return 2
            fmt = "jsonl" if ns.fmt == "text" else ns.fmt
            rr = run_dir(ns.config, outputs_dir, fmt=fmt, mode=mode)
            print(json.dumps(rr.summary, indent=2) if ns.fmt == "json" else f"Ran scenarios -> {rr.results_path}")
            return 0

        params = InputParameters.from_mapping(_collect_params(ns), mode=mode)
        if ns.mode == "sensitivity":
            from .sensitivity import sensitivity_table

            _emit_frame(sensitivity_table(params, swing=ns.swing), ns, outputs_dir, "sensitivity")
        else:
            from .monte_carlo import run_monte_carlo

            df = run_monte_carlo(params, iterations=ns.iterations, seed=ns.seed)
            if ns.fmt == "text":
                for k, val in df.attrs.items():
                    print(f"{k}: {val:,.4f}")
            else:
                _emit_frame(df, ns, outputs_dir, "montecarlo")
        return 0
    except FeasibilityError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


__all__ = ["main"]
