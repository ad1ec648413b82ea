# recharge_basin/validate.py
from __future__ import annotations
import os, sys, math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from .config import load_model_config, normalize_keys
from .errors import FeasibilityError, ValidationError
from .geo import geojson_acres, polygon_acres
from .schema import AUXILIARY_KEYS, COST_RATES_SCHEMA, DESIGN_SCHEMA, REQUIRED, SCHEMA
from .soils import primary_soil

MODES = ("strict", "relaxed")


def _mode_from_env_or_flag(flag: str | None) -> str:
    if flag in MODES:
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in MODES else "relaxed"


def _to_number(key: str, v: Any, typ: str) -> float | int:
    if isinstance(v, bool) or v is None:
        raise ValidationError(f"{key} must be numeric, got {v!r}", field=key)
    if isinstance(v, str):
        v = v.replace(",", "").strip()
    try:
        x = float(v)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be numeric, got {v!r}", field=key)
    if not math.isfinite(x):
        raise ValidationError(f"{key} must be finite, got {x}", field=key)
    if typ == "int":
        if x != int(x):
            raise ValidationError(f"{key} must be a whole number, got {x}", field=key)
        return int(x)
    return x


def _check_bounds(key: str, x: float, spec: Mapping[str, Any]) -> None:
    lo = spec.get("min")
    hi = spec.get("max")
    if lo is not None and x < lo:
        raise ValidationError(f"{key} outside allowed range: {x} < {lo}", field=key)
    if hi is not None:
        if spec.get("max_exclusive") and x >= hi:
            raise ValidationError(f"{key} outside allowed range: {x} must be < {hi}", field=key)
        if x > hi:
            raise ValidationError(f"{key} outside allowed range: {x} > {hi}", field=key)


def _coerce_group(name: str, data: Any, schema: Dict[str, Dict[str, Any]], mode: str) -> Dict[str, float]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name} must be a mapping", field=name)
    out: Dict[str, float] = {}
    for k, v in data.items():
        spec = schema.get(k)
        if spec is None:
            if mode == "strict":
                raise ValidationError(f"unknown key in {name} (strict mode): {k}", field=name)
            continue
        x = _to_number(f"{name}.{k}", v, spec["type"])
        _check_bounds(f"{name}.{k}", x, spec)
        out[k] = float(x)
    return out


def resolve_site(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill acres from a polygon and soilType from a soil list when only those are given."""
    out = dict(data)
    if out.get("acres") is None:
        if out.get("polygon") is not None:
            out["acres"] = polygon_acres(out["polygon"])
        elif out.get("geometry") is not None:
            out["acres"] = geojson_acres(out["geometry"])
    if not out.get("soilType") and out.get("soils") is not None:
        out["soilType"] = primary_soil(out["soils"]).symbol
    return out


def coerce_params(data: Mapping[str, Any], *, mode: str = "relaxed") -> Dict[str, Any]:
    """
    Typed, defaulted copy of a request mapping, keyed by python field names.
    Raises ValidationError on the first problem found.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"parameters must be a mapping, got {type(data).__name__}")
    data = resolve_site(normalize_keys(dict(data)))

    missing = [k for k in REQUIRED if data.get(k) is None or data.get(k) == ""]
    if missing:
        raise ValidationError(f"missing required keys: {missing}", field=missing[0])

    if mode == "strict":
        allowed = set(SCHEMA) | set(AUXILIARY_KEYS)
        unknown = [k for k in data.keys() if k not in allowed]
        if unknown:
            raise ValidationError(f"unknown top-level keys (strict mode): {unknown}")

    out: Dict[str, Any] = {}
    for key, spec in SCHEMA.items():
        v = data.get(key)
        if spec["type"] == "str":
            if not isinstance(v, str):
                raise ValidationError(f"{key} must be a string, got {v!r}", field=key)
            out[spec["field"]] = v.strip()
            continue
        if v is None:
            v = spec["default"]
        x = _to_number(key, v, spec["type"])
        _check_bounds(key, x, spec)
        out[spec["field"]] = x

    out["cost_rates"] = _coerce_group("cost_rates", data.get("cost_rates"), COST_RATES_SCHEMA, mode)
    out["design"] = _coerce_group("design", data.get("design"), DESIGN_SCHEMA, mode)
    return out


def validate_params_dict(data: Dict[str, Any], *, mode: str = "relaxed") -> None:
    """
    Guardrails:
      - relaxed: require {acres, soilType} (or polygon/soils), typed and in range
      - strict : also reject unknown top-level keys
    """
    coerce_params(data, mode=mode)


def load_params_from_file(path: Path) -> Dict[str, Any]:
    p = Path(path)
    if p.is_dir():
        # scenario_runner handles directories; keep this function file-only
        raise ValidationError(f"{p} is a directory (expected a file)")
    return load_model_config(p)


def _iter_input_files(p: Path) -> Iterable[Path]:
    if p.is_file():
        yield p
    elif p.is_dir():
        for ext in ("*.yaml", "*.yml", "*.json"):
            yield from sorted(p.rglob(ext))


def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="recharge_basin.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON files or directories to validate")
    parser.add_argument("--mode", choices=list(MODES), default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = _mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in _iter_input_files(target):
            any_seen = True
            try:
                data = load_params_from_file(f)
                validate_params_dict(data, mode=mode)
                print(f"OK: {f}")
            except FeasibilityError as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0


if __name__ == "__main__":
    raise SystemExit(_main())
