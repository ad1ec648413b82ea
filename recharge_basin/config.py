from __future__ import annotations

from typing import Any, Dict
import os
import io
import json
import yaml

from .errors import ValidationError
from .schema import FIELD_TO_KEY

# Groups that are values in their own right and must not be flattened.
_OPAQUE_GROUPS = ("cost_rates", "design", "geometry", "soils", "polygon")


def _flatten_grouped(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten shallow groups like {'financing': {...}, 'site': {...}} into one level.
    Prefers top-level keys if collisions occur.
    """
    flat: Dict[str, Any] = {k: v for k, v in cfg.items() if not isinstance(v, dict) or k in _OPAQUE_GROUPS}
    for k, v in cfg.items():
        if isinstance(v, dict) and k not in _OPAQUE_GROUPS:
            for sk, sv in v.items():
                flat.setdefault(sk, sv)
    return flat


def normalize_keys(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """snake_case parameter names -> the camelCase keys of the request contract."""
    out: Dict[str, Any] = {}
    for k, v in cfg.items():
        key = FIELD_TO_KEY.get(k, k)
        if key in out and k != key:
            # camelCase spelling already present wins
            continue
        out[key] = v
    return out


def parse_config_text(text: str, *, fmt: str = "yaml") -> Dict[str, Any]:
    try:
        if fmt == "json":
            cfg = json.loads(text or "{}")
        else:
            cfg = yaml.safe_load(text) or {}
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ValidationError(f"could not parse {fmt} config: {e}")
    if not isinstance(cfg, dict):
        raise ValidationError(f"config must be a mapping at the top level, got {type(cfg).__name__}")
    return normalize_keys(_flatten_grouped(cfg))


def load_model_config(source: str | os.PathLike | io.StringIO) -> Dict[str, Any]:
    """
    Load a scenario from a path or text stream (YAML, or JSON by suffix).
    Returns a flat dict keyed like the JSON request.
    """
    fmt = "yaml"
    if hasattr(source, "read"):
        text = str(source.read())
    else:
        p = os.fspath(source)
        if p.lower().endswith(".json"):
            fmt = "json"
        try:
            with open(p, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise ValidationError(f"cannot read config {p}: {e}")
    return parse_config_text(text, fmt=fmt)


__all__ = ["load_model_config", "parse_config_text", "normalize_keys"]
