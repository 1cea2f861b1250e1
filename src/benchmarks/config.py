"""Config loading and dynamic instantiation utilities."""

from __future__ import annotations

import importlib
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

__all__ = [
    "DEFAULT_CONFIG",
    "load_json",
    "import_class",
    "resolve_spec",
    "resolve_values",
    "apply_overrides",
    "build_config",
]

DEFAULT_CONFIG: dict[str, Any] = {
    # Registry name or {"class": "module:Class", "params": {...}}
    "engine": "mt19937",
    "seed": 0,
    "samples": 20000,
    "operation": "next_double",
    "lo": 1,
    "hi": 6,
    # z-score for the chi-square and mean tolerances
    "z": 4.0,
}


def load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def import_class(path: str) -> type[Any]:
    if ":" in path:
        module_name, class_name = path.split(":", 1)
    else:
        module_name, class_name = path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, class_name)


def resolve_spec(spec: Any, **extra_kwargs: Any) -> Any:
    """Instantiate an object from a {class, params} spec or return spec as-is."""
    if isinstance(spec, dict) and "class" in spec:
        cls = import_class(spec["class"])
        params = spec.get("params", {})
        resolved = resolve_values(params)
        resolved.update(extra_kwargs)
        return cls(**resolved)
    return resolve_values(spec)


def resolve_values(value: Any) -> Any:
    if isinstance(value, dict):
        if "class" in value:
            return resolve_spec(value)
        return {key: resolve_values(val) for key, val in value.items()}
    if isinstance(value, list):
        return [resolve_values(v) for v in value]
    return value


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def apply_overrides(config: dict[str, Any], overrides: Sequence[str]) -> dict[str, Any]:
    """Return a copy of config with dotted key=value overrides applied.

    Values are parsed as JSON when possible (numbers, booleans, null, lists),
    otherwise kept as plain strings.

    Raises:
        ValueError: If an override has no "=".
    """
    result = json.loads(json.dumps(config))
    for item in overrides:
        if "=" not in item:
            raise ValueError(f"Override must be key=value, got: {item}")
        path, raw_val = item.split("=", 1)
        keys = path.split(".")
        target = result
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = _parse_value(raw_val)
    return result


def build_config(
    path: Path | None = None,
    overrides: Sequence[str] = (),
) -> dict[str, Any]:
    """Merge DEFAULT_CONFIG, an optional JSON file and overrides, in that order."""
    config = dict(DEFAULT_CONFIG)
    if path is not None:
        config.update(load_json(path))
    return apply_overrides(config, overrides)
