# config/loader.py
from __future__ import annotations
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

# Python 3.11 has tomllib; fall back to "tomli" on older versions if needed
try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

DEFAULTS: Dict[str, Any] = {
    "logging": {"level": "INFO"},
    "paths": {"indir": "data/input", "outdir": "data/output"},
    "report": {"generated_by": "tn3"},
    "input": {"extensions": [".txt", ".docx"]},
}


def _merge(base: Dict[str, Any], over: Dict[str, Any]) -> Dict[str, Any]:
    out = deepcopy(base)
    for key, value in over.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_config(
    config_path: Path | None = None, *, required: bool = True
) -> Dict[str, Any]:
    """
    Load config.toml from repo root by default, layered over DEFAULTS.
    A missing file is an error unless required=False.
    """
    if config_path is None:
        # repo root is parent of this file's parent
        repo = Path(__file__).resolve().parents[1]
        config_path = repo / "config.toml"

    if not config_path.exists():
        if required:
            raise FileNotFoundError(f"Config not found: {config_path}")
        return deepcopy(DEFAULTS)

    with config_path.open("rb") as f:
        return _merge(DEFAULTS, tomllib.load(f))
