# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Built-in defaults, YAML loading and recursive overrides for run configs.
#
# Design notes:
#   - A config is a plain nested dict (sim / routing / experiments) so
#     scenarios can override any key.
#   - sim.seed = null means the RNG is seeded from the wall clock.
#
# Usage:
#   cfg = load_cfg("config/baseline.yaml")
#   cfg = apply_overrides(cfg, {"sim": {"seed": 7}})
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, os
from typing import Dict, Optional
import yaml
from .errors import ConfigurationError

DEFAULTS: Dict = {
    "sim": {
        "arrival_rate": 3.9,
        "service_rate": 2.0,
        "strategy": "uniformly_random",
        "seed": None,
        "max_packets": 10000,
        "queue_capacity": 10,
    },
    "routing": {
        "overflow_to_other": True,
    },
    "experiments": {
        "record_trace": False,
        "plot": False,
    },
}

def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply overrides (recursive merge) on top of a base config."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides or {})
    return new

def load_cfg(path: Optional[str] = None) -> Dict:
    """Load a YAML config and merge it over DEFAULTS. No path -> DEFAULTS."""
    if path is None:
        return copy.deepcopy(DEFAULTS)
    if not os.path.exists(path):
        raise ConfigurationError(f"Config file not found: {path}")
    with open(path, "r") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")
    return apply_overrides(DEFAULTS, raw)
