"""
experiments/scenarios.py

Holds scenario definitions (config overrides) that can be selected from the
command line. Each scenario is one run; add routing or load variants here.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

SHORTEST_QUEUE = {
    "name": "shortest_queue",
    "overrides": {
        "sim": {"strategy": "shortest_queue"},
    },
}

INDEPENDENT_SPLIT = {
    "name": "independent_split",
    "overrides": {
        "routing": {"overflow_to_other": False},
    },
}

# Long run of the independent split for comparison against M/M/1/K values
INDEPENDENT_SPLIT_LONG = {
    "name": "independent_split_long",
    "overrides": {
        "sim": {"max_packets": 200000, "seed": 3},
        "routing": {"overflow_to_other": False},
        "experiments": {"record_trace": True},
    },
}

LIGHT_LOAD = {
    "name": "light_load",
    "overrides": {
        "sim": {"arrival_rate": 2.0},
    },
}

SCENARIOS = [BASELINE, SHORTEST_QUEUE, INDEPENDENT_SPLIT, INDEPENDENT_SPLIT_LONG, LIGHT_LOAD]
