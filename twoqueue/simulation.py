# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single run: validate the rates, pre-generate arrivals, build
#   queues and router, run the event loop, and return statistics.
#
# Design notes:
#   - Validation happens before any queue, RNG or gap list exists.
#   - The iteration cap (2 * max_packets + 10) only guards against a broken
#     loop; a correct run needs at most 2 * max_packets events.
#
# Usage:
#   from twoqueue.simulation import run, simulate
#   results = run(cfg)
#   result = simulate(3.9, 2.0, "uniformly_random", seed=1)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Union
from .arrivals import make_rng, pregenerate_interarrivals
from .config import DEFAULTS, apply_overrides
from .errors import ConfigurationError
from .metrics import Metrics
from .network import Router
from .policies import SelectionStrategy, parse_strategy
from .queues import Scheduler
from .stations import make_queues

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SimulationResult:
    avg_queue_length: float
    avg_wait_time: float
    blocked_rate: float
    blocked: int
    accepted: int
    departed: int
    iterations: int

def validate_rates(arrival_rate: float, service_rate: float):
    """Reject non-positive rates and loads with arrival_rate / (2 * service_rate) >= 1."""
    if not arrival_rate > 0 or not service_rate > 0:
        raise ConfigurationError(
            f"arrival and service rates must be positive (got {arrival_rate}, {service_rate})"
        )
    if arrival_rate / (2.0 * service_rate) >= 1.0:
        raise ConfigurationError(
            f"unstable load: arrival_rate / (2 * service_rate) = "
            f"{arrival_rate / (2.0 * service_rate):.4f} must be less than 1"
        )

def validate_cfg(cfg: Dict) -> Dict:
    """
    Check the 'sim' section and return a copy of cfg whose rates, counts and
    strategy are coerced to float, int and the enum value. Quoted numbers
    from YAML are accepted; anything that does not coerce is rejected.
    """
    sim_cfg = cfg.get("sim")
    if not isinstance(sim_cfg, dict):
        raise ConfigurationError("config is missing the 'sim' section")
    try:
        arrival_rate = float(sim_cfg["arrival_rate"])
        service_rate = float(sim_cfg["service_rate"])
        max_packets = int(sim_cfg["max_packets"])
        capacity = int(sim_cfg["queue_capacity"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"invalid 'sim' section: {exc}") from exc
    validate_rates(arrival_rate, service_rate)
    if max_packets < 1:
        raise ConfigurationError(f"max_packets must be at least 1 (got {max_packets})")
    if capacity < 1:
        raise ConfigurationError(f"queue_capacity must be at least 1 (got {capacity})")
    strategy = parse_strategy(sim_cfg.get("strategy"))
    return apply_overrides(cfg, {
        "sim": {
            "arrival_rate": arrival_rate,
            "service_rate": service_rate,
            "max_packets": max_packets,
            "queue_capacity": capacity,
            "strategy": strategy.value,
        },
    })

def run(cfg: Dict) -> Dict:
    cfg = validate_cfg(cfg)
    sim_cfg = cfg["sim"]
    max_packets = sim_cfg["max_packets"]

    rng = make_rng(sim_cfg.get("seed"))
    # Pre-generate interarrival times of packets before anything else draws
    gaps = pregenerate_interarrivals(rng, sim_cfg["arrival_rate"], max_packets)

    queues = make_queues(cfg)
    M = Metrics(cfg)
    router = Router(cfg, queues, M, rng, gaps)
    scheduler = Scheduler(router, max_iterations=2 * max_packets + 10)
    logger.debug(
        "starting run: lambda=%s mu=%s strategy=%s packets=%d capacity=%d",
        sim_cfg["arrival_rate"], sim_cfg["service_rate"], router.strategy.name,
        max_packets, queues["A"].capacity,
    )
    M.iterations = scheduler.run()

    summary = M.summary()
    logger.debug(
        "run done: avg_queue_length=%.4f avg_wait_time=%.4f blocked_rate=%.4f",
        summary["avg_queue_length"], summary["avg_wait_time"], summary["blocked_rate"],
    )
    return summary

def simulate(arrival_rate: float, service_rate: float,
             strategy: Union[str, SelectionStrategy] = SelectionStrategy.UNIFORMLY_RANDOM,
             seed: Optional[int] = None, max_packets: int = 10000,
             queue_capacity: int = 10, overflow: bool = True) -> SimulationResult:
    """
    Run one simulation and return its statistics.

    Raises ConfigurationError before anything runs if a rate is non-positive
    or the load is unstable, and InternalConsistencyError if the event loop
    breaks down.
    """
    validate_rates(arrival_rate, service_rate)
    cfg = apply_overrides(DEFAULTS, {
        "sim": {
            "arrival_rate": arrival_rate,
            "service_rate": service_rate,
            "strategy": parse_strategy(strategy).value,
            "seed": seed,
            "max_packets": max_packets,
            "queue_capacity": queue_capacity,
        },
        "routing": {"overflow_to_other": overflow},
    })
    res = run(cfg)
    return SimulationResult(
        avg_queue_length=res["avg_queue_length"],
        avg_wait_time=res["avg_wait_time"],
        blocked_rate=res["blocked_rate"],
        blocked=res["blocked"],
        accepted=res["accepted"],
        departed=res["departed"],
        iterations=res["iterations"],
    )
