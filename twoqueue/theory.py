# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# theory.py
# -----------------------------------------------------------------------------
# Purpose:
#   Closed-form reference values for the two-queue system under
#   independent-split routing, where each queue behaves as an M/M/1/K queue
#   fed at half the total arrival rate.
#
# Design notes:
#   - Only exact for routing.overflow_to_other = false. With overflow the
#     queues are coupled and these numbers are an upper bound on blocking.
#   - sampled_lq is the expectation of what the simulator actually records
#     (max(0, n - 1) seen by accepted arrivals), which differs from Lq.
#
# Usage:
#   from twoqueue.theory import mm1k_metrics
#   ref = mm1k_metrics(3.9, 2.0, 10)
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from typing import Dict, List
from .errors import ConfigurationError

def mm1k_distribution(rho: float, K: int) -> List[float]:
    """Stationary distribution pi_0..pi_K of an M/M/1/K queue."""
    if rho <= 0:
        raise ConfigurationError("rho must be positive")
    if math.isclose(rho, 1.0):
        return [1.0 / (K + 1)] * (K + 1)
    pi0 = (1.0 - rho) / (1.0 - rho ** (K + 1))
    return [pi0 * rho ** n for n in range(K + 1)]

def mm1k_metrics(arrival_rate: float, service_rate: float, K: int = 10) -> Dict[str, float]:
    """
    Per-queue performance when the total arrival_rate is split evenly over
    two M/M/1/K queues with the given service_rate.

    Returns pi0, blocking (pi_K), busy (1 - pi0), L, Lq, W_q (mean wait of
    accepted packets, Lq / lambda_eff) and sampled_lq.
    """
    if arrival_rate <= 0 or service_rate <= 0:
        raise ConfigurationError("arrival and service rates must be positive")
    lam = arrival_rate / 2.0
    rho = lam / service_rate
    pi = mm1k_distribution(rho, K)
    L = sum(n * p for n, p in enumerate(pi))
    busy = 1.0 - pi[0]
    Lq = L - busy
    blocking = pi[K]
    lam_eff = lam * (1.0 - blocking)
    # Accepted arrivals see n < K; the one in service is not counted
    sampled_lq = sum((n - 1) * pi[n] for n in range(1, K)) / (1.0 - blocking)
    return {
        "rho": rho,
        "pi0": pi[0],
        "blocking": blocking,
        "busy": busy,
        "L": L,
        "Lq": Lq,
        "W_q": Lq / lam_eff,
        "sampled_lq": sampled_lq,
    }
