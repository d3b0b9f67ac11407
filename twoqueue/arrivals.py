# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Random-variate source: build the RNG, draw exponential variates by the
#   inverse-CDF method, and pre-generate the interarrival gaps of a run.
#
# Design notes:
#   - The RNG is an explicit random.Random passed around by the caller, so a
#     fixed seed reproduces a run bit for bit.
#   - All interarrival gaps are drawn before the event loop starts; once they
#     are used up the router knows no further arrivals are pending.
#
# Usage:
#   rng = make_rng(seed)
#   gaps = pregenerate_interarrivals(rng, arrival_rate, count)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging, math, random, time
from typing import List, Optional

logger = logging.getLogger(__name__)

def make_rng(seed: Optional[int] = None) -> random.Random:
    """
    Return a generator seeded with `seed`, or with the wall clock if None.

    The wall-clock seed is taken when this is called, i.e. once per run.
    """
    if seed is None:
        seed = time.time_ns()
        logger.debug("seeding RNG from wall clock: %d", seed)
    return random.Random(seed)

def exponential(rng: random.Random, mean: float) -> float:
    """
    Draw an exponential variate with the given mean.

    A uniform u on the open interval (0, 1) is mapped through -mean * ln(u).
    Draws of exactly 0 or 1 are rejected and redrawn so the logarithm stays
    finite and the variate stays strictly positive.
    """
    u = rng.random()
    while u == 0.0 or u == 1.0:
        u = rng.random()
    return -mean * math.log(u)

def pregenerate_interarrivals(rng: random.Random, arrival_rate: float, count: int) -> List[float]:
    mean = 1.0 / arrival_rate
    return [exponential(rng, mean) for _ in range(count)]
