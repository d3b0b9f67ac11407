# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Collect and summarize run statistics: blocked packets, queue length
#   sampled at each acceptance, and waiting time of each departure.
#
# Design notes:
#   - Keep side-effect methods (note_*) for instrumentation from the router.
#   - Summaries return JSON-serializable dicts for easy tabulation.
#   - Averages divide by the number of offered packets minus the blocked ones,
#     which equals the accepted count once the run has drained.
#
# Usage:
#   M = Metrics(cfg); M.summary()
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, Any, List
from collections import defaultdict

class Metrics:
    def __init__(self, cfg: dict):
        self.cfg = cfg
        sim_cfg = cfg.get("sim", {})
        self.max_packets = int(sim_cfg.get("max_packets", 10000))
        self.record_trace = bool(cfg.get("experiments", {}).get("record_trace", False))
        self.blocked = 0
        self.accepted = 0
        self.departed = 0
        self.total_length = 0                     # sum of max(0, length - 1) at acceptance
        self.total_wait = 0.0                     # sum of waiting_time over departures
        self.accepted_by_queue = defaultdict(int)
        self.departed_by_queue = defaultdict(int)
        self.peak_length = defaultdict(int)       # largest length observed per queue after acceptance
        self.iterations = 0
        self.time_series: List[Dict[str, float]] = []

    def note_block(self):
        self.blocked += 1

    def note_accept(self, queue_name: str, length_before: int):
        """Sample the chosen queue before insertion, excluding the packet in service."""
        self.accepted += 1
        self.accepted_by_queue[queue_name] += 1
        self.total_length += max(0, length_before - 1)
        self.peak_length[queue_name] = max(self.peak_length[queue_name], length_before + 1)
        if self.record_trace:
            self.time_series.append({
                "accepted": self.accepted,
                "avg_queue_length": self.total_length / self.accepted,
            })

    def note_departure(self, queue_name: str, packet):
        self.departed += 1
        self.departed_by_queue[queue_name] += 1
        self.total_wait += packet.waiting_time

    def summary(self) -> Dict[str, Any]:
        served = self.max_packets - self.blocked
        avg_len = self.total_length / served if served > 0 else 0.0
        avg_wait = self.total_wait / served if served > 0 else 0.0
        blocked_rate = self.blocked / self.max_packets if self.max_packets > 0 else 0.0
        return {
            "avg_queue_length": avg_len,
            "avg_wait_time": avg_wait,
            "blocked_rate": blocked_rate,
            "blocked": self.blocked,
            "accepted": self.accepted,
            "departed": self.departed,
            "total_length": self.total_length,
            "total_wait": self.total_wait,
            "iterations": self.iterations,
            "accepted_by_queue": dict(self.accepted_by_queue),
            "departed_by_queue": dict(self.departed_by_queue),
            "peak_length": dict(self.peak_length),
            # Running average of the sampled queue length, for warm-up plots.
            "time_series": list(self.time_series),
        }
