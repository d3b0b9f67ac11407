# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# network.py
# -----------------------------------------------------------------------------
# Purpose:
#   Router and network wiring. Holds the two queues and the arrival
#   countdown, decides where arrivals go, and handles departures.
#
# Design notes:
#   - The router owns the relative clock: next_arrival plus each queue's
#     head_remaining. Every handler advances the countdowns that did not fire.
#   - Policies are pure functions in policies.py; the router only applies
#     the decision.
#   - next_arrival is None once the pre-generated gaps are used up.
#
# Usage:
#   router = Router(cfg, queues, metrics, rng, gaps)
#   Scheduler(router, max_iterations).run()
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Dict, Iterable, Optional
from .arrivals import exponential
from .entities import Packet
from .metrics import Metrics
from .policies import QueueChoice, parse_strategy, select_queue
from .queues import EventType, PacketQueue, next_event

class Router:
    def __init__(self, cfg: dict, queues: Dict[str, PacketQueue], metrics: Metrics,
                 rng: random.Random, interarrivals: Iterable[float]):
        self.cfg = cfg
        self.queue_a = queues["A"]
        self.queue_b = queues["B"]
        self.M = metrics
        self.rng = rng
        sim_cfg = cfg["sim"]
        self.strategy = parse_strategy(sim_cfg["strategy"])
        self.service_mean = 1.0 / sim_cfg["service_rate"]
        self.overflow = bool(cfg.get("routing", {}).get("overflow_to_other", True))
        self._gaps = iter(interarrivals)
        self.next_arrival: Optional[float] = next(self._gaps, None)

    def next_event(self) -> EventType:
        return next_event(self.next_arrival, self.queue_a.head_remaining, self.queue_b.head_remaining)

    # Incoming arrival: tick time, then accept or block
    def on_arrival(self):
        elapsed = self.next_arrival
        self.queue_a.advance_time(elapsed)
        self.queue_b.advance_time(elapsed)

        if self.queue_a.is_full() and self.queue_b.is_full():
            self.M.note_block()
        else:
            packet = Packet(service_time=exponential(self.rng, self.service_mean))
            choice = select_queue(
                self.strategy,
                len(self.queue_a),
                len(self.queue_b),
                self.queue_a.capacity,
                self.rng,
                overflow=self.overflow,
            )
            if choice is QueueChoice.BLOCKED:
                self.M.note_block()
            else:
                target = self.queue_a if choice is QueueChoice.QUEUE_A else self.queue_b
                self.M.note_accept(target.name, len(target))
                target.accept(packet)

        # Set timer for the next packet arrival
        self.next_arrival = next(self._gaps, None)

    def on_departure_a(self):
        self._depart(self.queue_a, self.queue_b)

    def on_departure_b(self):
        self._depart(self.queue_b, self.queue_a)

    def _depart(self, server: PacketQueue, other: PacketQueue):
        elapsed = server.head_remaining
        if self.next_arrival is not None:
            self.next_arrival -= elapsed
        other.advance_time(elapsed)
        packet = server.depart()
        self.M.note_departure(server.name, packet)
