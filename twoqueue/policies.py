# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Queue-selection policies: decide which queue an arriving packet joins,
#   given the two current lengths.
#
# Design notes:
#   - Keep pure functions to ease testing (lengths -> decision). The only
#     state consulted is the RNG passed in for the coin flip.
#   - BLOCKED is an ordinary outcome, not an error.
#   - overflow=True retries the other queue when the coin lands on a full one;
#     overflow=False blocks instead (independent-split routing).
#
# Usage:
#   from twoqueue.policies import select_queue, SelectionStrategy
# -----------------------------------------------------------------------------

from __future__ import annotations
import enum, random
from typing import Union
from .errors import ConfigurationError

class QueueChoice(enum.Enum):
    QUEUE_A = "A"
    QUEUE_B = "B"
    BLOCKED = "blocked"

class SelectionStrategy(enum.Enum):
    UNIFORMLY_RANDOM = "uniformly_random"
    SHORTEST_QUEUE = "shortest_queue"

_ALIASES = {
    "uniform": SelectionStrategy.UNIFORMLY_RANDOM,
    "random": SelectionStrategy.UNIFORMLY_RANDOM,
    "min_length_queue": SelectionStrategy.SHORTEST_QUEUE,
    "shortest": SelectionStrategy.SHORTEST_QUEUE,
}

def parse_strategy(value: Union[str, SelectionStrategy]) -> SelectionStrategy:
    """Accept an enum member, its name or its value (case-insensitive)."""
    if isinstance(value, SelectionStrategy):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in SelectionStrategy:
            if key in (member.name.lower(), member.value):
                return member
        if key in _ALIASES:
            return _ALIASES[key]
    raise ConfigurationError(f"Unknown selection strategy: {value!r}")

def choose_uniformly_random(len_a: int, len_b: int, capacity: int,
                            rng: random.Random, overflow: bool = True) -> QueueChoice:
    if rng.randrange(2) == 0:
        first, first_len, second, second_len = QueueChoice.QUEUE_A, len_a, QueueChoice.QUEUE_B, len_b
    else:
        first, first_len, second, second_len = QueueChoice.QUEUE_B, len_b, QueueChoice.QUEUE_A, len_a
    if first_len < capacity:
        return first
    if overflow and second_len < capacity:
        return second
    return QueueChoice.BLOCKED

def choose_shortest_queue(len_a: int, len_b: int, capacity: int,
                          rng: random.Random, overflow: bool = True) -> QueueChoice:
    """
    Join the strictly shorter queue without touching the RNG. Equal lengths
    fall back to the coin flip, which also covers the both-full case.
    """
    if len_a < len_b:
        return QueueChoice.QUEUE_A
    if len_b < len_a:
        return QueueChoice.QUEUE_B
    return choose_uniformly_random(len_a, len_b, capacity, rng, overflow=overflow)

def select_queue(strategy: SelectionStrategy, len_a: int, len_b: int, capacity: int,
                 rng: random.Random, overflow: bool = True) -> QueueChoice:
    if strategy is SelectionStrategy.UNIFORMLY_RANDOM:
        return choose_uniformly_random(len_a, len_b, capacity, rng, overflow=overflow)
    if strategy is SelectionStrategy.SHORTEST_QUEUE:
        return choose_shortest_queue(len_a, len_b, capacity, rng, overflow=overflow)
    raise ConfigurationError(f"Unsupported selection strategy: {strategy!r}")
