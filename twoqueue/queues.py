# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Minimal discrete-event primitives: EventType, the next-event comparator,
#   the Scheduler loop, and a bounded FIFO PacketQueue with a single server.
#
# Design notes:
#   - There is no absolute clock. Time is held as three relative countdowns
#     (next arrival, head remaining service of A, of B) and every event
#     advances the other two by the elapsed amount.
#   - An empty queue has head_remaining = None, which the comparator treats
#     as infinitely far away.
#   - Event handling is delegated to the router (defined in twoqueue.network).
#
# Usage:
#   from twoqueue.queues import PacketQueue, Scheduler, EventType
# -----------------------------------------------------------------------------

from __future__ import annotations
import enum, itertools, logging
from collections import deque
from typing import Deque, Optional
from .entities import Packet
from .errors import InternalConsistencyError, QueueEmptyError, QueueFullError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10

class EventType(enum.Enum):
    ARRIVAL = "arrival"
    DEPARTURE_A = "departure_a"
    DEPARTURE_B = "departure_b"
    DONE = "done"

def _before(t: Optional[float], other: Optional[float]) -> bool:
    """t < other where None stands for +infinity."""
    if t is None:
        return False
    if other is None:
        return True
    return t < other

def next_event(next_arrival: Optional[float], head_a: Optional[float],
               head_b: Optional[float]) -> EventType:
    """
    Pick the next event from the three countdowns.

    Arrival wins only when strictly earlier than both departures. Otherwise A
    departs if strictly earlier than B, B departs if it holds a packet, and
    the run is done when nothing is pending. On an exact A/B tie B departs
    first; on an arrival/departure tie the departure goes first.
    """
    if _before(next_arrival, head_a) and _before(next_arrival, head_b):
        return EventType.ARRIVAL
    if _before(head_a, head_b):
        return EventType.DEPARTURE_A
    if head_b is not None:
        return EventType.DEPARTURE_B
    return EventType.DONE

class PacketQueue:
    """Bounded FIFO queue whose head packet is in service.

    Parameters
    ----------
    name : str
        Queue label for logging/metrics ("A" or "B").
    capacity : int
        Maximum number of packets, including the one in service.

    Notes
    -----
    - head_remaining is the service time still owed to the head packet, or
      None when the queue is empty.
    - accept() on a full queue and depart() on an empty queue are caller
      bugs and raise InternalConsistencyError subclasses; check is_full()
      first.
    """
    def __init__(self, name: str, capacity: int = DEFAULT_CAPACITY):
        self.name = name
        self.capacity = capacity
        self.packets: Deque[Packet] = deque()
        self.head_remaining: Optional[float] = None

    def __len__(self) -> int:
        return len(self.packets)

    def is_empty(self) -> bool:
        return not self.packets

    def is_full(self) -> bool:
        return len(self.packets) >= self.capacity

    def accept(self, packet: Packet) -> Packet:
        if self.is_full():
            raise QueueFullError(f"queue {self.name} is at capacity ({self.capacity})")
        if not self.packets:
            packet.waiting_time = 0.0
            self.head_remaining = packet.service_time
        else:
            # Remaining work of the head plus full service of everyone behind it
            wait = self.head_remaining
            for ahead in itertools.islice(self.packets, 1, None):
                wait += ahead.service_time
            packet.waiting_time = wait
        self.packets.append(packet)
        return packet

    def advance_time(self, elapsed: float):
        if self.packets:
            self.head_remaining -= elapsed

    def depart(self) -> Packet:
        if not self.packets:
            raise QueueEmptyError(f"queue {self.name} is empty")
        departing = self.packets.popleft()
        self.head_remaining = self.packets[0].service_time if self.packets else None
        return departing

    def __repr__(self) -> str:
        return f"PacketQueue({self.name!r}, length={len(self.packets)}, head_remaining={self.head_remaining!r})"

class Scheduler:
    """Event loop driving a router until no arrival or departure is pending.

    Attributes
    ----------
    router : object
        Object with next_event/on_arrival/on_departure_a/on_departure_b.
    max_iterations : int
        Safety cap; exceeding it means the loop logic is broken.
    iterations : int
        Number of events processed so far.
    """
    def __init__(self, router, max_iterations: int):
        self.router = router
        self.max_iterations = max_iterations
        self.iterations = 0

    def run(self) -> int:
        event = self.router.next_event()
        while event is not EventType.DONE:
            self.iterations += 1
            if self.iterations > self.max_iterations:
                raise InternalConsistencyError(
                    f"event loop exceeded {self.max_iterations} iterations"
                )
            if event is EventType.ARRIVAL:
                self.router.on_arrival()
            elif event is EventType.DEPARTURE_A:
                self.router.on_departure_a()
            elif event is EventType.DEPARTURE_B:
                self.router.on_departure_b()
            else:
                raise InternalConsistencyError(f"unknown event type: {event!r}")
            event = self.router.next_event()
        logger.debug("event loop finished after %d iterations", self.iterations)
        return self.iterations
