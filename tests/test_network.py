import math

import pytest

from twoqueue.metrics import Metrics
from twoqueue.network import Router
from twoqueue.queues import EventType, Scheduler
from twoqueue.stations import make_queues

# -0.5 * ln(u) with mu = 2.0
TWO = math.exp(-4.0)   # service time 2.0
ONE = math.exp(-2.0)   # service time 1.0


def build(make_cfg, rng, gaps, **sim):
    cfg = make_cfg(service_rate=2.0, max_packets=len(gaps), **sim)
    queues = make_queues(cfg)
    M = Metrics(cfg)
    router = Router(cfg, queues, M, rng, gaps)
    return router, queues, M


def test_first_event_is_arrival(make_cfg, fixed_rng):
    router, _, _ = build(make_cfg, fixed_rng(), [1.0])
    assert router.next_event() is EventType.ARRIVAL


def test_waits_and_sampled_lengths(make_cfg, fixed_rng):
    r = fixed_rng(flips=[0, 0, 0], uniforms=[TWO, ONE, ONE])
    router, queues, M = build(make_cfg, r, [1.0, 0.5, 0.25])
    M.iterations = Scheduler(router, max_iterations=16).run()

    assert M.accepted == 3
    assert M.blocked == 0
    assert M.departed == 3
    # third arrival saw two packets in queue A, one of them in service
    assert M.total_length == 1
    # waits: 0, 1.5 (2.0 - 0.5), 2.25 (1.25 + 1.0)
    assert M.total_wait == pytest.approx(0.0 + 1.5 + 2.25)
    assert M.iterations == 6
    assert queues["A"].is_empty() and queues["B"].is_empty()

    s = M.summary()
    assert s["avg_queue_length"] == pytest.approx(1 / 3)
    assert s["avg_wait_time"] == pytest.approx(3.75 / 3)
    assert s["blocked_rate"] == 0.0


def test_departure_advances_other_queue_and_arrival(make_cfg, fixed_rng):
    r = fixed_rng(uniforms=[TWO, ONE])
    router, queues, M = build(make_cfg, r, [1.0, 0.5], strategy="shortest_queue")
    # tie at 0 vs 0 uses a coin; give it one
    r.flips = [0]
    router.on_arrival()
    assert queues["A"].head_remaining == pytest.approx(2.0)
    assert router.next_arrival == 0.5
    router.on_arrival()
    # shorter queue B was chosen without a coin flip
    assert len(queues["B"]) == 1
    assert queues["A"].head_remaining == pytest.approx(1.5)
    assert router.next_arrival is None
    assert router.next_event() is EventType.DEPARTURE_B
    router.on_departure_b()
    assert queues["A"].head_remaining == pytest.approx(0.5)
    assert router.next_event() is EventType.DEPARTURE_A


def test_pending_arrival_countdown_shrinks_on_departure(make_cfg, fixed_rng):
    r = fixed_rng(flips=[0], uniforms=[ONE])
    router, queues, _ = build(make_cfg, r, [1.0, 3.0])
    router.on_arrival()
    assert router.next_event() is EventType.DEPARTURE_A
    router.on_departure_a()
    assert router.next_arrival == pytest.approx(2.0)
    assert router.next_event() is EventType.ARRIVAL


def test_independent_split_blocks_when_coin_hits_full_queue(make_cfg, fixed_rng):
    r = fixed_rng(flips=[0, 0, 1], uniforms=[TWO, TWO, TWO])
    router, queues, M = build(make_cfg, r, [1.0, 0.1, 0.1], queue_capacity=1,
                              overflow_to_other=False)
    for _ in range(3):
        router.on_arrival()
    assert M.blocked == 1
    assert M.accepted == 2
    assert len(queues["A"]) == 1 and len(queues["B"]) == 1


def test_both_full_blocks_without_drawing(make_cfg, fixed_rng):
    r = fixed_rng(flips=[0, 0], uniforms=[TWO, TWO])
    router, queues, M = build(make_cfg, r, [1.0, 0.1, 0.1], queue_capacity=1)
    router.on_arrival()
    router.on_arrival()  # coin picks full A, overflows to B
    assert len(queues["B"]) == 1
    calls = r.calls
    router.on_arrival()
    assert M.blocked == 1
    assert r.calls == calls


def test_departures_counted_per_queue(make_cfg, fixed_rng):
    r = fixed_rng(flips=[0, 1], uniforms=[ONE, ONE])
    router, _, M = build(make_cfg, r, [1.0, 0.1])
    Scheduler(router, max_iterations=8).run()
    assert M.summary()["departed_by_queue"] == {"A": 1, "B": 1}


@pytest.mark.parametrize("strategy,overflow", [
    ("uniformly_random", True),
    ("uniformly_random", False),
    ("shortest_queue", True),
])
def test_queues_stay_within_capacity_after_every_event(make_cfg, strategy, overflow):
    import random
    from twoqueue.arrivals import pregenerate_interarrivals

    rng = random.Random(99)
    gaps = pregenerate_interarrivals(rng, 3.9, 5000)
    router, queues, M = build(make_cfg, rng, gaps, queue_capacity=3,
                              strategy=strategy, overflow_to_other=overflow)
    handlers = {
        EventType.ARRIVAL: router.on_arrival,
        EventType.DEPARTURE_A: router.on_departure_a,
        EventType.DEPARTURE_B: router.on_departure_b,
    }
    event = router.next_event()
    while event is not EventType.DONE:
        handlers[event]()
        for q in queues.values():
            assert len(q) <= q.capacity
            assert (q.head_remaining is None) == q.is_empty()
        event = router.next_event()
    assert M.blocked > 0
    assert M.blocked + M.accepted == 5000
