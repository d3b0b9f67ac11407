# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   Define the concrete queue instances of the network (queue A and queue B)
#   from configuration.
#
# Design notes:
#   - Both queues share one capacity; the topology is fixed at two.
#
# Usage:
#   from twoqueue.stations import make_queues
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict
from .queues import DEFAULT_CAPACITY, PacketQueue

QUEUE_NAMES = ("A", "B")

def make_queues(cfg: dict) -> Dict[str, PacketQueue]:
    """
    Create the two queues from config.

    Parameters
    ----------
    cfg : dict
        Parsed YAML config; reads sim.queue_capacity.

    Returns
    -------
    dict[str, PacketQueue]
        Mapping queue name -> PacketQueue instance.
    """
    capacity = int(cfg.get("sim", {}).get("queue_capacity", DEFAULT_CAPACITY))
    return {name: PacketQueue(name, capacity=capacity) for name in QUEUE_NAMES}
