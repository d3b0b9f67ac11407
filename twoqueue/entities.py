# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the two-queue DES: Packet.
#
# Design notes:
#   - A Packet is created when an arrival is accepted, lives in exactly one
#     PacketQueue, and is handed back to the router on departure so its
#     waiting time can be recorded.
#   - waiting_time is fixed at insertion: the queue knows exactly how much
#     work sits ahead of the new packet.
#
# Usage:
#   from twoqueue.entities import Packet
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass

@dataclass
class Packet:
    service_time: float              # time required at the server
    waiting_time: float = 0.0        # delay before service starts, set by PacketQueue.accept
