# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception hierarchy for the two-queue simulator.
#
# Design notes:
#   - ConfigurationError is raised before any simulation state is built.
#   - InternalConsistencyError signals a logic defect inside the event loop
#     (iteration cap exceeded, unknown event, queue contract violated).
#   - Blocking is a counted outcome and never raises.
#
# Usage:
#   from twoqueue.errors import ConfigurationError, InternalConsistencyError
# -----------------------------------------------------------------------------

from __future__ import annotations


class SimulationError(Exception):
    """Base class for every error raised by the simulator."""


class ConfigurationError(SimulationError, ValueError):
    """Invalid rates, unstable load, or malformed configuration."""


class InternalConsistencyError(SimulationError, RuntimeError):
    """The event loop reached a state that a correct run never reaches."""


class QueueFullError(InternalConsistencyError):
    """accept() was called on a queue already at capacity."""


class QueueEmptyError(InternalConsistencyError):
    """depart() was called on an empty queue."""
