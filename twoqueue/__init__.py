"""
twoqueue package initializer.

This package contains the event-driven simulator of two parallel
finite-capacity queues fed by one Poisson stream: the queue primitives,
the queue-selection policies, the router, metric collection and the
closed-form M/M/1/K reference values.
"""
from .errors import ConfigurationError, InternalConsistencyError, SimulationError
from .policies import QueueChoice, SelectionStrategy
from .simulation import SimulationResult, run, simulate

__all__ = [
    "entities", "queues", "stations", "network",
    "arrivals", "policies", "metrics", "simulation",
    "theory", "config", "errors",
    "ConfigurationError", "InternalConsistencyError", "SimulationError",
    "QueueChoice", "SelectionStrategy", "SimulationResult", "run", "simulate",
]
