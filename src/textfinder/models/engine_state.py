"""Lifecycle states of the search engine."""

from enum import Enum


class EngineState(Enum):
    """
    IDLE -> RUNNING -> (STOPPING) -> COMPLETED.

    COMPLETED is entered exactly once per start, whether the tree was exhausted,
    the search was stopped, or the root path was rejected.
    """
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"
    COMPLETED = "completed"
