"""
Orchestration for the rwstat package.

This module drives the sampling loop and translates process signals into
a loop shutdown.
"""

from .poll_loop import PollLoop
from .shared_state import LoopState, ProbeState
from .signal_handler import SignalHandler

__all__ = [
    "LoopState",
    "PollLoop",
    "ProbeState",
    "SignalHandler",
]
