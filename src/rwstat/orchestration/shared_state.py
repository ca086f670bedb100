"""
Shared runtime state for the orchestration module.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum


class LoopState(Enum):
    """Lifecycle of the poll loop."""
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass
class ProbeState:
    """
    Runtime state shared between the poll loop and the signal handler.
    """
    status: LoopState = LoopState.STOPPED
    # Set by a signal handler or caller to end the loop.
    shutdown_requested: threading.Event = field(default_factory=threading.Event)
    cycles_completed: int = 0
