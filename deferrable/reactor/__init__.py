from .aio import AsyncioReactor
from .base import Reactor, TimerHandle, current_reactor, use_reactor
from .sync import SYNCHRONOUS, SynchronousReactor

__all__ = (
    "AsyncioReactor",
    "Reactor",
    "SYNCHRONOUS",
    "SynchronousReactor",
    "TimerHandle",
    "current_reactor",
    "use_reactor",
)
