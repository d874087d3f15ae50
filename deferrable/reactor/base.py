"""
Reactor protocol
================

The scheduling strategy consumed by loops and timeouts. Two interchangeable
implementations exist: AsyncioReactor for code running inside an asyncio
event loop, and SynchronousReactor for code where nothing drives callbacks.
"""

from __future__ import annotations

import asyncio
import contextlib
import contextvars
import logging
import typing
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


class TimerHandle(typing.Protocol):
    def cancel(self) -> None: ...


class Reactor(typing.Protocol):
    """Single-threaded scheduler."""

    def is_driving(self) -> bool:
        """True if callbacks passed to call_soon will eventually run."""
        ...

    def call_soon(self, callback: Callable[[], typing.Any], /) -> None:
        """Run callback on a later turn of the same thread."""
        ...

    def call_later(self, seconds: float, callback: Callable[[], typing.Any], /) -> TimerHandle:
        """Run callback after seconds, unless the handle is cancelled first."""
        ...


_installed: contextvars.ContextVar[Reactor | None] = contextvars.ContextVar(
    "deferrable_reactor", default=None
)


def current_reactor() -> Reactor:
    """
    Reactor for the calling context.

    Order: reactor installed with use_reactor(), then the running asyncio
    loop, then the synchronous strategy.
    """
    installed = _installed.get()
    if installed is not None:
        return installed

    from .aio import AsyncioReactor
    from .sync import SYNCHRONOUS

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return SYNCHRONOUS
    return AsyncioReactor(loop)


@contextlib.contextmanager
def use_reactor(reactor: Reactor) -> Iterator[Reactor]:
    """
    Install reactor as current_reactor() for the duration of the block.

    Example:
        with use_reactor(AsyncioReactor(loop)):
            loop_until_success(poll)
    """
    logger.debug("installing reactor %r", reactor)
    token = _installed.set(reactor)
    try:
        yield reactor
    finally:
        _installed.reset(token)


__all__ = ("Reactor", "TimerHandle", "current_reactor", "use_reactor")
