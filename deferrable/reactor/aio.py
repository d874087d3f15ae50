"""Asyncio reactor

Adapter from the Reactor protocol to an asyncio event loop."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

from .base import TimerHandle


class AsyncioReactor:
    """Schedules on an asyncio event loop (the running one by default)."""

    __slots__ = ("_loop",)

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop if loop is not None else asyncio.get_running_loop()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def is_driving(self) -> bool:
        return self._loop.is_running() and not self._loop.is_closed()

    def call_soon(self, callback: Callable[[], typing.Any], /) -> None:
        self._loop.call_soon(callback)

    def call_later(self, seconds: float, callback: Callable[[], typing.Any], /) -> TimerHandle:
        return self._loop.call_later(seconds, callback)

    def __repr__(self) -> str:
        return f"AsyncioReactor({self._loop!r})"


__all__ = ("AsyncioReactor",)
