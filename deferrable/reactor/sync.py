"""Synchronous reactor

Strategy for code that runs with no event loop: nothing will ever call a
scheduled callback, so scheduling is refused instead of silently dropped."""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._errors import ReactorNotRunningError
from .base import TimerHandle


class SynchronousReactor:
    """No reactor is driving; operations are expected to settle inline."""

    __slots__ = ()

    def is_driving(self) -> bool:
        return False

    def call_soon(self, callback: Callable[[], typing.Any], /) -> None:
        _ = callback
        raise ReactorNotRunningError("call_soon")

    def call_later(self, seconds: float, callback: Callable[[], typing.Any], /) -> TimerHandle:
        _ = (seconds, callback)
        raise ReactorNotRunningError("call_later")

    def __repr__(self) -> str:
        return "SynchronousReactor()"


SYNCHRONOUS = SynchronousReactor()

__all__ = ("SYNCHRONOUS", "SynchronousReactor")
