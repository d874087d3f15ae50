"""
Lowering Deferreds into asyncio / kungfu.

Bridges for async code that wants to await a Deferred as a Result.
"""

from __future__ import annotations

import asyncio
import typing

from kungfu import Error, LazyCoroResult, Ok, Result

from .._helpers import unpack
from ..deferred import Deferred


async def to_result[T, E](deferred: Deferred[T, E]) -> Result[T, E]:
    """
    Await settlement inside a running asyncio loop.

    Success values follow the unpack rule: no values -> None,
    one value -> the value, several -> a tuple.

    Example:
        from deferrable import lift as L

        match await L.down.to_result(fetch_user(42)):
            case Ok(user): ...
            case Error(err): ...
    """
    outcome = deferred.result
    if outcome is not None:
        return outcome

    future: asyncio.Future[Result[T, E]] = asyncio.get_running_loop().create_future()

    def on_success(*values: typing.Any) -> None:
        if not future.done():
            future.set_result(Ok(unpack(values)))

    def on_failure(error: E) -> None:
        if not future.done():
            future.set_result(Error(error))

    deferred.on_success(on_success).on_failure(on_failure)
    return await future


def to_lazy_coro_result[T, E](deferred: Deferred[T, E]) -> LazyCoroResult[T, E]:
    """Wrap a Deferred as a kungfu LazyCoroResult (awaited on demand)."""

    async def run() -> Result[T, E]:
        return await to_result(deferred)

    return LazyCoroResult(run)


async def unsafe[T, E](deferred: Deferred[T, E]) -> T:
    """Await and return the success value, raising on failure."""
    match await to_result(deferred):
        case Ok(value):
            return value
        case Error(err):
            if isinstance(err, BaseException):
                raise err
            raise RuntimeError(f"Deferred failed with {err!r}")


__all__ = ("to_lazy_coro_result", "to_result", "unsafe")
