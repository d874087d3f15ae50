"""
Calling code with automatic lifting.

Adapters from callback-style and exception-raising code to Deferreds.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Callable
from functools import wraps

from ..deferred import Deferred

logger = logging.getLogger(__name__)

type Resolve = Callable[..., None]


def deferrably[T](
    block: Callable[[Resolve], typing.Any],
) -> Deferred[T, Exception]:
    """
    Convert callback-style code into a Deferred.

    block receives a resolve function to hand to the callback API. Calling
    resolve(*values) succeeds the Deferred. If block raises synchronously,
    the Deferred fails with the exception.

    Example:
        from deferrable import lift as L

        def fetch(key: str) -> Deferred[bytes, Exception]:
            def start(resolve):
                if not key:
                    raise KeyError(key)
                client.get(key, callback=resolve)
            return L.deferrably(start)

    NOTE: Exceptions raised by handlers while resolve() dispatches are not
          caught here; they surface wherever resolve was called from.
    """
    d: Deferred[T, Exception] = Deferred()
    try:
        block(d.succeed)
    except Exception as exc:
        logger.debug("deferrably(): block raised %r", exc)
        d.fail(exc)
    return d


def lifted[**P, T](
    func: Callable[P, T],
) -> Callable[P, Deferred[T, Exception]]:
    """
    Decorator: plain synchronous function -> function returning a Deferred.

    The return value becomes the success value, a raised exception the
    failure. Useful as a chain() step.

    Example:
        from deferrable import lift as L

        @L.lifted
        def parse(raw: str) -> dict:
            return json.loads(raw)

        chain(fetch_raw, parse, store)
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Deferred[T, Exception]:
        d: Deferred[T, Exception] = Deferred()
        try:
            value = func(*args, **kwargs)
        except Exception as exc:
            d.fail(exc)
        else:
            # succeed() outside try: handler bugs must not turn into failures
            d.succeed(value)
        return d

    return wrapper


__all__ = ("deferrably", "lifted")
