"""Recover combinators

Recovery on the same Deferred: a matching failure is turned back into a
success for every failure handler registered afterwards."""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..deferred import Deferred


def rescue_from[T, E](
    deferred: Deferred[T, E],
    *error_types: type[BaseException],
    handler: Callable[[typing.Any], typing.Any] | None = None,
) -> Deferred[typing.Any, E]:
    """
    Succeed with handler(error) (or None) if the error is one of error_types.

    Types are tested with isinstance in the order given. A non-matching
    error keeps propagating to later failure handlers. If handler raises,
    deferred fails with that exception.

    Example:
        lookup(key).rescue_from(KeyError, handler=lambda e: default)
    """
    if not error_types:
        raise TypeError("rescue_from() requires at least one exception type")

    def recover(error: typing.Any) -> None:
        if not any(isinstance(error, t) for t in error_types):
            return
        try:
            value = handler(error) if handler is not None else None
        except Exception as exc:
            deferred.fail(typing.cast(E, exc))
        else:
            deferred.succeed(value)

    deferred.on_failure(recover)
    return deferred


__all__ = ("rescue_from",)
