"""Map combinators

Value-only transforms of a Deferred's success or failure."""

from __future__ import annotations

import typing
from collections.abc import Callable

from ..deferred import Deferred


def transform[E](
    first: Deferred[typing.Any, E],
    f: Callable[..., typing.Any],
) -> Deferred[typing.Any, E]:
    """
    Succeed with f(*values) when first succeeds.

    Unlike bind(), the return value is never chained: a Deferred returned
    by f becomes the literal success value.
    """
    result: Deferred[typing.Any, E] = Deferred()

    def apply(*values: typing.Any) -> None:
        try:
            value = f(*values)
        except Exception as exc:
            result.fail(typing.cast(E, exc))
        else:
            result.succeed(value)

    first.on_success(apply)
    first.on_failure(result.fail)
    return result


map = transform


def transform_error[T](
    first: Deferred[T, typing.Any],
    f: Callable[[typing.Any], typing.Any],
) -> Deferred[T, typing.Any]:
    """
    Fail with f(error) when first fails. Success passes through unchanged.

    If f raises, the result fails with that exception instead.
    """
    result: Deferred[T, typing.Any] = Deferred()

    def apply(error: typing.Any) -> None:
        try:
            replacement = f(error)
        except Exception as exc:
            replacement = exc
        result.fail(replacement)

    first.on_success(result.succeed)
    first.on_failure(apply)
    return result


__all__ = ("map", "transform", "transform_error")
