"""
Lifting values into Deferreds.

Constructors for Deferreds whose outcome is already known, plus the blank
Deferred everything else starts from.
"""

from __future__ import annotations

import typing

from kungfu import Error, Ok, Result

from ..deferred import Deferred


def blank[T, E]() -> Deferred[T, E]:
    """
    Fresh pending Deferred with nothing attached.

    Example:
        from deferrable import lift as L

        status = L.up.blank()
        db.query("SELECT 1", on_row=status.succeed)
    """
    return Deferred()


def success(*values: typing.Any) -> Deferred[typing.Any, typing.Never]:
    """
    Deferred that already succeeded with zero or more values.

    **When to use:** Keeping an API asynchronous when the answer is
    already at hand (cache hit, validation shortcut).
    """
    d: Deferred[typing.Any, typing.Never] = Deferred()
    d.succeed(*values)
    return d


def const[T](value: T) -> Deferred[T, typing.Never]:
    """Deferred that already succeeded with a single value."""
    return success(value)


def failure(
    error: BaseException | type[BaseException] | object,
    message: str | None = None,
) -> Deferred[typing.Never, BaseException]:
    """
    Deferred that already failed. Dual of success().

    Error resolution:
        failure(exc)              -> exc as-is (message not allowed)
        failure(ValueError, msg)  -> ValueError(msg)
        failure(ValueError)       -> ValueError()
        failure("oops")           -> RuntimeError("oops")
    """
    resolved: BaseException
    if isinstance(error, BaseException):
        if message is not None:
            raise ValueError("failure(): can't specify both an exception and a message")
        resolved = error
    elif isinstance(error, type) and issubclass(error, BaseException):
        resolved = error() if message is None else error(message)
    else:
        resolved = RuntimeError(str(error))

    d: Deferred[typing.Never, BaseException] = Deferred()
    d.fail(resolved)
    return d


def from_result[T, E](result: Result[T, E]) -> Deferred[T, E]:
    """
    Lift an already-computed kungfu Result.

    Ok(v) succeeds with v, Error(e) fails with e.
    """
    d: Deferred[T, E] = Deferred()
    match result:
        case Ok(value):
            d.succeed(value)
        case Error(err):
            d.fail(err)
    return d


__all__ = (
    "blank",
    "const",
    "failure",
    "from_result",
    "success",
)
