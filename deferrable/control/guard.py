"""
Guard combinator
================

Validation on the same Deferred: a failing predicate redirects settlement
from success to failure mid-dispatch.
"""

from __future__ import annotations

import typing

from .._errors import GuardFailed
from .._types import Predicate
from ..deferred import Deferred


def guard[T, E](
    deferred: Deferred[T, E],
    predicate: Predicate,
    *,
    reason: str | None = None,
) -> Deferred[T, E]:
    """
    Fail deferred with GuardFailed if predicate(*values) is falsy.

    Handlers registered before guard() still see the success. Handlers
    registered after it only run if the predicate passed; otherwise the
    failure handlers run instead. Successive guards are checked in order
    and stop at the first that fails.

    If predicate raises, deferred fails with that exception instead of
    GuardFailed.

    Example:
        reading.guard("must be non-negative", lambda v: v >= 0).on_success(store)
    """

    def check(*values: typing.Any) -> None:
        try:
            ok = predicate(*values)
        except Exception as exc:
            deferred.fail(typing.cast(E, exc))
            return
        if not ok:
            deferred.fail(typing.cast(E, GuardFailed(reason, values)))

    deferred.on_success(check)
    return deferred


__all__ = ("guard",)
