"""Chain combinator

Sequential composition of many steps via bind()."""

from __future__ import annotations

import typing
from functools import reduce

from .._helpers import is_deferrable
from .._types import Step
from ..deferred import Deferrable, Deferred
from ..lift.up import const
from ..transform.bind import bind


def _as_step(step: Step | Deferrable[typing.Any, typing.Any]) -> Step:
    if is_deferrable(step):
        return lambda *_: step
    return typing.cast(Step, step)


def chain(
    *steps: Step | Deferrable[typing.Any, typing.Any],
) -> Deferred[typing.Any, typing.Any] | None:
    """
    Run steps one after another, each receiving the previous success.

    A step is a callable (bound as in bind()) or a Deferred, which is used
    as-is and ignores the previous value. The first failure short-circuits:
    remaining steps never run.

    NOTE: chain() with no steps returns None, not a Deferred.

    Example:
        chain(
            lambda _: db.query("SELECT id FROM users WHERE name = 'sam'"),
            lambda uid: db.query("SELECT city FROM addresses WHERE user = ?", uid),
            str.upper,
        )
    """
    if not steps:
        return None
    return reduce(lambda acc, step: bind(acc, _as_step(step)), steps, const(None))


__all__ = ("chain",)
