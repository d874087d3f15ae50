"""
Bind combinator
===============

Monadic sequencing: feed the success of one Deferred into a step that
starts the next operation.

Laws (for steps that return Deferreds):
- Left identity: const(a).bind(f) ≡ f(a)
- Right identity: m.bind(const) ≡ m
- Associativity: m.bind(f).bind(g) ≡ m.bind(lambda x: f(x).bind(g))

NOTE: Associativity breaks when an intermediate step returns a plain value.
      bind() then succeeds with that value directly, while the nested form
      hands it to .bind on a non-Deferred and fails with AttributeError.
"""

from __future__ import annotations

import typing

from .._helpers import Chained, Plain, classify
from .._types import Step
from ..deferred import Deferred


def _settle_from(target: Deferred[typing.Any, typing.Any], step_result: object) -> None:
    match classify(step_result):
        case Chained(deferred):
            deferred.on_success(target.succeed)
            deferred.on_failure(target.fail)
        case Plain(value):
            target.succeed(value)


def bind[E](
    first: Deferred[typing.Any, E],
    step: Step,
) -> Deferred[typing.Any, E]:
    """
    Run step(*values) when first succeeds; the result follows step's outcome.

    - step returns a Deferred: its success/failure becomes the result's.
    - step returns anything else: the result succeeds with it.
    - step raises: the result fails with the exception.
    - first fails: the result fails with the same error, step never runs.

    first itself is not affected by step raising: other handlers on it
    still see its success.

    Example:
        user_id = db.query("SELECT id FROM users WHERE name = ?", "sam")
        location = user_id.bind(lambda uid: db.query("SELECT city ...", uid))
        # or: user_id >> (lambda uid: db.query(...))
    """
    result: Deferred[typing.Any, E] = Deferred()

    def run_step(*values: typing.Any) -> None:
        try:
            step_result = step(*values)
        except Exception as exc:
            result.fail(typing.cast(E, exc))
            return
        _settle_from(result, step_result)

    first.on_success(run_step)
    first.on_failure(result.fail)
    return result


__all__ = ("bind",)
