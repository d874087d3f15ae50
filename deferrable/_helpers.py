"""Internal helpers for deferrable.

Common functions used across multiple combinator modules.
These are not part of the public API but are handy when writing
custom aggregators."""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass

if typing.TYPE_CHECKING:
    from .deferred import Deferrable


def unpack(values: tuple[typing.Any, ...]) -> typing.Any:
    """
    Collapse succeed() arguments into a single value.

    No values -> None, one value -> that value, several -> the tuple.
    """
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return values


def is_deferrable(value: object) -> bool:
    """True if value can have success and failure handlers registered on it."""
    return callable(getattr(value, "on_success", None)) and callable(
        getattr(value, "on_failure", None)
    )


# Step results, decided at the combinator boundary
@dataclass(frozen=True, slots=True)
class Chained:
    """Step returned a Deferred: its outcome becomes the outcome."""

    deferred: Deferrable[typing.Any, typing.Any]


@dataclass(frozen=True, slots=True)
class Plain:
    """Step returned an ordinary value: it becomes the success value."""

    value: typing.Any


type StepResult = Chained | Plain


def classify(value: object) -> StepResult:
    """Tag a step's return value as Chained or Plain."""
    if is_deferrable(value):
        return Chained(typing.cast("Deferrable[typing.Any, typing.Any]", value))
    return Plain(value)


def negate(condition: Callable[..., typing.Any]) -> Callable[..., bool]:
    """Boolean complement of a predicate."""

    def negated(*args: typing.Any) -> bool:
        return not condition(*args)

    return negated


__all__ = (
    "unpack",
    "is_deferrable",
    "Chained",
    "Plain",
    "StepResult",
    "classify",
    "negate",
)
