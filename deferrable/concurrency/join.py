"""
Join combinators
================

Wait on several Deferreds running side by side. Results keep the order
the operations were passed in, not the order they completed in.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass
from typing import Literal

from .._aggregate import Aggregator
from ..deferred import Deferrable


@dataclass(frozen=True, slots=True)
class FirstSuccessPolicy:
    """Configuration for join_first_success: which error to fail with."""

    error_strategy: Literal["first", "last"] = "last"

    def __post_init__(self) -> None:
        if self.error_strategy not in ("first", "last"):
            raise ValueError("FirstSuccessPolicy.error_strategy must be 'first' or 'last'")


class Join[T, E](Aggregator[T, E]):
    """Aggregator over a fixed list of operations."""

    def __init__(self, *operations: Deferrable[typing.Any, typing.Any]) -> None:
        super().__init__()
        self._operations = operations

    def setup(self) -> typing.Self:
        """Register on every operation; settle at once if already done."""
        self._check()
        for operation in self._operations:
            self._register(operation)
        return self

    def _all_responded(self) -> bool:
        return self.responded >= len(self._operations)


class Successes(Join[list[typing.Any], typing.Never]):
    """Succeeds with every success once all operations responded. Never fails."""

    def _done(self) -> bool:
        return self._all_responded()

    def _finish(self) -> None:
        self.succeed(self.successes)


class FirstSuccess[E](Join[typing.Any, E]):
    """
    Succeeds with the first success to arrive.

    Fails once every operation has failed, with the first or last error
    (in operation order) per policy. With no operations it succeeds with None.
    """

    def __init__(
        self,
        *operations: Deferrable[typing.Any, typing.Any],
        policy: FirstSuccessPolicy = FirstSuccessPolicy(),
    ) -> None:
        super().__init__(*operations)
        self._policy = policy

    def _done(self) -> bool:
        return self.success_count > 0 or self._all_responded()

    def _finish(self) -> None:
        successes = self.successes
        failures = self.failures
        if successes or not failures:
            # Earlier successes settle the join first, so at most one is seen here
            self.succeed(successes[0] if successes else None)
            return
        self.fail(failures[0] if self._policy.error_strategy == "first" else failures[-1])


class InParallel(Join[tuple[list[typing.Any], list[typing.Any]], typing.Never]):
    """Succeeds with (successes, failures) once all operations responded."""

    def _done(self) -> bool:
        return self._all_responded()

    def _finish(self) -> None:
        self.succeed((self.successes, self.failures))


# ============================================================================
# Sugar
# ============================================================================


def join_successes(*operations: Deferrable[typing.Any, typing.Any]) -> Successes:
    """
    Wait for all operations, succeed with the values of those that succeeded.

    Never fails. Never settles if some operation never settles.

    Example:
        join_successes(a, b)   # b succeeds with 2, then a with 1 -> [1, 2]
    """
    return Successes(*operations).setup()


def join_first_success(
    *operations: Deferrable[typing.Any, typing.Any],
    policy: FirstSuccessPolicy = FirstSuccessPolicy(),
) -> FirstSuccess[typing.Any]:
    """Succeed with whichever operation succeeds first; fail if all fail."""
    return FirstSuccess(*operations, policy=policy).setup()


def in_parallel(*operations: Deferrable[typing.Any, typing.Any]) -> InParallel:
    """Wait for all operations, succeed with (successes, failures). Never fails."""
    return InParallel(*operations).setup()


__all__ = (
    "FirstSuccess",
    "FirstSuccessPolicy",
    "InParallel",
    "Join",
    "Successes",
    "in_parallel",
    "join_first_success",
    "join_successes",
)
