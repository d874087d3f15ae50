"""Aggregation base

Shared strategy for combinators that wait on several Deferreds: each input
(join) or attempt (loop) gets a slot indexed by registration order. A slot
is None until that input responds, then Ok(value) or Error(error), so a
response of None stays distinguishable from no response at all.

Success and failure counts are kept as responses arrive, so done() checks
never rescan the slots; the ordered lists are built once, when finishing."""

from __future__ import annotations

import logging
import typing

from kungfu import Error, Ok, Result

from ._helpers import is_deferrable, unpack
from .deferred import Deferrable, Deferred

logger = logging.getLogger(__name__)


class Aggregator[T, E](Deferred[T, E]):
    """
    Deferred settled by inspecting the slots of several operations.

    Subclasses define _done() (enough responses?) and _finish() (settle self).
    Responses arriving after the aggregator settled are recorded but ignored.
    """

    def __init__(self) -> None:
        super().__init__()
        self._slots: list[Result[typing.Any, typing.Any] | None] = []
        self._success_count = 0
        self._failure_count = 0

    def _register(self, operation: Deferrable[typing.Any, typing.Any]) -> Deferrable[typing.Any, typing.Any]:
        if not is_deferrable(operation):
            raise TypeError(
                f"{type(self).__name__} expected a Deferred, got {type(operation).__name__}"
            )
        index = len(self._slots)
        self._slots.append(None)

        def on_success(*values: typing.Any) -> None:
            self._record(index, Ok(unpack(values)))
            self._check()

        def on_failure(error: typing.Any) -> None:
            self._record(index, Error(error))
            self._check()

        operation.on_success(on_success)
        operation.on_failure(on_failure)
        return operation

    def _record(self, index: int, outcome: Result[typing.Any, typing.Any]) -> None:
        # A redirected operation responds twice; the later outcome replaces the earlier one
        match self._slots[index]:
            case Ok(_):
                self._success_count -= 1
            case Error(_):
                self._failure_count -= 1
            case _:
                pass
        self._slots[index] = outcome
        match outcome:
            case Ok(_):
                self._success_count += 1
            case Error(_):
                self._failure_count += 1

    def _check(self) -> None:
        if self.pending and self._done():
            logger.debug("%s finished after %d responses", type(self).__name__, self.responded)
            self._finish()

    @property
    def successes(self) -> list[typing.Any]:
        """Success values in registration order."""
        out: list[typing.Any] = []
        for slot in self._slots:
            match slot:
                case Ok(value):
                    out.append(value)
                case _:
                    pass
        return out

    @property
    def failures(self) -> list[typing.Any]:
        """Failure values in registration order."""
        out: list[typing.Any] = []
        for slot in self._slots:
            match slot:
                case Error(err):
                    out.append(err)
                case _:
                    pass
        return out

    @property
    def success_count(self) -> int:
        return self._success_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def responded(self) -> int:
        return self._success_count + self._failure_count

    def _latest_success(self) -> typing.Any:
        """Success value in the highest slot that has one, or None."""
        if not self._success_count:
            return None
        for slot in reversed(self._slots):
            match slot:
                case Ok(value):
                    return value
                case _:
                    pass
        return None

    def _latest_failure(self) -> typing.Any:
        """Failure value in the highest slot that has one, or None."""
        if not self._failure_count:
            return None
        for slot in reversed(self._slots):
            match slot:
                case Error(err):
                    return err
                case _:
                    pass
        return None

    def _done(self) -> bool:
        raise NotImplementedError("subclasses should override _done()")

    def _finish(self) -> None:
        raise NotImplementedError("subclasses should override _finish()")


__all__ = ("Aggregator",)
