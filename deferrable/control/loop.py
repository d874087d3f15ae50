"""
Loop combinators
================

Run attempts one after another until a stop condition holds. Each call of
block starts a fresh attempt Deferred.

Two drivers, chosen by the reactor:
- reactor driving: every attempt starts on a later reactor turn (call_soon),
  so the stack stays flat and other work interleaves between attempts.
- nothing driving: attempts are expected to settle inline and run in a plain
  while loop, so long retry sequences never recurse.

Settling the loop's own Deferred from outside stops it before the next
attempt; that is the only way to cancel a loop.
"""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass

from .._aggregate import Aggregator
from .._errors import AttemptsExhaustedError
from .._helpers import is_deferrable, negate
from .._types import Block, Condition
from ..deferred import Deferrable
from ..reactor import Reactor, current_reactor

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoopPolicy:
    """Configuration for loops. max_attempts=None means no limit."""

    max_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("LoopPolicy.max_attempts must be >= 1")


class Loop[T, E](Aggregator[T, E]):
    """
    Aggregator over attempts produced one at a time by block.

    Attempts run one after another and the loop ends at the first response
    that decides it, so that response is always in the latest slot.
    """

    def __init__(
        self,
        block: Block[typing.Any, typing.Any],
        *,
        policy: LoopPolicy = LoopPolicy(),
        reactor: Reactor | None = None,
    ) -> None:
        if not callable(block):
            raise TypeError("loop body must be callable")
        super().__init__()
        self._block = block
        self._policy = policy
        self._reactor = reactor
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def attempts(self) -> int:
        return len(self._slots)

    def setup(self) -> typing.Self:
        """Check the stop condition, then start driving attempts."""
        self._check()
        self.bothback(self._stop)

        reactor = self._reactor if self._reactor is not None else current_reactor()
        if reactor.is_driving():
            self._schedule(reactor)
        else:
            self._run_inline()
        return self

    def _stop(self, *_: typing.Any) -> None:
        if not self._stopped:
            logger.debug("%s stopped after %d attempts", type(self).__name__, self.attempts)
        self._stopped = True

    # Reactor driver

    def _schedule(self, reactor: Reactor) -> None:
        if self._stopped:
            return
        reactor.call_soon(lambda: self._tick(reactor))

    def _tick(self, reactor: Reactor) -> None:
        if self._stopped:
            return
        attempt = self._next_attempt()
        if attempt is None:
            return
        attempt.on_success(lambda *_: self._schedule(reactor))
        attempt.on_failure(lambda _: self._schedule(reactor))

    # Inline driver

    def _run_inline(self) -> None:
        while not self._stopped:
            attempt = self._next_attempt()
            if attempt is None:
                return
            if self._slots[-1] is None:
                # Attempt did not settle inline: resume once it does
                attempt.on_success(lambda *_: self._run_inline())
                attempt.on_failure(lambda _: self._run_inline())
                return

    def _next_attempt(self) -> Deferrable[typing.Any, typing.Any] | None:
        max_attempts = self._policy.max_attempts
        if max_attempts is not None and self.attempts >= max_attempts:
            self.fail(typing.cast(E, AttemptsExhaustedError(self.attempts)))
            return None

        logger.debug("%s starting attempt %d", type(self).__name__, self.attempts + 1)
        try:
            attempt = self._block()
        except Exception as exc:
            self.fail(typing.cast(E, exc))
            return None
        if not is_deferrable(attempt):
            self.fail(typing.cast(E, TypeError(
                f"loop body must return a Deferred, got {type(attempt).__name__}"
            )))
            return None
        return self._register(attempt)


class UntilSuccess(Loop[typing.Any, typing.Any]):
    """Retry until an attempt succeeds, then succeed with its value."""

    def _done(self) -> bool:
        return self.success_count > 0

    def _finish(self) -> None:
        self.succeed(self._latest_success())


class UntilFailure(Loop[typing.Any, typing.Any]):
    """Repeat until an attempt fails, then fail with its error."""

    def _done(self) -> bool:
        return self.failure_count > 0

    def _finish(self) -> None:
        self.fail(self._latest_failure())


class While(Loop[typing.Any, typing.Any]):
    """
    Run attempts while condition(latest success) holds.

    condition sees None before the first attempt. A failed attempt or a
    raising condition ends the loop with a failure; otherwise the loop
    succeeds with the latest success value (None if no attempt ran).
    """

    def __init__(
        self,
        condition: Condition[typing.Any],
        block: Block[typing.Any, typing.Any],
        *,
        policy: LoopPolicy = LoopPolicy(),
        reactor: Reactor | None = None,
    ) -> None:
        if not callable(condition):
            raise TypeError("loop condition must be callable")
        super().__init__(block, policy=policy, reactor=reactor)
        self._condition = condition

    def _done(self) -> bool:
        if self.failure_count:
            return True
        try:
            return not self._condition(self._latest_success())
        except Exception as exc:
            self.fail(exc)
            return False

    def _finish(self) -> None:
        if self.failure_count:
            self.fail(self._latest_failure())
            return
        self.succeed(self._latest_success())


# ============================================================================
# Sugar
# ============================================================================


def loop_until_success[T](
    block: Block[T, typing.Any],
    *,
    policy: LoopPolicy = LoopPolicy(),
    reactor: Reactor | None = None,
) -> UntilSuccess:
    """
    Call block until the Deferred it returns succeeds.

    Fails if block raises. Never settles if every attempt fails (unless
    policy.max_attempts is set).

    Example:
        loop_until_success(lambda: ui.wait_for_click(timeout=1))
    """
    return UntilSuccess(block, policy=policy, reactor=reactor).setup()


def loop_until_failure(
    block: Block[typing.Any, typing.Any],
    *,
    policy: LoopPolicy = LoopPolicy(),
    reactor: Reactor | None = None,
) -> UntilFailure:
    """
    Call block until the Deferred it returns fails, then fail with that error.

    Example:
        pages = iter(range(1, 1000))
        loop_until_failure(lambda: api.fetch_page(next(pages)))
    """
    return UntilFailure(block, policy=policy, reactor=reactor).setup()


def loop_while(
    condition: Condition[typing.Any],
    block: Block[typing.Any, typing.Any],
    *,
    policy: LoopPolicy = LoopPolicy(),
    reactor: Reactor | None = None,
) -> While:
    """Asynchronous while loop: block runs while condition(last value) holds."""
    return While(condition, block, policy=policy, reactor=reactor).setup()


def loop_until(
    condition: Condition[typing.Any],
    block: Block[typing.Any, typing.Any],
    *,
    policy: LoopPolicy = LoopPolicy(),
    reactor: Reactor | None = None,
) -> While:
    """Asynchronous until loop: block runs until condition(last value) holds."""
    if not callable(condition):
        raise TypeError("loop condition must be callable")
    return While(negate(condition), block, policy=policy, reactor=reactor).setup()


__all__ = (
    "Loop",
    "LoopPolicy",
    "UntilFailure",
    "UntilSuccess",
    "While",
    "loop_until",
    "loop_until_failure",
    "loop_until_success",
    "loop_while",
)
