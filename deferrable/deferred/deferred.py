"""Deferred

Single-fire result container with ordered success/failure handler queues.

Settlement is a queue drain, not a broadcast: a handler invoked while the
success queue drains may call fail() on the same Deferred. The nested failure
dispatch runs to completion first, and the remaining success handlers are
then dropped. guard() and rescue_from() are built on exactly this."""

from __future__ import annotations

import enum
import typing
from collections import deque
from collections.abc import Callable

from kungfu import Error, Ok, Result

from .._helpers import unpack
from .._types import Callback, Errback, Predicate, Step

if typing.TYPE_CHECKING:
    from ..reactor import Reactor


class State(enum.Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@typing.runtime_checkable
class Deferrable[T, E](typing.Protocol):
    """Anything that accepts success and failure handlers."""

    def on_success(self, handler: Callback, /) -> typing.Any: ...

    def on_failure(self, handler: Errback[E], /) -> typing.Any: ...


class Deferred[T, E]:
    """
    Deferred result of an operation that will succeed or fail once.

    Handlers fire in registration order. A handler registered after
    settlement runs immediately, before registration returns.

    Fluent API:
        d = blank()
        d.on_success(print).on_failure(log_error)
        d.bind(fetch_details).map(render).rescue_from(KeyError, handler=default_page)
    """

    __slots__ = ("_state", "_values", "_error", "_callbacks", "_errbacks")

    def __init__(self) -> None:
        self._state = State.PENDING
        self._values: tuple[typing.Any, ...] = ()
        self._error: E | None = None
        self._callbacks: deque[Callback] = deque()
        self._errbacks: deque[Errback[E]] = deque()

    # State inspection

    @property
    def state(self) -> State:
        return self._state

    @property
    def pending(self) -> bool:
        return self._state is State.PENDING

    @property
    def succeeded(self) -> bool:
        return self._state is State.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self._state is State.FAILED

    @property
    def result(self) -> Result[T, E] | None:
        """Settled outcome as a Result, or None while pending."""
        match self._state:
            case State.SUCCEEDED:
                return Ok(unpack(self._values))
            case State.FAILED:
                return Error(typing.cast(E, self._error))
            case State.PENDING:
                return None

    # Handler registration

    def on_success(self, handler: Callback, /) -> Deferred[T, E]:
        """Call handler(*values) on success."""
        if self._state is State.SUCCEEDED:
            handler(*self._values)
        elif self._state is State.PENDING:
            self._callbacks.append(handler)
        return self

    def on_failure(self, handler: Errback[E], /) -> Deferred[T, E]:
        """Call handler(error) on failure."""
        if self._state is State.FAILED:
            handler(typing.cast(E, self._error))
        elif self._state is State.PENDING:
            self._errbacks.append(handler)
        return self

    callback = on_success
    errback = on_failure

    def bothback(self, handler: Callable[..., typing.Any], /) -> Deferred[T, E]:
        """Call handler on either outcome, like a finally clause."""
        self.on_success(handler)
        self.on_failure(handler)
        return self

    def safe_callback(self, handler: Callback, /) -> Deferred[T, E]:
        """on_success, but an exception from handler fails this Deferred."""

        def guarded(*values: typing.Any) -> None:
            try:
                handler(*values)
            except Exception as exc:
                self.fail(typing.cast(E, exc))

        return self.on_success(guarded)

    def safe_errback(self, handler: Errback[E], /) -> Deferred[T, E]:
        """on_failure, but an exception from handler re-fails with it."""

        def guarded(error: E) -> None:
            try:
                handler(error)
            except Exception as exc:
                self.fail(typing.cast(E, exc))

        return self.on_failure(guarded)

    # Settlement

    def succeed(self, *values: typing.Any) -> None:
        """Settle as succeeded and drain success handlers."""
        self._state = State.SUCCEEDED
        self._values = values
        self._drain(State.SUCCEEDED)

    def fail(self, error: E) -> None:
        """Settle as failed and drain failure handlers."""
        self._state = State.FAILED
        self._error = error
        self._drain(State.FAILED)

    def _drain(self, state: State) -> None:
        if state is State.SUCCEEDED:
            queue, other = self._callbacks, self._errbacks
        else:
            queue, other = self._errbacks, self._callbacks

        while queue and self._state is state:
            handler = queue.popleft()
            # Payload is re-read: a nested redirect may have replaced it.
            if state is State.SUCCEEDED:
                handler(*self._values)
            else:
                handler(self._error)

        if self._state is state:
            other.clear()

    # Combinators (fluent sugar)

    def bind(self, step: Step, /) -> Deferred[typing.Any, E]:
        """Monadic bind. See transform.bind."""
        from ..transform.bind import bind
        return bind(self, step)

    def __rshift__(self, step: Step) -> Deferred[typing.Any, E]:
        from ..transform.bind import bind
        return bind(self, step)

    def __rlshift__(self, step: Step) -> Deferred[typing.Any, E]:
        """step << d reads right to left: same as d >> step."""
        from ..transform.bind import bind
        return bind(self, step)

    def map(self, f: Callable[..., typing.Any], /) -> Deferred[typing.Any, E]:
        """Transform the success value. See transform.map."""
        from ..transform.map import transform
        return transform(self, f)

    transform = map

    def transform_error(self, f: Callable[[E], typing.Any], /) -> Deferred[T, typing.Any]:
        """Transform the failure value. See transform.map."""
        from ..transform.map import transform_error
        return transform_error(self, f)

    def guard(self, reason: str | None, predicate: Predicate, /) -> Deferred[T, E]:
        """
        Fail with GuardFailed(reason, values) unless predicate(*values) holds.

        Example:
            d.guard("must be even", is_even).guard("too large", lambda n: n < 1000)
        """
        from ..control.guard import guard
        return guard(self, predicate, reason=reason)

    def rescue_from(
        self,
        *error_types: type[BaseException],
        handler: Callable[[typing.Any], typing.Any] | None = None,
    ) -> Deferred[typing.Any, E]:
        """Succeed instead of failing when the error matches error_types."""
        from ..control.recover import rescue_from
        return rescue_from(self, *error_types, handler=handler)

    def timeout(self, seconds: float, *, reactor: Reactor | None = None) -> Deferred[T, E]:
        """Fail with TimeoutError unless settled within seconds."""
        from ..time.timeout import timeout
        return timeout(self, seconds=seconds, reactor=reactor)

    def __repr__(self) -> str:
        match self._state:
            case State.SUCCEEDED:
                return f"<{type(self).__name__} succeeded {self._values!r}>"
            case State.FAILED:
                return f"<{type(self).__name__} failed {self._error!r}>"
            case State.PENDING:
                return f"<{type(self).__name__} pending>"


__all__ = ("Deferrable", "Deferred", "State")
