from __future__ import annotations

import asyncio
import itertools
import typing

import pytest

from deferrable import (
    Aggregator,
    AsyncioReactor,
    AttemptsExhaustedError,
    Deferred,
    LoopPolicy,
    SynchronousReactor,
    blank,
    const,
    failure,
    loop_until,
    loop_until_failure,
    loop_until_success,
    loop_while,
    success,
)
from fakes import ManualReactor, error_of, value_of

SYNC = SynchronousReactor()


class Clicks:
    """Fails until the given attempt, then succeeds."""

    def __init__(self, succeed_on: int) -> None:
        self.calls = 0
        self.succeed_on = succeed_on

    def __call__(self) -> Deferred[typing.Any, typing.Any]:
        self.calls += 1
        if self.calls >= self.succeed_on:
            return const(f"click {self.calls}")
        return failure("1 second timeout")


# loop_until_success, no reactor


def test_until_success_immediate() -> None:
    ui = Clicks(succeed_on=1)
    result = loop_until_success(ui, reactor=SYNC)
    assert value_of(result) == "click 1"
    assert ui.calls == 1


def test_until_success_retries_exactly_until_success() -> None:
    ui = Clicks(succeed_on=4)
    result = loop_until_success(ui, reactor=SYNC)
    assert ui.calls == 4
    assert value_of(result) == "click 4"


def test_until_success_block_exception_fails_once() -> None:
    calls = itertools.count(1)

    def eaten() -> Deferred[typing.Any, typing.Any]:
        next(calls)
        raise RuntimeError("User eaten by weasel")

    result = loop_until_success(eaten, reactor=SYNC)
    assert "weasel" in str(error_of(result))
    assert next(calls) == 2


def test_until_success_is_stack_safe_inline() -> None:
    ui = Clicks(succeed_on=20_000)
    result = loop_until_success(ui, reactor=SYNC)
    assert value_of(result) == "click 20000"


def count_slot_scans(monkeypatch: pytest.MonkeyPatch) -> list[int]:
    scans = [0]

    def counting(prop: property) -> property:
        def get(self: Aggregator[typing.Any, typing.Any]) -> list[typing.Any]:
            scans[0] += 1
            return prop.fget(self)  # type: ignore[misc]

        return property(get)

    monkeypatch.setattr(Aggregator, "successes", counting(Aggregator.successes))  # type: ignore[arg-type]
    monkeypatch.setattr(Aggregator, "failures", counting(Aggregator.failures))  # type: ignore[arg-type]
    return scans


def test_long_until_success_never_rescans_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    scans = count_slot_scans(monkeypatch)
    ui = Clicks(succeed_on=5_000)

    result = loop_until_success(ui, reactor=SYNC)

    assert value_of(result) == "click 5000"
    assert result.failure_count == 4_999
    assert scans == [0]


def test_long_until_failure_never_rescans_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    scans = count_slot_scans(monkeypatch)
    pages = itertools.count(1)

    def fetch():
        n = next(pages)
        return failure("no more pages") if n > 5_000 else const(n)

    result = loop_until_failure(fetch, reactor=SYNC)

    assert "no more pages" in str(error_of(result))
    assert result.success_count == 5_000
    assert scans == [0]


def test_long_while_never_rescans_attempts(monkeypatch: pytest.MonkeyPatch) -> None:
    scans = count_slot_scans(monkeypatch)
    counter = itertools.count(1)

    result = loop_while(lambda last: (last or 0) < 5_000, lambda: const(next(counter)), reactor=SYNC)

    assert value_of(result) == 5_000
    assert scans == [0]


def test_until_success_resumes_after_pending_attempt() -> None:
    slow = blank()
    attempts: list[Deferred[typing.Any, typing.Any]] = [failure("x"), slow, const("late")]
    calls = iter(attempts)

    result = loop_until_success(lambda: next(calls), reactor=SYNC)
    assert result.pending

    slow.fail("still no")
    assert value_of(result) == "late"


def test_until_success_stops_inline_when_settled_externally() -> None:
    slow = blank()
    calls = itertools.count(1)

    def click() -> Deferred[typing.Any, typing.Any]:
        if next(calls) > 1:
            raise AssertionError("loop kept going after being settled")
        return slow

    result = loop_until_success(click, reactor=SYNC)
    assert result.pending

    result.fail("cancelled")
    assert result.stopped

    slow.fail("still no click")
    assert next(calls) == 2
    assert error_of(result) == "cancelled"


def test_non_deferred_attempt_fails_loop() -> None:
    result = loop_while(lambda _: True, lambda: "not-a-deferred", reactor=SYNC)  # type: ignore[arg-type,return-value]
    assert isinstance(error_of(result), TypeError)


def test_max_attempts_fails_loop() -> None:
    ui = Clicks(succeed_on=100)
    result = loop_until_success(ui, policy=LoopPolicy(max_attempts=3), reactor=SYNC)
    err = error_of(result)
    assert isinstance(err, AttemptsExhaustedError)
    assert err.attempts == 3
    assert ui.calls == 3


def test_loop_policy_validates() -> None:
    with pytest.raises(ValueError):
        LoopPolicy(max_attempts=0)


# loop_until_success with a reactor


def test_until_success_schedules_each_attempt(reactor: ManualReactor) -> None:
    ui = Clicks(succeed_on=4)
    result = loop_until_success(ui, reactor=reactor)

    assert ui.calls == 0
    assert result.pending

    reactor.run_until_idle()
    assert ui.calls == 4
    assert value_of(result) == "click 4"
    assert reactor.ticks == 4


def test_until_success_stops_when_settled_externally(reactor: ManualReactor) -> None:
    ui = Clicks(succeed_on=1_000)
    result = loop_until_success(ui, reactor=reactor)

    reactor.ready.popleft()()
    reactor.ready.popleft()()
    assert ui.calls == 2

    result.fail("cancelled")
    reactor.run_until_idle()

    assert ui.calls == 2
    assert result.stopped
    assert error_of(result) == "cancelled"


def test_until_success_waits_for_slow_attempts(reactor: ManualReactor) -> None:
    pending: list[Deferred[typing.Any, typing.Any]] = []

    def wait_for_click() -> Deferred[typing.Any, typing.Any]:
        d = blank()
        pending.append(d)
        return d

    result = loop_until_success(wait_for_click, reactor=reactor)
    reactor.run_until_idle()
    assert len(pending) == 1

    pending[0].fail("timeout")
    reactor.run_until_idle()
    assert len(pending) == 2

    pending[1].succeed("click!")
    reactor.run_until_idle()
    assert value_of(result) == "click!"
    assert len(pending) == 2


def test_until_success_in_asyncio() -> None:
    async def run() -> None:
        ui = Clicks(succeed_on=3)
        result = loop_until_success(ui)
        assert ui.calls == 0
        for _ in range(10):
            await asyncio.sleep(0)
        assert value_of(result) == "click 3"

    asyncio.run(run())


# loop_until_failure


def test_until_failure_first_attempt_raises() -> None:
    calls = itertools.count(1)

    def get() -> Deferred[typing.Any, typing.Any]:
        next(calls)
        raise RuntimeError("Invalid URI")

    result = loop_until_failure(get, reactor=SYNC)
    assert "Invalid URI" in str(error_of(result))
    assert next(calls) == 2


def test_until_failure_pages_until_error() -> None:
    page = itertools.count(1)
    fetched: list[int] = []

    def get() -> Deferred[typing.Any, typing.Any]:
        n = next(page)
        fetched.append(n)
        if n < 2:
            return success("lots of data")
        return failure(RuntimeError("No more pages"))

    result = loop_until_failure(get, reactor=SYNC)
    assert "No more pages" in str(error_of(result))
    assert fetched == [1, 2]


def test_until_failure_with_asynchronous_pages(reactor: ManualReactor) -> None:
    page = itertools.count(1)
    fetched: list[int] = []

    def get() -> Deferred[typing.Any, typing.Any]:
        n = next(page)
        fetched.append(n)
        d = blank()
        if n < 3:
            reactor.call_soon(lambda: d.succeed("lots of data"))
        else:
            reactor.call_soon(lambda: d.fail(RuntimeError("No more pages")))
        return d

    result = loop_until_failure(get, reactor=reactor)
    reactor.run_until_idle()

    assert "No more pages" in str(error_of(result))
    assert fetched == [1, 2, 3]


# loop_while / loop_until


def test_while_false_condition_never_runs_body() -> None:
    log: list[int] = []

    def body() -> Deferred[typing.Any, typing.Any]:
        log.append(1)
        return success()

    result = loop_while(lambda _: False, body, reactor=SYNC)
    assert log == []
    assert value_of(result) is None


def test_while_runs_until_condition_false() -> None:
    log: list[int] = []

    def body() -> Deferred[typing.Any, typing.Any]:
        log.append(1)
        return success(f"returnme{len(log)}")

    result = loop_while(lambda _: len(log) < 3, body, reactor=SYNC)
    assert log == [1, 1, 1]
    assert value_of(result) == "returnme3"


def test_while_condition_sees_latest_value() -> None:
    counter = itertools.count(1)
    seen: list[object] = []

    def below_three(last: int | None) -> bool:
        seen.append(last)
        return last is None or last < 3

    result = loop_while(below_three, lambda: const(next(counter)), reactor=SYNC)
    assert seen == [None, 1, 2, 3]
    assert value_of(result) == 3


def test_while_condition_exception_fails() -> None:
    def condition(_: object) -> bool:
        raise RuntimeError("condition")

    def body() -> Deferred[typing.Any, typing.Any]:
        raise RuntimeError("body")

    result = loop_while(condition, body, reactor=SYNC)
    assert str(error_of(result)) == "condition"


def test_while_body_exception_fails() -> None:
    def body() -> Deferred[typing.Any, typing.Any]:
        raise RuntimeError("body")

    result = loop_while(lambda _: True, body, reactor=SYNC)
    assert str(error_of(result)) == "body"


def test_while_failed_attempt_ends_loop() -> None:
    log: list[int] = []

    def body() -> Deferred[typing.Any, typing.Any]:
        log.append(1)
        return failure(RuntimeError("foo"))

    result = loop_while(lambda _: True, body, reactor=SYNC)
    assert log == [1]
    assert "foo" in str(error_of(result))


def test_while_requires_callable_condition() -> None:
    with pytest.raises(TypeError):
        loop_while(True, lambda: const(1), reactor=SYNC)  # type: ignore[arg-type]


def test_until_is_negated_while() -> None:
    counter = itertools.count(1)
    result = loop_until(
        lambda last: last is not None and last >= 5,
        lambda: const(next(counter)),
        reactor=SYNC,
    )
    assert value_of(result) == 5


def test_while_with_reactor(reactor: ManualReactor) -> None:
    counter = itertools.count(1)
    result = loop_while(
        lambda last: last is None or last < 4,
        lambda: const(next(counter)),
        reactor=reactor,
    )
    assert result.pending
    reactor.run_until_idle()
    assert value_of(result) == 4


def test_explicit_asyncio_reactor() -> None:
    async def run() -> int:
        counter = itertools.count(1)
        result = loop_until(
            lambda last: last == 2,
            lambda: const(next(counter)),
            reactor=AsyncioReactor(),
        )
        while result.pending:
            await asyncio.sleep(0)
        return value_of(result)

    assert asyncio.run(run()) == 2
