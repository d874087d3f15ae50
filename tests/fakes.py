from __future__ import annotations

import typing
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from kungfu import Error, Ok

from deferrable import Deferred


class Recorder:
    """Handler that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[typing.Any, ...]] = []

    def __call__(self, *args: typing.Any) -> None:
        self.calls.append(args)

    @property
    def called(self) -> bool:
        return bool(self.calls)

    @property
    def last(self) -> tuple[typing.Any, ...]:
        return self.calls[-1]


@dataclass
class ManualTimer:
    due: float
    callback: Callable[[], typing.Any]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualReactor:
    """Deterministic reactor: callbacks run only when the test says so."""

    driving: bool = True
    now: float = 0.0
    ready: deque[Callable[[], typing.Any]] = field(default_factory=deque)
    timers: list[ManualTimer] = field(default_factory=list)
    ticks: int = 0

    def is_driving(self) -> bool:
        return self.driving

    def call_soon(self, callback: Callable[[], typing.Any], /) -> None:
        self.ready.append(callback)

    def call_later(self, seconds: float, callback: Callable[[], typing.Any], /) -> ManualTimer:
        timer = ManualTimer(self.now + seconds, callback)
        self.timers.append(timer)
        return timer

    def run_until_idle(self, limit: int = 10_000) -> int:
        ran = 0
        while self.ready:
            if ran >= limit:
                raise RuntimeError("reactor did not go idle")
            self.ready.popleft()()
            ran += 1
        self.ticks += ran
        return ran

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.timers if not t.cancelled and t.due <= self.now),
            key=lambda t: t.due,
        )
        for timer in due:
            self.timers.remove(timer)
            timer.callback()
        self.run_until_idle()

    @property
    def live_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]


def value_of(d: Deferred[typing.Any, typing.Any]) -> typing.Any:
    match d.result:
        case Ok(value):
            return value
        case Error(err):
            raise AssertionError(f"expected success, failed with {err!r}")
        case None:
            raise AssertionError("expected success, still pending")


def error_of(d: Deferred[typing.Any, typing.Any]) -> typing.Any:
    match d.result:
        case Error(err):
            return err
        case Ok(value):
            raise AssertionError(f"expected failure, succeeded with {value!r}")
        case None:
            raise AssertionError("expected failure, still pending")
