from __future__ import annotations

import typing


class GuardFailed(Exception):
    """Success arguments did not satisfy a guard() predicate."""

    reason: str | None
    values: tuple[typing.Any, ...]

    def __init__(self, reason: str | None, values: tuple[typing.Any, ...]) -> None:
        self.reason = reason
        self.values = tuple(values)
        shown = ", ".join(repr(a) for a in self.values)
        if reason is None:
            super().__init__(f"Guard failed for ({shown})")
        else:
            super().__init__(f"Guard failed: {reason} ({shown})")


class TimeoutError(Exception):
    """Deferred was still pending when its timer fired."""

    seconds: float

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Timed out after {seconds}s")


class AttemptsExhaustedError(Exception):
    """Loop reached LoopPolicy.max_attempts without finishing."""

    attempts: int

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Loop did not finish after {attempts} attempts")


class ReactorNotRunningError(RuntimeError):
    """Scheduling was requested but no reactor is driving."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation}() needs a running reactor")


__all__ = (
    "AttemptsExhaustedError",
    "GuardFailed",
    "ReactorNotRunningError",
    "TimeoutError",
)
