"""Timeout combinator

Fail a Deferred that stays pending for too long."""

from __future__ import annotations

import logging
import typing

from .._errors import TimeoutError
from ..deferred import Deferred
from ..reactor import Reactor, current_reactor

logger = logging.getLogger(__name__)


def timeout[T, E](
    deferred: Deferred[T, E],
    *,
    seconds: float,
    reactor: Reactor | None = None,
) -> Deferred[T, E]:
    """
    Fail deferred with TimeoutError(seconds) if it is still pending then.

    The timer is cancelled as soon as deferred settles. Needs a reactor
    that supports timers (ReactorNotRunningError otherwise).

    Example:
        loop_until_success(poll).timeout(5.0)
    """
    if seconds < 0:
        raise ValueError("timeout seconds must be >= 0")
    if not deferred.pending:
        return deferred

    def expire() -> None:
        if deferred.pending:
            logger.debug("%r timed out after %ss", deferred, seconds)
            deferred.fail(typing.cast(E, TimeoutError(seconds)))

    handle = (reactor if reactor is not None else current_reactor()).call_later(seconds, expire)
    deferred.bothback(lambda *_: handle.cancel())
    return deferred


__all__ = ("timeout",)
