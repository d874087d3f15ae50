"""
Deferrable: combinators for single-shot deferred results.

Compose callback-driven operations like ordinary expressions: sequence,
transform, validate, join, retry, without wiring success and failure
propagation by hand.

Architecture:
- Deferred is the primitive: ordered handler queues with re-entrant settlement
- Sequencing (bind, map, transform_error) returns a new Deferred
- Validation (guard, rescue_from) redirects settlement of the same Deferred
- Joins and loops are aggregators over indexed response slots
- Loops and timeouts schedule through a Reactor strategy
"""

# Core types
from ._types import Block, Callback, Condition, Errback, Predicate, Step
from .deferred import Deferrable, Deferred, State

# Internal helpers (for custom aggregators)
from . import _helpers
from ._aggregate import Aggregator

# Reactor strategies
from . import reactor
from .reactor import (
    AsyncioReactor,
    Reactor,
    SynchronousReactor,
    current_reactor,
    use_reactor,
)

# Lift helpers
from . import lift
from .lift import (
    blank,
    const,
    deferrably,
    failure,
    from_result,
    lifted,
    success,
    to_lazy_coro_result,
    to_result,
)

# Sequencing
from .transform import bind, map, transform, transform_error

# Control flow
from .control import (
    Loop,
    LoopPolicy,
    UntilFailure,
    UntilSuccess,
    While,
    chain,
    guard,
    loop_until,
    loop_until_failure,
    loop_until_success,
    loop_while,
    rescue_from,
)

# Concurrency
from .concurrency import (
    FirstSuccess,
    FirstSuccessPolicy,
    InParallel,
    Join,
    Successes,
    in_parallel,
    join_first_success,
    join_successes,
)

# Time
from .time import timeout

# Errors
from ._errors import AttemptsExhaustedError, GuardFailed, ReactorNotRunningError, TimeoutError

__all__ = (
    # Types
    "Block",
    "Callback",
    "Condition",
    "Errback",
    "Predicate",
    "Step",
    # Core
    "Deferrable",
    "Deferred",
    "State",
    "Aggregator",
    # Internal helpers (for custom aggregators)
    "_helpers",
    # Reactor
    "reactor",
    "AsyncioReactor",
    "Reactor",
    "SynchronousReactor",
    "current_reactor",
    "use_reactor",
    # Lift module (namespace import - preferred)
    "lift",
    # Lift functions (direct import)
    "blank",
    "const",
    "deferrably",
    "failure",
    "from_result",
    "lifted",
    "success",
    "to_lazy_coro_result",
    "to_result",
    # Sequencing
    "bind",
    "map",
    "transform",
    "transform_error",
    # Control
    "LoopPolicy",
    "Loop",
    "UntilFailure",
    "UntilSuccess",
    "While",
    "chain",
    "guard",
    "loop_until",
    "loop_until_failure",
    "loop_until_success",
    "loop_while",
    "rescue_from",
    # Concurrency
    "FirstSuccessPolicy",
    "FirstSuccess",
    "InParallel",
    "Join",
    "Successes",
    "in_parallel",
    "join_first_success",
    "join_successes",
    # Time
    "timeout",
    # Errors
    "AttemptsExhaustedError",
    "GuardFailed",
    "ReactorNotRunningError",
    "TimeoutError",
)
