from .join import (
    FirstSuccess,
    FirstSuccessPolicy,
    InParallel,
    Join,
    Successes,
    in_parallel,
    join_first_success,
    join_successes,
)

__all__ = (
    # Policies
    "FirstSuccessPolicy",
    # Aggregators
    "FirstSuccess",
    "InParallel",
    "Join",
    "Successes",
    # Sugar
    "in_parallel",
    "join_first_success",
    "join_successes",
)
