from .chain import chain
from .guard import guard
from .loop import (
    Loop,
    LoopPolicy,
    UntilFailure,
    UntilSuccess,
    While,
    loop_until,
    loop_until_failure,
    loop_until_success,
    loop_while,
)
from .recover import rescue_from

__all__ = (
    # Policies
    "LoopPolicy",
    # Chain
    "chain",
    # Guard
    "guard",
    # Recover
    "rescue_from",
    # Loops
    "Loop",
    "UntilFailure",
    "UntilSuccess",
    "While",
    "loop_until",
    "loop_until_failure",
    "loop_until_success",
    "loop_while",
)
