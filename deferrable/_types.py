"""
Core type definitions for deferrable.

Aliases used across the library.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

if typing.TYPE_CHECKING:
    from .deferred import Deferred

# ============================================================================
# Type aliases
# ============================================================================

# Predicate = function that tests success values
type Predicate = Callable[..., bool]

# Callback = success handler, receives every value passed to succeed()
type Callback = Callable[..., typing.Any]

# Errback = failure handler, receives the error passed to fail()
type Errback[E] = Callable[[E], typing.Any]

# Step = continuation for bind(): returns a Deferred or a plain value
type Step = Callable[..., typing.Any]

# Block = loop body producing a fresh attempt on every call
type Block[T, E] = Callable[[], Deferred[T, E]]

# Condition = loop guard evaluated against the latest success value
type Condition[T] = Callable[[T | None], bool]

__all__ = (
    "Predicate",
    "Callback",
    "Errback",
    "Step",
    "Block",
    "Condition",
)
