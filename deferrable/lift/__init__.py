"""
Lift helpers with semantic namespaces.

    from deferrable import lift as L

    L.up.*    - Deferreds with a known outcome
    L.down.*  - awaiting a Deferred from asyncio code
    L.call    - adapters for callback-style and raising code

Examples:
    status = L.const(42)
    status = L.failure(KeyError, "user 42")
    status = L.deferrably(lambda resolve: client.get("k", callback=resolve))

    result = await L.down.to_result(status)
"""

from __future__ import annotations

from . import call as call_ns
from . import down as down_ns
from . import up as up_ns
from .call import deferrably, lifted
from .down import to_lazy_coro_result, to_result
from .up import blank, const, failure, from_result, success

up = up_ns
down = down_ns
call = call_ns

__all__ = (
    # Namespaces (L.up.*, L.down.*, L.call.*)
    "up",
    "down",
    "call",
    # Up
    "blank",
    "const",
    "failure",
    "from_result",
    "success",
    # Call
    "deferrably",
    "lifted",
    # Down
    "to_result",
    "to_lazy_coro_result",
)
