from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from deferrable import Deferred, lift as L  # noqa: E402


@dataclass(frozen=True, slots=True)
class Failure(Exception):
    message: str
    transient: bool = False

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str
    is_active: bool = True


def _empty_users() -> dict[int, User]:
    return {}


@dataclass(slots=True)
class CallbackClient:
    """Old-style client: results are delivered to a callback on a later loop turn."""

    name: str
    delay_seconds: float = 0.0
    failures_before_ok: int = 0
    users: dict[int, User] = field(default_factory=_empty_users)

    def get_user(
        self,
        user_id: int,
        on_done: Callable[[User], None],
        on_error: Callable[[Failure], None],
    ) -> None:
        loop = asyncio.get_running_loop()
        if self.failures_before_ok > 0:
            self.failures_before_ok -= 1
            loop.call_later(self.delay_seconds, on_error, Failure(f"{self.name}: unavailable", transient=True))
            return
        user = self.users.get(user_id, User(id=user_id, name=f"user:{user_id}@{self.name}"))
        loop.call_later(self.delay_seconds, on_done, user)

    def fetch_user(self, user_id: int) -> Deferred[User, Failure]:
        """Deferred facade over get_user()."""
        d: Deferred[User, Failure] = L.blank()
        self.get_user(user_id, d.succeed, d.fail)
        return d


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
