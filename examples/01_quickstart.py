from __future__ import annotations

from _infra import CallbackClient, banner, run

from deferrable import LoopPolicy, lift as L, loop_until_success
from kungfu import Error, Ok


async def main() -> None:
    banner("01_quickstart: deferred + bind + loop + timeout")

    api = CallbackClient(name="api", delay_seconds=0.01, failures_before_ok=2)

    greeting = (
        loop_until_success(lambda: api.fetch_user(42), policy=LoopPolicy(max_attempts=5))
        .timeout(0.5)
        .guard("inactive user", lambda user: user.is_active)
        .map(lambda user: f"hello, {user.name}")
    )

    match await L.down.to_result(greeting):
        case Ok(message):
            print(message)
        case Error(err):
            print(f"error: {err!r}")


if __name__ == "__main__":
    run(main)
