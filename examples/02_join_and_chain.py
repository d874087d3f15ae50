from __future__ import annotations

from _infra import CallbackClient, Failure, User, banner, run

from deferrable import chain, in_parallel, join_first_success, join_successes, lift as L


async def main() -> None:
    banner("02_join_and_chain: joins, rescue and chained steps")

    primary = CallbackClient(name="primary", delay_seconds=0.02, failures_before_ok=1)
    replica = CallbackClient(name="replica", delay_seconds=0.01)

    first = join_first_success(primary.fetch_user(1), replica.fetch_user(1))
    print("first success:", await L.down.unsafe(first))

    everyone = join_successes(*(replica.fetch_user(uid) for uid in range(1, 4)))
    print("all users:", await L.down.unsafe(everyone))

    flaky = CallbackClient(name="flaky", failures_before_ok=2)
    successes, failures = await L.down.unsafe(
        in_parallel(flaky.fetch_user(7), flaky.fetch_user(8), flaky.fetch_user(9))
    )
    print(f"in parallel: {len(successes)} ok, {len(failures)} failed")

    anonymous = User(id=0, name="anonymous")
    user = CallbackClient(name="down", failures_before_ok=1).fetch_user(5).rescue_from(
        Failure, handler=lambda _: anonymous
    )
    print("user or fallback:", await L.down.unsafe(user))

    @L.lifted
    def shout(user: User) -> str:
        return user.name.upper()

    loud = chain(
        lambda _: replica.fetch_user(2),
        shout,
        lambda name: L.const(f"{name}!"),
    )
    assert loud is not None
    print("chained:", await L.down.unsafe(loud))


if __name__ == "__main__":
    run(main)
