import asyncio

from bowling_tracker.services import game
from bowling_tracker.services.store import GameStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_create_get_delete():
    store = GameStore(ttl_seconds=60)

    async def scenario():
        state = game.init_game(["Ann"])
        gid = await store.create(state)
        assert await store.get(gid) is state
        assert await store.get("missing") is None
        assert await store.delete(gid) is True
        assert await store.delete(gid) is False
        assert await store.get(gid) is None

    asyncio.run(scenario())


def test_update_runs_under_lock_and_returns_result():
    store = GameStore(ttl_seconds=60)

    async def scenario():
        gid = await store.create(game.init_game(["Ann"]))
        turn = await store.update(
            gid, lambda s: game.submit_roll(s, 0, 0, 0, "X")["turn"]
        )
        assert turn == game.Turn(0, 1, 0)
        assert await store.update("missing", lambda s: s) is None

    asyncio.run(scenario())


def test_idle_games_expire():
    clock = FakeClock()
    store = GameStore(ttl_seconds=30, clock=clock)

    async def scenario():
        stale = await store.create(game.init_game(["Ann"]))
        fresh = await store.create(game.init_game(["Bo"]))
        clock.now += 20
        assert await store.get(fresh) is not None
        clock.now += 20
        assert await store.get(stale) is None
        assert await store.get(fresh) is not None
        assert len(store) == 1

    asyncio.run(scenario())


def test_non_positive_ttl_keeps_games():
    clock = FakeClock()
    store = GameStore(ttl_seconds=0, clock=clock)

    async def scenario():
        gid = await store.create(game.init_game(["Ann"]))
        clock.now += 10**6
        assert await store.get(gid) is not None

    asyncio.run(scenario())
