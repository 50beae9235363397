"""Tests for InMemorySessionStore."""

from datetime import timedelta

from app.application.dtos.session import SessionData
from app.infrastructure.sessions import InMemorySessionStore
from tests.fakes import FakeClock


def _data(clock: FakeClock, ttl_seconds: int = 3600) -> SessionData:
    now = clock()
    return SessionData(
        account_id="acct-1",
        email="ana@example.org",
        role="participant",
        first_name="Ana",
        last_name="Lopez",
        created_at=now,
        expires_at=now + timedelta(seconds=ttl_seconds),
    )


async def test_create_and_get(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    data = _data(clock)
    session_id = await store.create(data)
    assert len(session_id) >= 32
    assert await store.get(session_id) == data


async def test_ids_are_unique(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    ids = {await store.create(_data(clock)) for _ in range(20)}
    assert len(ids) == 20


async def test_unknown_and_empty_ids(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    assert await store.get("nope") is None
    assert await store.get("") is None


async def test_expired_session_dropped_on_read(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    session_id = await store.create(_data(clock, ttl_seconds=60))
    clock.advance(59)
    assert await store.get(session_id) is not None
    clock.advance(1)
    assert await store.get(session_id) is None
    assert len(store) == 0


async def test_destroy_is_idempotent(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    session_id = await store.create(_data(clock))
    await store.destroy(session_id)
    await store.destroy(session_id)
    assert await store.get(session_id) is None


async def test_purge_expired(clock: FakeClock) -> None:
    store = InMemorySessionStore(clock=clock)
    await store.create(_data(clock, ttl_seconds=60))
    keep = await store.create(_data(clock, ttl_seconds=600))
    clock.advance(120)
    assert await store.purge_expired() == 1
    assert len(store) == 1
    assert await store.get(keep) is not None
