# backend/tests/unit/test_flow_store.py
import pytest
from unittest.mock import AsyncMock, MagicMock
from redis.exceptions import ConnectionError as RedisConnectionError

from intake.config.settings import Settings
from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import MachineContext, Snapshot, StateName
from intake.services.flow_store import MemoryFlowStore, RedisFlowStore, create_flow_store

SNAPSHOT = Snapshot(state=StateName.REQUEST_DETAILS, context=MachineContext(privacy_statement={"agreed_to_terms": True}))


# --- MemoryFlowStore ---

@pytest.mark.asyncio
async def test_memory_store_round_trips_snapshot():
    store = MemoryFlowStore(ttl=60)
    await store.set("sid", "tab-1", SNAPSHOT)

    assert await store.get("sid", "tab-1") == SNAPSHOT
    assert await store.get("sid", "tab-2") is None
    assert await store.get("other", "tab-1") is None


@pytest.mark.asyncio
async def test_memory_store_expires_idle_sessions(mocker):
    clock = mocker.patch("intake.services.flow_store.time.monotonic", return_value=1000.0)
    store = MemoryFlowStore(ttl=60)
    await store.set("sid", "tab-1", SNAPSHOT)

    clock.return_value = 1059.0
    assert await store.get("sid", "tab-1") == SNAPSHOT

    clock.return_value = 1060.0
    assert await store.get("sid", "tab-1") is None
    assert await store.flow_ids("sid") == []


@pytest.mark.asyncio
async def test_memory_store_write_extends_expiry(mocker):
    clock = mocker.patch("intake.services.flow_store.time.monotonic", return_value=0.0)
    store = MemoryFlowStore(ttl=60)
    await store.set("sid", "tab-1", SNAPSHOT)

    clock.return_value = 50.0
    await store.set("sid", "tab-2", SNAPSHOT)

    clock.return_value = 100.0
    assert sorted(await store.flow_ids("sid")) == ["tab-1", "tab-2"]


@pytest.mark.asyncio
async def test_memory_store_purge_expired(mocker):
    clock = mocker.patch("intake.services.flow_store.time.monotonic", return_value=0.0)
    store = MemoryFlowStore(ttl=10)
    await store.set("old", "tab-1", SNAPSHOT)
    clock.return_value = 5.0
    await store.set("new", "tab-1", SNAPSHOT)

    clock.return_value = 12.0
    assert store.purge_expired() == 1
    assert await store.get("new", "tab-1") == SNAPSHOT


@pytest.mark.asyncio
async def test_memory_store_write_reclaims_other_expired_sessions(mocker):
    clock = mocker.patch("intake.services.flow_store.time.monotonic", return_value=0.0)
    store = MemoryFlowStore(ttl=10)
    await store.set("old", "tab-1", SNAPSHOT)
    assert len(store) == 1

    # "old" is never read again; writing another session drops it
    clock.return_value = 20.0
    await store.set("new", "tab-1", SNAPSHOT)

    assert len(store) == 1
    assert await store.flow_ids("old") == []
    assert await store.get("new", "tab-1") == SNAPSHOT


# --- RedisFlowStore ---

def _redis_store(client):
    return RedisFlowStore("redis://unused", key_prefix="SESSION:", ttl=1000, client=client)


def _redis_client_with_pipeline(execute=None):
    pipe = MagicMock()
    pipe.hset.return_value = pipe
    pipe.expire.return_value = pipe
    pipe.execute = execute or AsyncMock(return_value=[1, True])

    client = MagicMock()
    client.pipeline.return_value.__aenter__ = AsyncMock(return_value=pipe)
    client.pipeline.return_value.__aexit__ = AsyncMock(return_value=False)
    return client, pipe


@pytest.mark.asyncio
async def test_redis_store_writes_hash_with_padded_ttl():
    client, pipe = _redis_client_with_pipeline()
    store = _redis_store(client)

    await store.set("sid", "tab-1", SNAPSHOT)

    client.pipeline.assert_called_once_with(transaction=True)
    pipe.hset.assert_called_once_with("SESSION:sid:flows", "tab-1", SNAPSHOT.to_json())
    pipe.expire.assert_called_once_with("SESSION:sid:flows", 1050)
    pipe.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_redis_store_reads_snapshot():
    client = MagicMock(hget=AsyncMock(return_value=SNAPSHOT.to_json().encode("utf-8")))
    store = _redis_store(client)

    assert await store.get("sid", "tab-1") == SNAPSHOT
    client.hget.assert_awaited_once_with("SESSION:sid:flows", "tab-1")


@pytest.mark.asyncio
async def test_redis_store_missing_flow_returns_none():
    store = _redis_store(MagicMock(hget=AsyncMock(return_value=None)))
    assert await store.get("sid", "tab-1") is None


@pytest.mark.asyncio
async def test_redis_store_lists_flow_ids():
    store = _redis_store(MagicMock(hkeys=AsyncMock(return_value=[b"tab-1", "tab-2"])))
    assert await store.flow_ids("sid") == ["tab-1", "tab-2"]


@pytest.mark.asyncio
async def test_redis_store_errors_surface_as_app_error():
    client, _ = _redis_client_with_pipeline(execute=AsyncMock(side_effect=RedisConnectionError("connection refused")))
    client.hget = AsyncMock(side_effect=RedisConnectionError("connection refused"))
    client.hkeys = AsyncMock(side_effect=RedisConnectionError("connection refused"))
    client.ping = AsyncMock(side_effect=RedisConnectionError("connection refused"))
    store = _redis_store(client)

    with pytest.raises(AppError) as read_error:
        await store.get("sid", "tab-1")
    assert read_error.value.error_code == ErrorCodes.SESSION_STORE_UNAVAILABLE
    assert read_error.value.status_code == 503

    with pytest.raises(AppError) as write_error:
        await store.set("sid", "tab-1", SNAPSHOT)
    assert write_error.value.error_code == ErrorCodes.SESSION_STORE_UNAVAILABLE

    with pytest.raises(AppError) as list_error:
        await store.flow_ids("sid")
    assert list_error.value.error_code == ErrorCodes.SESSION_STORE_UNAVAILABLE

    with pytest.raises(AppError) as ping_error:
        await store.ping()
    assert ping_error.value.status_code == 503


def test_create_flow_store_follows_session_type():
    memory = create_flow_store(Settings(environment="test", session_type="memory", session_expires_seconds=120))
    assert isinstance(memory, MemoryFlowStore)
    assert memory.ttl == 120

    remote = create_flow_store(
        Settings(environment="test", session_type="redis", redis_url="redis://localhost:6379/1", session_key_prefix="S:")
    )
    assert isinstance(remote, RedisFlowStore)
    assert remote.key_prefix == "S:"
