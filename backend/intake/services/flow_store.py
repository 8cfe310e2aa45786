# /intake/services/flow_store.py

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import redis.asyncio as redis
import structlog

from intake.config.settings import Settings, settings
from intake.errors.app_error import AppError
from intake.errors.error_codes import ErrorCodes
from intake.models.flow import Snapshot
from intake.utils.metrics import flow_store_operations

# This service holds the flow registry: for every HTTP session, a mapping from
# flow id (one per browser tab) to the latest snapshot of that flow. Snapshots
# are stored in their JSON form so that whatever is read back went through the
# same serialization as what was written.

log = structlog.get_logger(__name__)


class FlowStore(ABC):
    """Key-value store of snapshots, indexed by session id and flow id."""

    @abstractmethod
    async def get(self, session_id: str, flow_id: str) -> Optional[Snapshot]:
        ...

    @abstractmethod
    async def set(self, session_id: str, flow_id: str, snapshot: Snapshot) -> None:
        ...

    @abstractmethod
    async def flow_ids(self, session_id: str) -> List[str]:
        ...

    async def close(self) -> None:
        return None


class MemoryFlowStore(FlowStore):
    """
    In-process store for development and tests. Sessions expire after ttl seconds
    without a write; every write also drops the sessions that have expired since.
    """

    def __init__(self, ttl: int = 3600):
        self.ttl = ttl
        self._sessions: Dict[str, Tuple[float, Dict[str, str]]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def _flows(self, session_id: str) -> Optional[Dict[str, str]]:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        expires_at, flows = entry
        if expires_at <= time.monotonic():
            del self._sessions[session_id]
            return None
        return flows

    async def get(self, session_id: str, flow_id: str) -> Optional[Snapshot]:
        flows = self._flows(session_id)
        raw = flows.get(flow_id) if flows else None
        flow_store_operations.labels(operation="get", status="hit" if raw else "miss").inc()
        return Snapshot.from_json(raw) if raw else None

    async def set(self, session_id: str, flow_id: str, snapshot: Snapshot) -> None:
        self.purge_expired()
        flows = self._flows(session_id) or {}
        flows[flow_id] = snapshot.to_json()
        self._sessions[session_id] = (time.monotonic() + self.ttl, flows)
        flow_store_operations.labels(operation="set", status="success").inc()

    async def flow_ids(self, session_id: str) -> List[str]:
        return list(self._flows(session_id) or {})

    def purge_expired(self) -> int:
        """Drops every expired session and returns how many were removed."""
        now = time.monotonic()
        expired = [session_id for session_id, (expires_at, _) in self._sessions.items() if expires_at <= now]
        for session_id in expired:
            del self._sessions[session_id]
        if expired:
            log.debug("Purged expired sessions", count=len(expired))
        return len(expired)


class RedisFlowStore(FlowStore):
    """
    One Redis hash per session (field = flow id, value = snapshot JSON).
    The key TTL follows the session expiry plus 5% to allow for clock drift.
    """

    def __init__(self, redis_url: str, key_prefix: str = "SESSION:", ttl: int = 3600, client: Optional[redis.Redis] = None):
        self.key_prefix = key_prefix
        self.ttl = int(ttl * 1.05)
        if client is not None:
            self.redis = client
        else:
            self.redis_pool = redis.ConnectionPool.from_url(redis_url, max_connections=20)
            self.redis = redis.Redis(connection_pool=self.redis_pool)

    def _key(self, session_id: str) -> str:
        return f"{self.key_prefix}{session_id}:flows"

    async def get(self, session_id: str, flow_id: str) -> Optional[Snapshot]:
        try:
            raw = await self.redis.hget(self._key(session_id), flow_id)
        except redis.RedisError as e:
            flow_store_operations.labels(operation="get", status="error").inc()
            log.error("Flow registry read failed", session_id=session_id, flow_id=flow_id, error=str(e))
            raise AppError("The session store is unavailable", ErrorCodes.SESSION_STORE_UNAVAILABLE, status_code=503) from e

        flow_store_operations.labels(operation="get", status="hit" if raw else "miss").inc()
        return Snapshot.from_json(raw) if raw else None

    async def set(self, session_id: str, flow_id: str, snapshot: Snapshot) -> None:
        key = self._key(session_id)
        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                await pipe.hset(key, flow_id, snapshot.to_json()).expire(key, self.ttl).execute()
        except redis.RedisError as e:
            flow_store_operations.labels(operation="set", status="error").inc()
            log.error("Flow registry write failed", session_id=session_id, flow_id=flow_id, error=str(e))
            raise AppError("The session store is unavailable", ErrorCodes.SESSION_STORE_UNAVAILABLE, status_code=503) from e

        flow_store_operations.labels(operation="set", status="success").inc()

    async def flow_ids(self, session_id: str) -> List[str]:
        try:
            keys = await self.redis.hkeys(self._key(session_id))
        except redis.RedisError as e:
            flow_store_operations.labels(operation="list", status="error").inc()
            log.error("Flow registry listing failed", session_id=session_id, error=str(e))
            raise AppError("The session store is unavailable", ErrorCodes.SESSION_STORE_UNAVAILABLE, status_code=503) from e
        return [key.decode("utf-8") if isinstance(key, bytes) else key for key in keys]

    async def ping(self) -> bool:
        try:
            return await self.redis.ping()
        except redis.RedisError as e:
            log.error("Session store ping failed", error=str(e))
            raise AppError("The session store is unavailable", ErrorCodes.SESSION_STORE_UNAVAILABLE, status_code=503) from e

    async def close(self) -> None:
        await self.redis.aclose()


class FlowSession:
    """
    The flow registry of one HTTP session. The flow id is an opaque,
    caller-supplied index; nothing here interprets it.
    """

    def __init__(self, session_id: str, store: FlowStore):
        self.id = session_id
        self.store = store

    async def get(self, flow_id: str) -> Optional[Snapshot]:
        return await self.store.get(self.id, flow_id)

    async def put(self, flow_id: str, snapshot: Snapshot) -> None:
        await self.store.set(self.id, flow_id, snapshot)

    async def flow_ids(self) -> List[str]:
        return await self.store.flow_ids(self.id)


def create_flow_store(settings_obj: Settings) -> FlowStore:
    if settings_obj.session_type == "redis":
        log.info("Using Redis flow registry", redis_url=settings_obj.redis_url)
        return RedisFlowStore(
            settings_obj.redis_url,
            key_prefix=settings_obj.session_key_prefix,
            ttl=settings_obj.session_expires_seconds,
        )
    return MemoryFlowStore(ttl=settings_obj.session_expires_seconds)


# Globally accessible instance
flow_store = create_flow_store(settings)
