"""Key-value persistence for the campus collections.

Each collection (reports, users, notifications) is stored as one JSON blob
under a fixed key. Two backends are provided: ``DatabaseKeyValueStore`` keeps
the blobs in the ``kv_entries`` table, ``MemoryKeyValueStore`` keeps them in a
dict for tests and throwaway runs.
"""
import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select

from app.core.database import DatabaseSessionManager
from app.models.kventry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface of the persistence collaborator: ``get`` and ``set`` JSON values."""

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store. Values are kept serialized so reads return fresh copies."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._data[key] = json.dumps(value)

    async def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw


class DatabaseKeyValueStore(KeyValueStore):
    """Store backed by the ``kv_entries`` table."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager

    async def get(self, key: str) -> Optional[Any]:
        async with self.manager.get_session() as session:
            result = await session.execute(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            )
            entry = result.scalar_one_or_none()
            if entry is None:
                return None
            return json.loads(entry.value)

    async def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value)
        async with self.manager.get_session() as session:
            result = await session.execute(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            )
            entry = result.scalar_one_or_none()
            if entry is None:
                session.add(KeyValueEntry(key=key, value=payload))
            else:
                entry.value = payload
        logger.debug(f"Persisted {key} ({len(payload)} bytes)")
