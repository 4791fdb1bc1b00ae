"""Process-wide campus state: the report, user and notification collections.

The state is loaded once from the key-value store (falling back to seed data
for reports and to empty collections otherwise) and each collection is flushed
back after every mutation. Flush failures are logged and swallowed, so the
in-memory collections stay authoritative until the next restart.
"""
import logging
from typing import Any, Callable, List, Type, TypeVar

from pydantic import BaseModel

from app.constants.constants import (
    NOTIFICATIONS_STORAGE_KEY,
    REPORTS_STORAGE_KEY,
    USERS_STORAGE_KEY,
)
from app.constants.seed import initial_reports
from app.core.storage import KeyValueStore
from app.schemas.notificationSchema import Notification
from app.schemas.reportSchema import Report
from app.schemas.userSchema import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CampusState:
    """Owns the three collections and their persistence."""

    def __init__(self, kv: KeyValueStore, seed_on_empty: bool = True):
        self.kv = kv
        self.seed_on_empty = seed_on_empty
        self.reports: List[Report] = []
        self.users: List[User] = []
        self.notifications: List[Notification] = []

    async def load(self) -> None:
        """Load every collection, then write back anything that had to be seeded."""
        seeded = False

        def seed_reports() -> List[Report]:
            nonlocal seeded
            seeded = True
            return initial_reports()

        self.reports = await self._load_collection(
            REPORTS_STORAGE_KEY,
            Report,
            fallback=seed_reports,
            on_missing=seed_reports if self.seed_on_empty else list,
        )
        self.users = await self._load_collection(USERS_STORAGE_KEY, User)
        self.notifications = await self._load_collection(NOTIFICATIONS_STORAGE_KEY, Notification)

        logger.info(
            f"📦 Campus state loaded: {len(self.reports)} reports, "
            f"{len(self.users)} users, {len(self.notifications)} notifications"
        )
        if seeded:
            logger.info("🌱 Reports collection seeded with initial data")
            await self.persist_reports()

    async def _load_collection(
        self,
        key: str,
        model: Type[ModelT],
        fallback: Callable[[], List[ModelT]] = list,
        on_missing: Callable[[], List[ModelT]] = None,
    ) -> List[ModelT]:
        try:
            raw = await self.kv.get(key)
        except Exception as e:
            logger.error(f"Failed to read {key} from storage: {e}")
            return fallback()

        if raw is None:
            return (on_missing or fallback)()

        try:
            if not isinstance(raw, list):
                raise TypeError(f"expected a list, got {type(raw).__name__}")
            return [model.model_validate(item) for item in raw]
        except (TypeError, ValueError) as e:
            logger.error(f"Stored {key} is corrupt, falling back: {e}")
            return fallback()

    async def _persist(self, key: str, items: List[Any]) -> bool:
        try:
            await self.kv.set(key, [item.model_dump(mode="json") for item in items])
            return True
        except Exception as e:
            logger.error(f"Failed to save {key} to storage: {e}")
            return False

    async def persist_reports(self) -> bool:
        return await self._persist(REPORTS_STORAGE_KEY, self.reports)

    async def persist_users(self) -> bool:
        return await self._persist(USERS_STORAGE_KEY, self.users)

    async def persist_notifications(self) -> bool:
        return await self._persist(NOTIFICATIONS_STORAGE_KEY, self.notifications)
