import logging
from typing import Optional

from app.core.config import Settings, settings as default_settings
from app.core.database import DatabaseSessionManager
from app.core.storage import DatabaseKeyValueStore, KeyValueStore, MemoryKeyValueStore
from app.services.AuthService import AuthService
from app.services.CampusState import CampusState
from app.services.NotificationService import NotificationService
from app.services.ReportService import ReportService

logger = logging.getLogger(__name__)


class CampusStore:
    """Wires the campus state to the report, notification and auth services."""

    def __init__(self, kv: KeyValueStore, settings: Optional[Settings] = None):
        settings = settings or default_settings
        self.kv = kv
        self.state = CampusState(kv, seed_on_empty=settings.SEED_ON_EMPTY)
        self.notifications = NotificationService(self.state)
        self.reports = ReportService(
            self.state,
            self.notifications,
            max_photos=settings.MAX_PHOTOS,
            max_photo_size_mb=settings.MAX_PHOTO_SIZE_MB,
            preview_length=settings.COMMENT_PREVIEW_LENGTH,
        )
        self.auth = AuthService(
            self.state,
            admin_identifier=settings.ADMIN_IDENTIFIER,
            admin_password=settings.ADMIN_PASSWORD,
            admin_name=settings.ADMIN_NAME,
        )

    async def init(self) -> "CampusStore":
        await self.state.load()
        return self


def build_key_value_store(
    settings: Settings,
    manager: Optional[DatabaseSessionManager] = None,
) -> KeyValueStore:
    """Pick the persistence backend named by STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.info("🧠 Using in-memory storage backend")
        return MemoryKeyValueStore()
    if backend == "database":
        if manager is None:
            raise ValueError("A DatabaseSessionManager is required for the database backend")
        logger.info("🗄️ Using database storage backend")
        return DatabaseKeyValueStore(manager)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
