import uuid
import logging
from typing import List, Optional

from app.constants.constants import NotificationType
from app.schemas.notificationSchema import Notification
from app.services.CampusState import CampusState

logger = logging.getLogger(__name__)


class NotificationService:
    """In-app notification dispatcher keyed by recipient identifier."""

    def __init__(self, state: CampusState):
        self.state = state

    async def notify(
        self,
        recipient: str,
        message: str,
        kind: NotificationType = NotificationType.info,
    ) -> Notification:
        """Store a new unread notification at the front of the global list."""
        notification = Notification(
            id=str(uuid.uuid4()),
            user_identifier=recipient,
            message=message,
            type=NotificationType(kind),
        )
        self.state.notifications.insert(0, notification)
        await self.state.persist_notifications()
        logger.info(f"🔔 Notification ({notification.type.value}) queued for {recipient}")
        return notification

    async def mark_all_read(self, recipient: str) -> int:
        """Mark every notification of ``recipient`` as read. Returns how many changed."""
        marked = 0
        for notification in self.state.notifications:
            if notification.user_identifier == recipient and not notification.is_read:
                notification.is_read = True
                marked += 1

        if marked:
            await self.state.persist_notifications()
        return marked

    def unread_count(self, recipient: str) -> int:
        return sum(
            1 for n in self.state.notifications
            if n.user_identifier == recipient and not n.is_read
        )

    def for_recipient(
        self,
        recipient: str,
        unread_only: bool = False,
        limit: Optional[int] = None,
    ) -> List[Notification]:
        """Notifications of one recipient, newest first."""
        notifications = [
            n for n in self.state.notifications
            if n.user_identifier == recipient and (not unread_only or not n.is_read)
        ]
        notifications.sort(key=lambda n: n.timestamp, reverse=True)
        if limit is not None:
            notifications = notifications[:limit]
        return notifications
