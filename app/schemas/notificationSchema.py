from datetime import datetime
from typing import List
from pydantic import BaseModel, Field

from app.constants.constants import NotificationType
from app.schemas.reportSchema import utc_now


class Notification(BaseModel):
    """One-way message to a single recipient about a report event."""
    id: str
    user_identifier: str
    message: str
    type: NotificationType = NotificationType.info
    is_read: bool = False
    timestamp: datetime = Field(default_factory=utc_now)


class NotificationListResponse(BaseModel):
    notifications: List[Notification]
    unread_count: int
