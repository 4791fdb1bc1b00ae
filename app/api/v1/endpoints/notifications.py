from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.core.security import get_campus_store, get_current_session
from app.schemas.notificationSchema import NotificationListResponse
from app.schemas.userSchema import Session
from app.services.CampusStore import CampusStore

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def get_notifications(
    unread_only: bool = False,
    limit: Optional[int] = Query(50, ge=1),
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    """Get notifications for the current user."""
    notifications = store.notifications.for_recipient(
        session.user_identifier,
        unread_only=unread_only,
        limit=limit,
    )
    return {
        "notifications": notifications,
        "unread_count": store.notifications.unread_count(session.user_identifier),
    }


@router.get("/unread-count")
async def get_unread_count(
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    return {"unread_count": store.notifications.unread_count(session.user_identifier)}


@router.post("/read-all")
async def mark_all_notifications_as_read(
    session: Session = Depends(get_current_session),
    store: CampusStore = Depends(get_campus_store)
):
    """Mark all notifications as read for the current user."""
    marked = await store.notifications.mark_all_read(session.user_identifier)
    return {
        "success": True,
        "marked_count": marked
    }
