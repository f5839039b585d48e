"""Notification API endpoints."""

from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException

from ...domain.models.notification import Notification
from ...domain.services.notification_fanout import NotificationFanout
from ...infrastructure.dependencies import get_notification_fanout

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/{user_id}", response_model=List[Notification])
async def list_notifications(
    user_id: str,
    fanout: NotificationFanout = Depends(get_notification_fanout),
) -> List[Notification]:
    """List a user's notifications, newest first."""
    return fanout.list_for_user(user_id)


@router.post("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    fanout: NotificationFanout = Depends(get_notification_fanout),
) -> Dict[str, bool]:
    """Mark a notification as read."""
    if not fanout.mark_read(notification_id):
        raise HTTPException(status_code=404, detail=f"Notification {notification_id} not found")
    return {"read": True}
