import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.auth.security import get_current_user, is_admin
from app.crud import notifications as notification_store
from app.db.session import get_db
from app.models.base import utcnow
from app.schemas.notification import (
    Notification,
    NotificationCreate,
    NotificationItem,
    NotificationList,
)
from app.schemas.user import TokenData

logger = logging.getLogger(__name__)

router = APIRouter()


def time_ago(created_at: datetime, now: Optional[datetime] = None) -> str:
    hours = int(((now or utcnow()) - created_at).total_seconds() // 3600)
    days = hours // 24
    if days > 0:
        return f"{days} day{'s' if days > 1 else ''} ago"
    if hours > 0:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    return "Just now"


@router.get("/notifications", response_model=NotificationList)
def read_notifications(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    logger.info("Notifications requested by: %s", current_user.email)
    now = utcnow()
    # read status is not tracked per user yet, everything is unread
    items = [
        NotificationItem(
            id=n.id,
            message=n.message,
            type=n.type,
            priority=n.priority,
            created_at=n.created_at,
            time=time_ago(n.created_at, now),
        )
        for n in notification_store.list_recent(db)
    ]
    return NotificationList(
        notifications=items,
        count=len(items),
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/notifications", response_model=Notification, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(is_admin)
):
    db_notification = notification_store.create_notification(
        db, notification.message, notification.type, notification.priority
    )
    logger.info("Notification %s created by %s", db_notification.id, current_user.email)
    return db_notification
