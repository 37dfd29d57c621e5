from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.notification import Notification


def list_recent(db: Session, limit: int = 10) -> List[Notification]:
    return (
        db.query(Notification)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def count(db: Session) -> int:
    return db.query(Notification).count()


def create_notification(db: Session, message: str, type: str = "general", priority: str = "medium",
                        created_at: Optional[datetime] = None) -> Notification:
    db_notification = Notification(message=message, type=type, priority=priority)
    if created_at is not None:
        db_notification.created_at = created_at
    db.add(db_notification)
    db.commit()
    db.refresh(db_notification)
    return db_notification
