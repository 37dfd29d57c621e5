from typing import List, Literal

from pydantic import BaseModel, Field
from app.schemas.base import BaseSchema, TimestampSchema, NonEmptyStr, UTCDatetime


class NotificationCreate(BaseModel):
    message: NonEmptyStr = Field(..., max_length=255)
    type: Literal["weather", "pest", "harvest", "general"] = "general"
    priority: Literal["low", "medium", "high", "critical"] = "medium"


class Notification(TimestampSchema):
    id: int
    message: str
    type: str
    priority: str


class NotificationItem(Notification):
    time: str
    is_read: bool = False


class NotificationList(BaseSchema):
    success: bool = True
    notifications: List[NotificationItem]
    count: int
    timestamp: UTCDatetime
