from sqlalchemy import Column, String, Enum
from app.models.base import BaseModel

NOTIFICATION_TYPES = ("weather", "pest", "harvest", "general")
NOTIFICATION_PRIORITIES = ("low", "medium", "high", "critical")


class Notification(BaseModel):
    __tablename__ = "notifications"

    message = Column(String(255), nullable=False)
    type = Column(Enum(*NOTIFICATION_TYPES, name="notification_types"), nullable=False, default="general")
    priority = Column(Enum(*NOTIFICATION_PRIORITIES, name="notification_priorities"), nullable=False, default="medium")
