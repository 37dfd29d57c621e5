from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime
from app.db.session import Base


def utcnow() -> datetime:
    # stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
