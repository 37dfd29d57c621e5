import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.core.config import SEED_DEFAULT_DATA
from app.crud import notifications as notification_store
from app.crud.users import create_user, get_user_by_email
from app.db.session import engine, Base, SessionLocal
from app.models.base import utcnow
from app.models.user import User  # noqa: F401
from app.models.notification import Notification  # noqa: F401
from app.models.prediction import Prediction  # noqa: F401
from app.models.chat import ChatMessage  # noqa: F401
from app.models.token import RevokedToken  # noqa: F401

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {"name": "Admin User", "email": "admin@agripredict.com", "password": "admin123", "role": "admin"},
    {"name": "John Farmer", "email": "farmer@example.com", "password": "password123", "role": "farmer"},
]

# (message, type, priority, age)
DEFAULT_NOTIFICATIONS = [
    ("Heavy rainfall expected next week - consider drainage", "weather", "high", timedelta(hours=2)),
    ("Fall armyworm alert in your region", "pest", "critical", timedelta(days=1)),
    ("Optimal harvest time approaching", "harvest", "medium", timedelta(days=3)),
]


def seed_default_data(db: Session):
    for user in DEFAULT_USERS:
        if not get_user_by_email(db, user["email"]):
            create_user(db, **user)
            logger.info("Default %s user created", user["role"])

    if notification_store.count(db) == 0:
        now = utcnow()
        for message, type_, priority, age in DEFAULT_NOTIFICATIONS:
            notification_store.create_notification(db, message, type_, priority, created_at=now - age)
        logger.info("Default notifications created")


def init_db(seed: bool = SEED_DEFAULT_DATA):
    # Create all tables
    Base.metadata.create_all(bind=engine)
    if seed:
        db = SessionLocal()
        try:
            seed_default_data(db)
        finally:
            db.close()
