from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import relationship
from app.models.base import BaseModel

USER_ROLES = ("farmer", "admin")


class User(BaseModel):
    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(*USER_ROLES, name="user_roles"), nullable=False, default="farmer")

    predictions = relationship("Prediction", back_populates="user")
    chat_messages = relationship("ChatMessage", back_populates="user")
