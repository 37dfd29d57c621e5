from sqlalchemy import Column, String, Integer, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import BaseModel


class ChatMessage(BaseModel):
    __tablename__ = "chat_history"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    sender = Column(Enum("user", "bot", name="chat_senders"), nullable=False)
    category = Column(String(50))

    user = relationship("User", back_populates="chat_messages")
