from typing import List, Tuple

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.crud.users import get_user
from app.models.chat import ChatMessage


def record_exchange(db: Session, user_id: int, message: str, reply: str,
                    category: str) -> Tuple[ChatMessage, ChatMessage]:
    """Store one chat turn: the user's message followed by the bot's reply."""
    if get_user(db, user_id) is None:
        raise NotFoundError("User not found", error="User not found")

    inbound = ChatMessage(user_id=user_id, message=message, sender="user", category="general")
    db.add(inbound)
    db.flush()
    outbound = ChatMessage(user_id=user_id, message=reply, sender="bot", category=category)
    db.add(outbound)
    db.commit()
    db.refresh(inbound)
    db.refresh(outbound)
    return inbound, outbound


def list_history(db: Session, user_id: int, limit: int = 50) -> List[ChatMessage]:
    # newest `limit` messages, returned oldest first
    latest = (
        db.query(ChatMessage)
        .filter(ChatMessage.user_id == user_id)
        .order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc())
        .limit(limit)
        .all()
    )
    return list(reversed(latest))
