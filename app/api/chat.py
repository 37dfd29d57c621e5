import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth.security import get_current_user
from app.crud import chat as chat_store
from app.db.session import get_db
from app.schemas.chat import ChatCreate, ChatReply, ChatHistory, ChatRecord
from app.schemas.user import TokenData
from app.services import chatbot

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatReply)
def chat(
    request: ChatCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    logger.info("Chat message from %s: %s...", current_user.email, request.message[:50])
    response, category = chatbot.reply(request.message, current_user.name)
    chat_store.record_exchange(db, current_user.id, request.message, response, category)

    return ChatReply(
        response=response,
        category=category,
        timestamp=datetime.now(timezone.utc),
        user=current_user.name,
    )


@router.get("/chat-history", response_model=ChatHistory)
def read_chat_history(
    limit: int = Query(50, ge=1, le=200, description="Most recent messages to return"),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user)
):
    messages = chat_store.list_history(db, current_user.id, limit=limit)
    return ChatHistory(
        chat_history=[ChatRecord.model_validate(m) for m in messages],
        count=len(messages),
        timestamp=datetime.now(timezone.utc),
    )
