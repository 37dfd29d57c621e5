from typing import List, Optional

from pydantic import BaseModel, Field
from app.schemas.base import BaseSchema, TimestampSchema, UTCDatetime


class ChatCreate(BaseModel):
    message: str = Field(..., min_length=1, max_length=500)


class ChatReply(BaseSchema):
    success: bool = True
    response: str
    category: str
    timestamp: UTCDatetime
    user: str


class ChatRecord(TimestampSchema):
    id: int
    user_id: int
    message: str
    sender: str
    category: Optional[str] = None


class ChatHistory(BaseSchema):
    success: bool = True
    chat_history: List[ChatRecord]
    count: int
    timestamp: UTCDatetime
