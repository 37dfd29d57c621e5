from sqlalchemy import Column, String, DateTime
from app.models.base import BaseModel


class RevokedToken(BaseModel):
    """A logged-out token id, kept until the token would have expired anyway."""

    __tablename__ = "revoked_tokens"

    jti = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
