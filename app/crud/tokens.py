from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.models.base import utcnow
from app.models.token import RevokedToken


def is_revoked(db: Session, jti: str) -> bool:
    return db.query(RevokedToken.id).filter(RevokedToken.jti == jti).first() is not None


def purge_expired(db: Session, now: Optional[datetime] = None) -> int:
    removed = db.query(RevokedToken).filter(RevokedToken.expires_at <= (now or utcnow())).delete()
    db.commit()
    return removed


def revoke(db: Session, jti: str, expires_at: datetime) -> RevokedToken:
    existing = db.query(RevokedToken).filter(RevokedToken.jti == jti).first()
    if existing:
        return existing

    purge_expired(db)
    revoked = RevokedToken(jti=jti, expires_at=expires_at)
    db.add(revoked)
    db.commit()
    db.refresh(revoked)
    return revoked
