import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from fastapi import Depends, Header
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_HOURS, BCRYPT_ROUNDS
from app.core.errors import (
    MissingTokenError,
    MalformedHeaderError,
    TokenExpiredError,
    TokenInvalidError,
    TokenRevokedError,
    PermissionDeniedError,
)
from app.crud import tokens as token_store
from app.db.session import get_db
from app.schemas.user import TokenData

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def dummy_verify() -> None:
    # same bcrypt cost as a real check, for lookups that found nobody
    pwd_context.dummy_verify()


def create_access_token(identity: dict, now: Optional[datetime] = None,
                        expires_delta: Optional[timedelta] = None) -> str:
    """Sign a session token for ``identity`` (id, email, name, role)."""
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS))
    to_encode = {
        "id": identity["id"],
        "email": identity["email"],
        "name": identity["name"],
        "role": identity["role"],
        "iat": int(issued_at.timestamp()),
        "exp": int(expire.timestamp()),
        "jti": uuid4().hex,
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str, now: Optional[datetime] = None) -> TokenData:
    """Verify signature and expiry of ``token`` and return its claims.

    Expiry is checked here rather than inside ``jwt.decode`` so callers can
    verify against an explicit point in time.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM], options={"verify_exp": False})
        token_data = TokenData.model_validate(payload)
    except (JWTError, ValidationError):
        raise TokenInvalidError()

    current = now or datetime.now(timezone.utc)
    if current.timestamp() >= token_data.exp:
        raise TokenExpiredError()
    return token_data


def token_expiry(token_data: TokenData) -> datetime:
    return datetime.fromtimestamp(token_data.exp, tz=timezone.utc).replace(tzinfo=None)


# --------------------------------------------------------------------
# Auth gate dependencies
# --------------------------------------------------------------------
def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if authorization is None:
        raise MissingTokenError()

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MalformedHeaderError()
    return parts[1]


def get_current_user(token: str = Depends(get_bearer_token), db: Session = Depends(get_db)) -> TokenData:
    token_data = decode_access_token(token)
    if token_store.is_revoked(db, token_data.jti):
        logger.info("Rejected revoked token for %s", token_data.email)
        raise TokenRevokedError()
    return token_data


def is_admin(user: TokenData = Depends(get_current_user)) -> TokenData:
    if user.role != "admin":
        raise PermissionDeniedError("Admin access required")
    return user
