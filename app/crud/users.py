import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.auth.security import get_password_hash, verify_password, dummy_verify
from app.core.errors import DuplicateEmailError, InvalidCredentialsError
from app.models.user import User
from app.schemas.user import normalize_email

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def create_user(db: Session, name: str, email: str, password: str, role: str = "farmer") -> User:
    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise DuplicateEmailError()

    db_user = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # a concurrent registration won the unique index
        db.rollback()
        raise DuplicateEmailError()
    db.refresh(db_user)
    return db_user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Return the user for a correct email/password pair.

    Unknown email and wrong password raise the same error after the same
    amount of hashing work.
    """
    user = get_user_by_email(db, email)
    if user is None:
        dummy_verify()
        logger.debug("Login rejected, no account for %s", email)
        raise InvalidCredentialsError()

    if not verify_password(password, user.password_hash):
        logger.debug("Login rejected, wrong password for %s", email)
        raise InvalidCredentialsError()
    return user
