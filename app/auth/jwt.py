import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import ACCESS_TOKEN_EXPIRE_HOURS
from app.crud import tokens as token_store
from app.crud.users import create_user, authenticate_user
from app.db.session import get_db
from app.schemas.user import (
    UserCreate,
    UserLogin,
    UserPublic,
    UserWithToken,
    RegisterResponse,
    MessageResponse,
    PasswordResetRequest,
    TokenData,
)
from app.auth.security import create_access_token, get_current_user, token_expiry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# REGISTER: create a farmer account, no token issued
@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_user(user_data: UserCreate, db: Session = Depends(get_db)):
    db_user = create_user(db, user_data.name, user_data.email, user_data.password)
    logger.info("New user registered: %s", db_user.email)
    return RegisterResponse(user=UserPublic.model_validate(db_user))


# LOGIN: returns user + token
@router.post("/login", response_model=UserWithToken)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    logger.info("Login attempt for: %s", credentials.email)
    user = authenticate_user(db, credentials.email, credentials.password)

    access_token = create_access_token(
        {"id": user.id, "email": user.email, "name": user.name, "role": user.role}
    )
    logger.info("Login successful for: %s", user.email)

    return UserWithToken(
        token=access_token,
        user=UserPublic.model_validate(user),
        expires_in=f"{ACCESS_TOKEN_EXPIRE_HOURS}h",
    )


# LOGOUT: the token stays revoked until it would have expired
@router.post("/logout", response_model=MessageResponse)
def logout(current_user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)):
    token_store.revoke(db, current_user.jti, token_expiry(current_user))
    logger.info("User logged out: %s", current_user.email)
    return MessageResponse(message="Logged out successfully")


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(request: PasswordResetRequest):
    # same answer whether or not the account exists
    logger.info("Password reset requested for: %s", request.email)
    return MessageResponse(
        message="If an account with that email exists, a password reset link has been sent."
    )
