from typing import Literal

from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from app.schemas.base import BaseSchema, TimestampSchema


def normalize_email(value: str) -> str:
    return value.strip().lower()


class EmailSchema(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class UserCreate(EmailSchema):
    name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)


class UserLogin(EmailSchema):
    password: str = Field(..., min_length=6, max_length=72)


class PasswordResetRequest(EmailSchema):
    pass


class UserPublic(TimestampSchema):
    id: int
    name: str
    email: str
    role: str


class UserWithToken(BaseSchema):
    success: bool = True
    token: str
    user: UserPublic
    expires_in: str


class RegisterResponse(BaseSchema):
    success: bool = True
    message: str = "User registered successfully"
    user: UserPublic


class ProfileResponse(BaseSchema):
    success: bool = True
    user: UserPublic


class MessageResponse(BaseSchema):
    success: bool = True
    message: str


class TokenData(BaseModel):
    """Claims carried by a session token, attached to the request once verified."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    name: str
    role: Literal["farmer", "admin"]
    jti: str
    iat: int
    exp: int
