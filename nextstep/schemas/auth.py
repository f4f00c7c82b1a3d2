"""Pydantic schemas for registration, login and user views."""
import re
from datetime import datetime

from pydantic import Field, field_validator

from nextstep.core.security import MAX_PASSWORD_BYTES
from nextstep.schemas.base import CamelSchema

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class RegisterSchema(CamelSchema):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    confirm_password: str
    email: str = Field(max_length=255)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    grade: int = Field(ge=9, le=12)
    referral_code: str | None = None
    avatar_url: str | None = Field(default=None, max_length=512)

    @field_validator("username", "email", "first_name", "last_name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("Passwords do not match")
        return v

    @field_validator("referral_code")
    @classmethod
    def blank_code_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip().upper() or None


class LoginSchema(CamelSchema):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOutSchema(CamelSchema):
    """Current user; never includes the password hash."""

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    grade: int
    points: int
    referral_code: str
    referred_by: str | None = None
    avatar_url: str | None = None
    created_at: datetime


class PublicUserSchema(CamelSchema):
    """What other students may see about a user."""

    id: int
    username: str
    first_name: str
    last_name: str
    grade: int
    points: int
    avatar_url: str | None = None
    created_at: datetime


class MessageSchema(CamelSchema):
    message: str
