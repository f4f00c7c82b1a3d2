"""Pydantic schemas for community posts, comments and referrals."""
from datetime import datetime

from pydantic import Field, field_validator

from nextstep.schemas.base import CamelSchema


class PostInSchema(CamelSchema):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    module_id: int | None = None
    file_url: str | None = Field(default=None, max_length=1024)

    @field_validator("file_url")
    @classmethod
    def blank_url_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class PostOutSchema(CamelSchema):
    id: int
    user_id: int
    title: str
    content: str
    module_id: int | None = None
    file_url: str | None = None
    likes_count: int
    created_at: datetime
    updated_at: datetime
    is_liked: bool = False


class CommentInSchema(CamelSchema):
    content: str = Field(min_length=1, max_length=4000)


class CommentOutSchema(CamelSchema):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: datetime


class ReferralOutSchema(CamelSchema):
    id: int
    referrer_user_id: int
    referred_user_id: int
    is_school: bool
    commission_paid: bool
    created_at: datetime
