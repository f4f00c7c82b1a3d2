"""Pydantic schemas for the chat coach and career recommendations."""
from datetime import datetime

from pydantic import Field

from nextstep.schemas.base import CamelSchema


class ChatMessageInSchema(CamelSchema):
    message: str = Field(min_length=1, max_length=4000)


class ChatMessageOutSchema(CamelSchema):
    id: int
    user_id: int
    message: str
    is_from_user: bool
    created_at: datetime


class GenerateRecommendationsSchema(CamelSchema):
    interests: list[str] = Field(default_factory=list, max_length=20)


class CareerRecommendationOutSchema(CamelSchema):
    id: int
    user_id: int
    title: str
    description: str
    match_score: int
    field_of_study: str
    avg_salary: int | None = None
    edu_requirements: str | None = None
    created_at: datetime
