"""Pydantic schemas for modules, progress, achievements and scholarships."""
from datetime import datetime

from pydantic import Field

from nextstep.schemas.base import CamelSchema


class ModuleOutSchema(CamelSchema):
    id: int
    title: str
    description: str
    category: str
    image_url: str | None = None
    duration: int
    points: int
    order: int
    is_active: bool


class ProgressInSchema(CamelSchema):
    module_id: int
    progress: int = Field(ge=0, le=100)
    is_completed: bool = False


class ProgressOutSchema(CamelSchema):
    id: int
    user_id: int
    module_id: int
    progress: int
    is_completed: bool
    completed_at: datetime | None = None
    last_accessed_at: datetime


class AchievementOutSchema(CamelSchema):
    id: int
    title: str
    description: str
    icon: str
    points: int
    requirement: str


class ScholarshipOutSchema(CamelSchema):
    id: int
    title: str
    description: str
    amount: int
    points_required: int
    is_active: bool


class ScholarshipProgressSchema(ScholarshipOutSchema):
    progress: int  # 0-100, min(100, points / points_required * 100)
