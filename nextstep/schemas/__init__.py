from nextstep.schemas.auth import LoginSchema, MessageSchema, PublicUserSchema, RegisterSchema, UserOutSchema
from nextstep.schemas.coach import (
    CareerRecommendationOutSchema,
    ChatMessageInSchema,
    ChatMessageOutSchema,
    GenerateRecommendationsSchema,
)
from nextstep.schemas.community import (
    CommentInSchema,
    CommentOutSchema,
    PostInSchema,
    PostOutSchema,
    ReferralOutSchema,
)
from nextstep.schemas.learning import (
    AchievementOutSchema,
    ModuleOutSchema,
    ProgressInSchema,
    ProgressOutSchema,
    ScholarshipOutSchema,
    ScholarshipProgressSchema,
)

__all__ = [
    "AchievementOutSchema",
    "CareerRecommendationOutSchema",
    "ChatMessageInSchema",
    "ChatMessageOutSchema",
    "CommentInSchema",
    "CommentOutSchema",
    "GenerateRecommendationsSchema",
    "LoginSchema",
    "MessageSchema",
    "ModuleOutSchema",
    "PostInSchema",
    "PostOutSchema",
    "ProgressInSchema",
    "ProgressOutSchema",
    "PublicUserSchema",
    "ReferralOutSchema",
    "RegisterSchema",
    "ScholarshipOutSchema",
    "ScholarshipProgressSchema",
    "UserOutSchema",
]
