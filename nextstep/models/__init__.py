from nextstep.models.user import User
from nextstep.models.module import Module
from nextstep.models.progress import UserProgress
from nextstep.models.achievement import Achievement, UserAchievement
from nextstep.models.scholarship import Scholarship
from nextstep.models.chat import ChatMessage
from nextstep.models.career import CareerRecommendation
from nextstep.models.auth_session import AuthSession
from nextstep.models.referral import Referral
from nextstep.models.community import CommunityPost, CommunityComment, PostLike

__all__ = [
    "User",
    "Module",
    "UserProgress",
    "Achievement",
    "UserAchievement",
    "Scholarship",
    "ChatMessage",
    "CareerRecommendation",
    "AuthSession",
    "Referral",
    "CommunityPost",
    "CommunityComment",
    "PostLike",
]
