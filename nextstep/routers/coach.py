"""AI coach routes: chat history and career recommendations."""
import logging

from fastapi import APIRouter, status

from nextstep.core.errors import ValidationFailed
from nextstep.routers.deps import AIGatewayDep, CurrentUser, SettingsDep, StorageDep
from nextstep.schemas.coach import (
    CareerRecommendationOutSchema,
    ChatMessageInSchema,
    ChatMessageOutSchema,
    GenerateRecommendationsSchema,
)
from nextstep.services.rewards import (
    FIXED_CAREER_RECOMMENDATIONS,
    RECOMMENDATION_BATCH_SIZE,
    completed_count,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["coach"])


@router.get("/chat/messages", response_model=list[ChatMessageOutSchema])
async def list_chat_messages(current_user: CurrentUser, storage: StorageDep):
    return await storage.get_chat_messages(current_user.id)


@router.post(
    "/chat/messages",
    response_model=list[ChatMessageOutSchema],
    status_code=status.HTTP_201_CREATED,
)
async def post_chat_message(
    body: ChatMessageInSchema,
    current_user: CurrentUser,
    storage: StorageDep,
    ai: AIGatewayDep,
    settings: SettingsDep,
):
    """Persist the user's message, ask the coach with recent history, persist the reply."""
    user_id = current_user.id
    user_message = await storage.create_chat_message(user_id, body.message, is_from_user=True)

    history = await storage.get_recent_chat_messages(
        user_id, limit=settings.chat_history_limit, before_id=user_message.id
    )
    reply = await ai.generate_reply(body.message, history)

    bot_message = await storage.create_chat_message(user_id, reply, is_from_user=False)
    return [user_message, bot_message]


@router.get("/career/recommendations", response_model=list[CareerRecommendationOutSchema])
async def list_recommendations(current_user: CurrentUser, storage: StorageDep):
    return await storage.get_career_recommendations(current_user.id)


def _suggestion_to_fields(suggestion: dict) -> dict:
    return {
        "title": suggestion["title"],
        "description": suggestion["description"],
        "match_score": suggestion["matchScore"],
        "field_of_study": suggestion["fieldOfStudy"],
        "avg_salary": suggestion.get("avgSalary"),
        "edu_requirements": suggestion.get("eduRequirements"),
    }


@router.post(
    "/career/generate-recommendations",
    response_model=list[CareerRecommendationOutSchema],
    status_code=status.HTTP_201_CREATED,
)
async def generate_recommendations(
    current_user: CurrentUser,
    storage: StorageDep,
    ai: AIGatewayDep,
    settings: SettingsDep,
    body: GenerateRecommendationsSchema | None = None,
):
    """Store a batch of three recommendations once enough modules are completed."""
    user_id = current_user.id
    progress_rows = await storage.get_user_progress(user_id)
    if completed_count(progress_rows) < settings.min_completed_modules:
        raise ValidationFailed(
            f"Complete at least {settings.min_completed_modules} modules to get career recommendations"
        )

    if settings.personalized_recommendations:
        titles = []
        for row in progress_rows:
            if row.is_completed:
                module = await storage.get_module(row.module_id)
                if module is not None:
                    titles.append(module.title)
        interests = body.interests if body else []
        suggestions = await ai.generate_career_recommendations(interests, titles)
        if len(suggestions) >= RECOMMENDATION_BATCH_SIZE:
            batch = [_suggestion_to_fields(s) for s in suggestions[:RECOMMENDATION_BATCH_SIZE]]
        else:
            logger.warning(
                "Gateway returned %d career suggestions for user %s, using fixed set",
                len(suggestions),
                user_id,
            )
            batch = FIXED_CAREER_RECOMMENDATIONS
    else:
        batch = FIXED_CAREER_RECOMMENDATIONS

    saved = []
    for fields in batch:
        saved.append(await storage.create_career_recommendation(user_id, **fields))
    logger.info("Generated %d career recommendations for user %s", len(saved), user_id)
    return saved
