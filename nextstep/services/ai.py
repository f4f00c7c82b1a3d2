"""AI coach gateway over the OpenAI chat completions API.

Both entry points absorb every failure and return fixed fallback content, so
a provider outage never fails the HTTP request.
"""
import json
import logging
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel, Field, ValidationError

from nextstep.models import ChatMessage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 500
CAREER_TEMPERATURE = 0.5
CAREER_COUNT = 3

SYSTEM_PROMPT = """You are Ara, an AI career coach for high school students on the 'Your Next Step' educational platform.
Your purpose is to provide personalized career guidance, education planning, and skill development advice.

Be conversational, encouraging, and focused on helping students:
- Explore career paths based on their interests
- Understand education requirements for different careers
- Develop relevant skills while still in high school
- Prepare for college applications and interviews
- Build confidence in their career journey

Keep responses concise, practical, and tailored for high school students.
When appropriate, mention the platform's modules or curriculum that might help them.
Always maintain an optimistic, supportive tone that motivates students to engage with career exploration."""

CAREER_SYSTEM_PROMPT = (
    "You are a career recommendation AI that provides targeted career suggestions for high school students."
)

EMPTY_REPLY = "I'm sorry, I couldn't generate a response. Please try again."
FALLBACK_REPLY = (
    "I'm currently having trouble connecting to my knowledge base. "
    "Let's try a different question, or you can try again later."
)

FALLBACK_CAREERS = [
    {
        "title": "Software Developer",
        "description": "Design and develop computer applications",
        "matchScore": 85,
        "fieldOfStudy": "Computer Science",
        "avgSalary": 105000,
        "eduRequirements": "Bachelor's degree in Computer Science",
    },
    {
        "title": "Marketing Specialist",
        "description": "Create and implement marketing strategies",
        "matchScore": 75,
        "fieldOfStudy": "Marketing, Business",
        "avgSalary": 65000,
        "eduRequirements": "Bachelor's degree in Marketing or Business",
    },
    {
        "title": "Healthcare Administrator",
        "description": "Manage healthcare facilities and services",
        "matchScore": 70,
        "fieldOfStudy": "Healthcare Administration",
        "avgSalary": 80000,
        "eduRequirements": "Bachelor's degree in Healthcare Administration",
    },
]


class CareerSuggestion(BaseModel):
    """One career as the model is asked to return it."""

    title: str
    description: str
    matchScore: int = Field(ge=0, le=100)
    fieldOfStudy: str
    avgSalary: int | None = None
    eduRequirements: str | None = None


def format_messages(user_query: str, previous: list[ChatMessage]) -> list[dict[str, str]]:
    """System persona, prior turns oldest first, then the new query."""
    messages = [{"role": "system", "content": SYSTEM_PROMPT}]
    for msg in previous:
        messages.append({"role": "user" if msg.is_from_user else "assistant", "content": msg.message})
    messages.append({"role": "user", "content": user_query})
    return messages


def build_career_prompt(interests: list[str], completed_modules: list[str]) -> str:
    return (
        f"Based on a student's interests ({', '.join(interests)}) "
        f"and completed educational modules ({', '.join(completed_modules)}), "
        f"suggest {CAREER_COUNT} potential career paths. For each career, provide: "
        "title, description (1-2 sentences), matchScore (0-100), fieldOfStudy, "
        "avgSalary (integer, USD), eduRequirements. "
        'Format the response as a JSON object: {"recommendations": [...]}.'
    )


def parse_career_payload(content: str | None) -> list[dict[str, Any]]:
    """Extract the recommendation list from a JSON-mode completion.

    Accepts a bare list or an object holding the list under any key.
    Raises ValueError when fewer than CAREER_COUNT valid careers are found.
    """
    if not content:
        raise ValueError("empty completion")
    data = json.loads(content)
    if isinstance(data, dict):
        lists = [v for v in data.values() if isinstance(v, list)]
        if not lists:
            raise ValueError("no recommendation list in payload")
        data = lists[0]
    if not isinstance(data, list) or len(data) < CAREER_COUNT:
        raise ValueError(f"expected at least {CAREER_COUNT} recommendations")
    try:
        return [CareerSuggestion.model_validate(item).model_dump() for item in data]
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


class AIGateway:
    """Thin wrapper holding the OpenAI client; client is None when no key is configured."""

    def __init__(self, client: AsyncOpenAI | None, model: str = DEFAULT_MODEL):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings) -> "AIGateway":
        client = AsyncOpenAI(api_key=settings.openai_api_key) if settings.openai_api_key else None
        if client is None:
            logger.warning("OPENAI_API_KEY not set; AI coach will answer with fallback text")
        return cls(client, model=settings.openai_model)

    async def generate_reply(self, user_query: str, previous: list[ChatMessage]) -> str:
        if self.client is None:
            return FALLBACK_REPLY
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=format_messages(user_query, previous),
                temperature=CHAT_TEMPERATURE,
                max_tokens=CHAT_MAX_TOKENS,
            )
            return response.choices[0].message.content or EMPTY_REPLY
        except Exception:
            logger.exception("Error generating AI response")
            return FALLBACK_REPLY

    async def generate_career_recommendations(
        self, interests: list[str], completed_modules: list[str]
    ) -> list[dict[str, Any]]:
        if self.client is None:
            return [dict(c) for c in FALLBACK_CAREERS]
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": CAREER_SYSTEM_PROMPT},
                    {"role": "user", "content": build_career_prompt(interests, completed_modules)},
                ],
                response_format={"type": "json_object"},
                temperature=CAREER_TEMPERATURE,
            )
            return parse_career_payload(response.choices[0].message.content)
        except Exception:
            logger.exception("Error generating career recommendations")
            return [dict(c) for c in FALLBACK_CAREERS]
