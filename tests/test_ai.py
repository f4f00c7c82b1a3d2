import asyncio
import json
from types import SimpleNamespace

import pytest

from nextstep.core.config import Settings
from nextstep.models import ChatMessage
from nextstep.services.ai import (
    EMPTY_REPLY,
    FALLBACK_CAREERS,
    FALLBACK_REPLY,
    SYSTEM_PROMPT,
    AIGateway,
    format_messages,
    parse_career_payload,
)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _gateway(content=None, error=None):
    completions = FakeCompletions(content, error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return AIGateway(client, model="test-model"), completions


def _career(title="Nurse", score=80):
    return {
        "title": title,
        "description": "Care for patients",
        "matchScore": score,
        "fieldOfStudy": "Nursing",
        "avgSalary": 77000,
        "eduRequirements": "BSN",
    }


def _careers(n=3):
    return [_career()] + [_career(title=f"Career {i}") for i in range(1, n)]


def test_format_messages_orders_history_between_persona_and_query():
    previous = [
        ChatMessage(message="hi", is_from_user=True),
        ChatMessage(message="hello!", is_from_user=False),
    ]

    messages = format_messages("what next?", previous)

    assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert [m["role"] for m in messages[1:]] == ["user", "assistant", "user"]
    assert messages[-1]["content"] == "what next?"


def test_generate_reply_returns_completion():
    gateway, completions = _gateway(content="Try a coding club.")

    reply = asyncio.run(gateway.generate_reply("ideas?", []))

    assert reply == "Try a coding club."
    assert completions.calls[0]["model"] == "test-model"
    assert completions.calls[0]["max_tokens"] == 500


def test_generate_reply_empty_content():
    gateway, _ = _gateway(content=None)

    assert asyncio.run(gateway.generate_reply("ideas?", [])) == EMPTY_REPLY


def test_generate_reply_falls_back_on_provider_error():
    gateway, _ = _gateway(error=RuntimeError("rate limited"))

    assert asyncio.run(gateway.generate_reply("ideas?", [])) == FALLBACK_REPLY


def test_gateway_without_key_uses_fallbacks():
    gateway = AIGateway.from_settings(Settings(_env_file=None, openai_api_key=None))

    assert gateway.client is None
    assert asyncio.run(gateway.generate_reply("ideas?", [])) == FALLBACK_REPLY
    assert asyncio.run(gateway.generate_career_recommendations([], [])) == FALLBACK_CAREERS


@pytest.mark.parametrize(
    "payload",
    [
        _careers(),
        {"recommendations": _careers()},
        {"careers": _careers(4), "note": "ok"},
    ],
)
def test_parse_career_payload_shapes(payload):
    careers = parse_career_payload(json.dumps(payload))

    assert careers[0]["title"] == "Nurse"
    assert careers[0]["matchScore"] == 80


@pytest.mark.parametrize(
    "content",
    [
        None,
        "",
        "not json",
        "{}",
        "[]",
        json.dumps(_careers(2)),
        json.dumps(_careers(2) + [_career(score=140)]),
    ],
)
def test_parse_career_payload_rejects_bad_content(content):
    with pytest.raises(ValueError):
        parse_career_payload(content)


def test_career_recommendations_use_json_mode():
    gateway, completions = _gateway(content=json.dumps({"recommendations": _careers()}))

    careers = asyncio.run(gateway.generate_career_recommendations(["art"], ["Interview Skills Mastery"]))

    assert [c["title"] for c in careers] == ["Nurse", "Career 1", "Career 2"]
    call = completions.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert "art" in call["messages"][1]["content"]


def test_career_recommendations_fall_back_on_malformed_json():
    gateway, _ = _gateway(content="{not json")

    careers = asyncio.run(gateway.generate_career_recommendations(["art"], []))

    assert careers == FALLBACK_CAREERS


def test_career_recommendations_fall_back_on_short_reply():
    gateway, _ = _gateway(content=json.dumps({"recommendations": [_career()]}))

    careers = asyncio.run(gateway.generate_career_recommendations(["art"], []))

    assert careers == FALLBACK_CAREERS
