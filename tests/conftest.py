import pytest
from fastapi.testclient import TestClient

from nextstep.core.config import Settings
from nextstep.db.session import open_session
from nextstep.main import create_app
from nextstep.services.ai import AIGateway
from nextstep.services.storage import Storage

AUTH_COOKIE = "auth_token"


class FakeAIGateway(AIGateway):
    """Records calls instead of talking to OpenAI."""

    def __init__(self, reply: str = "Great question! Let's look at careers in tech."):
        super().__init__(client=None)
        self.reply = reply
        self.chat_calls = []
        self.career_calls = []
        self.careers = [
            {
                "title": f"Career {i}",
                "description": f"Description {i}",
                "matchScore": 90 - i,
                "fieldOfStudy": "Biology",
                "avgSalary": 70000 + i,
                "eduRequirements": "Bachelor's degree",
            }
            for i in range(4)
        ]

    async def generate_reply(self, user_query, previous):
        self.chat_calls.append((user_query, [m.message for m in previous]))
        return self.reply

    async def generate_career_recommendations(self, interests, completed_modules):
        self.career_calls.append((list(interests), list(completed_modules)))
        return [dict(c) for c in self.careers]


def _settings(**overrides) -> Settings:
    values = {
        "bcrypt_rounds": 4,
        "openai_api_key": None,
        "log_level": "WARNING",
        "database_url": "sqlite+aiosqlite://",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings_factory():
    return _settings


@pytest.fixture
def fake_ai():
    return FakeAIGateway()


@pytest.fixture
def app(fake_ai):
    return create_app(_settings(), ai_gateway=fake_ai)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store(app, client):
    """Run `async fn(storage)` on the app's event loop against its database."""

    def _run(fn):
        async def runner():
            async with open_session(app.state) as db:
                return await fn(Storage(db))

        return client.portal.call(runner)

    return _run


def user_payload(n: int = 1, **overrides) -> dict:
    data = {
        "username": f"student{n}",
        "password": "secret123",
        "confirmPassword": "secret123",
        "email": f"student{n}@school.org",
        "firstName": "Alex",
        "lastName": f"Rivera{n}",
        "grade": 10,
    }
    data.update(overrides)
    return data


def register(client, n: int = 1, **overrides):
    return client.post("/api/auth/register", json=user_payload(n, **overrides))


def act_as(client, token: str) -> None:
    client.cookies.clear()
    client.cookies.set(AUTH_COOKIE, token)


@pytest.fixture
def make_user(client):
    """Register a user; returns (user_json, session_token). Leaves client logged in as them."""

    def _make(n: int = 1, **overrides):
        resp = register(client, n, **overrides)
        assert resp.status_code == 201, resp.text
        return resp.json(), client.cookies.get(AUTH_COOKIE)

    return _make
