"""Request-scoped dependencies: settings, store, AI gateway, current user."""
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from nextstep.core.config import Settings
from nextstep.core.errors import AuthenticationError
from nextstep.db.session import get_db
from nextstep.models import User
from nextstep.services.ai import AIGateway
from nextstep.services.storage import Storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Storage:
    return Storage(db, session_ttl=timedelta(days=settings.session_ttl_days))


def get_ai_gateway(request: Request) -> AIGateway:
    return request.app.state.ai_gateway


async def get_current_user_optional(
    request: Request,
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User | None:
    """Return current user if the auth cookie maps to a live session; else None."""
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        return None
    session = await storage.get_session_by_token(token)
    if session is None:
        return None
    return await storage.get_user(session.user_id)


async def get_current_user(
    request: Request,
    storage: Annotated[Storage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> User:
    """Resolve the auth cookie to a user or fail with 401 (clearing a stale cookie)."""
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise AuthenticationError("Unauthorized - No token provided")

    session = await storage.get_session_by_token(token)
    if session is None:
        raise AuthenticationError("Unauthorized - Invalid token", clear_cookie=True)

    user = await storage.get_user(session.user_id)
    if user is None:
        raise AuthenticationError("Unauthorized - User not found", clear_cookie=True)
    return user


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    # path must match the one used in set_cookie()
    response.delete_cookie(settings.auth_cookie_name, path="/")


StorageDep = Annotated[Storage, Depends(get_storage)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_current_user_optional)]
AIGatewayDep = Annotated[AIGateway, Depends(get_ai_gateway)]
