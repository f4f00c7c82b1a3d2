"""Auth routes: register, login, logout, me. Opaque session token in an HTTP-only cookie."""
import logging

from fastapi import APIRouter, Request, Response, status
from starlette.concurrency import run_in_threadpool

from nextstep.core.errors import ConflictError, ValidationFailed
from nextstep.core.security import generate_referral_code, hash_password, verify_password
from nextstep.routers.deps import (
    CurrentUser,
    SettingsDep,
    StorageDep,
    clear_auth_cookie,
    set_auth_cookie,
)
from nextstep.schemas.auth import LoginSchema, MessageSchema, RegisterSchema, UserOutSchema
from nextstep.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid username or password"
REFERRAL_CODE_ATTEMPTS = 10


async def _new_referral_code(storage: Storage) -> str:
    for _ in range(REFERRAL_CODE_ATTEMPTS):
        code = generate_referral_code()
        if await storage.get_user_by_referral_code(code) is None:
            return code
    raise RuntimeError("Could not allocate a unique referral code")


@router.post("/register", response_model=UserOutSchema, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterSchema,
    response: Response,
    storage: StorageDep,
    settings: SettingsDep,
):
    """Create user, credit the referrer if a known code was given, set auth cookie."""
    if await storage.get_user_by_username(body.username):
        raise ConflictError("Username already exists")
    if await storage.get_user_by_email(body.email):
        raise ConflictError("Email already exists")

    referrer = None
    if body.referral_code:
        referrer = await storage.get_user_by_referral_code(body.referral_code)

    hashed = await run_in_threadpool(hash_password, body.password)
    user = await storage.create_user(
        username=body.username,
        email=body.email,
        hashed_password=hashed,
        first_name=body.first_name,
        last_name=body.last_name,
        grade=body.grade,
        referral_code=await _new_referral_code(storage),
        referred_by=referrer.referral_code if referrer else None,
        avatar_url=body.avatar_url,
    )
    logger.info("Registered user %s (%s)", user.id, user.username)

    if referrer is not None:
        await storage.create_referral(referrer_user_id=referrer.id, referred_user_id=user.id)
        await storage.update_user_points(referrer.id, settings.referral_bonus_points)
        logger.info("User %s referred by %s, +%d points", user.id, referrer.id, settings.referral_bonus_points)

    session = await storage.create_session(user.id)
    set_auth_cookie(response, session.token, settings)
    return user


@router.post("/login", response_model=UserOutSchema)
async def login(
    body: LoginSchema,
    response: Response,
    storage: StorageDep,
    settings: SettingsDep,
):
    """Check credentials; same message whether the user or the password is wrong."""
    user = await storage.get_user_by_username(body.username)
    if user is None or not await run_in_threadpool(verify_password, body.password, user.hashed_password):
        logger.info("Failed login for %r", body.username)
        raise ValidationFailed(INVALID_CREDENTIALS)

    session = await storage.create_session(user.id)
    set_auth_cookie(response, session.token, settings)
    return user


@router.post("/logout", response_model=MessageSchema)
async def logout(
    request: Request,
    response: Response,
    current_user: CurrentUser,
    storage: StorageDep,
    settings: SettingsDep,
):
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        await storage.delete_session(token)
    clear_auth_cookie(response, settings)
    return MessageSchema(message="Logged out successfully")


@router.get("/me", response_model=UserOutSchema)
async def me(current_user: CurrentUser):
    return current_user
