"""User-facing routes outside auth: referrals and public profiles."""
from fastapi import APIRouter

from nextstep.core.errors import NotFoundError
from nextstep.routers.deps import CurrentUser, StorageDep
from nextstep.schemas.auth import PublicUserSchema
from nextstep.schemas.community import ReferralOutSchema

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/referrals", response_model=list[ReferralOutSchema])
async def list_referrals(current_user: CurrentUser, storage: StorageDep):
    return await storage.get_referrals(current_user.id)


@router.get("/users/{user_id}", response_model=PublicUserSchema)
async def get_user_profile(user_id: int, current_user: CurrentUser, storage: StorageDep):
    user = await storage.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
