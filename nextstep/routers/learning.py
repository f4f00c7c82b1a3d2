"""Curriculum routes: modules, progress, achievements, scholarships."""
import logging

from fastapi import APIRouter

from nextstep.core.errors import NotFoundError
from nextstep.routers.deps import CurrentUser, StorageDep
from nextstep.schemas.learning import (
    AchievementOutSchema,
    ModuleOutSchema,
    ProgressInSchema,
    ProgressOutSchema,
    ScholarshipOutSchema,
    ScholarshipProgressSchema,
)
from nextstep.services.rewards import (
    achievements_for_module,
    earns_completion_points,
    scholarship_progress,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["learning"])


# ---------- modules ----------

@router.get("/modules", response_model=list[ModuleOutSchema])
async def list_modules(storage: StorageDep):
    return await storage.get_modules()


@router.get("/modules/category/{category}", response_model=list[ModuleOutSchema])
async def list_modules_by_category(category: str, storage: StorageDep):
    return await storage.get_modules_by_category(category)


@router.get("/modules/{module_id}", response_model=ModuleOutSchema)
async def get_module(module_id: int, storage: StorageDep):
    module = await storage.get_module(module_id)
    if module is None:
        raise NotFoundError("Module not found")
    return module


# ---------- progress ----------

@router.get("/user/progress", response_model=list[ProgressOutSchema])
async def list_progress(current_user: CurrentUser, storage: StorageDep):
    return await storage.get_user_progress(current_user.id)


@router.post("/user/progress", response_model=ProgressOutSchema)
async def update_progress(body: ProgressInSchema, current_user: CurrentUser, storage: StorageDep):
    """Upsert progress; at 100% marked complete, credit module points and try unlocks."""
    module = await storage.get_module(body.module_id)
    if module is None:
        raise NotFoundError("Module not found")

    user_id = current_user.id
    progress = await storage.update_user_progress(user_id, module.id, body.progress)

    if earns_completion_points(body.progress, body.is_completed):
        await storage.update_user_points(user_id, module.points)
        logger.info("User %s completed module %s, +%d points", user_id, module.id, module.points)
        achievements = await storage.get_achievements()
        for achievement in achievements_for_module(achievements, module):
            await storage.unlock_achievement(user_id, achievement.id)

    return progress


# ---------- achievements ----------

@router.get("/achievements", response_model=list[AchievementOutSchema])
async def list_achievements(storage: StorageDep):
    return await storage.get_achievements()


@router.get("/user/achievements", response_model=list[AchievementOutSchema])
async def list_user_achievements(current_user: CurrentUser, storage: StorageDep):
    return await storage.get_user_achievements(current_user.id)


# ---------- scholarships ----------

@router.get("/scholarships", response_model=list[ScholarshipOutSchema])
async def list_scholarships(storage: StorageDep):
    return await storage.get_scholarships()


@router.get("/scholarships/{scholarship_id}", response_model=ScholarshipOutSchema)
async def get_scholarship(scholarship_id: int, storage: StorageDep):
    scholarship = await storage.get_scholarship(scholarship_id)
    if scholarship is None:
        raise NotFoundError("Scholarship not found")
    return scholarship


@router.get("/user/scholarships", response_model=list[ScholarshipProgressSchema])
async def list_scholarship_progress(current_user: CurrentUser, storage: StorageDep):
    """Scholarships with the current user's progress toward each."""
    scholarships = await storage.get_scholarships()
    return [
        ScholarshipProgressSchema(
            **ScholarshipOutSchema.model_validate(s).model_dump(),
            progress=scholarship_progress(current_user.points, s.points_required),
        )
        for s in scholarships
    ]
