"""Community routes: posts, comments, likes.

Listings annotate every post with the caller's isLiked flag, one lookup per post.
"""
import logging

from fastapi import APIRouter, status

from nextstep.core.errors import ConflictError, NotFoundError
from nextstep.models import CommunityPost, User
from nextstep.routers.deps import CurrentUser, OptionalUser, SettingsDep, StorageDep
from nextstep.schemas.community import CommentInSchema, CommentOutSchema, PostInSchema, PostOutSchema
from nextstep.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/community", tags=["community"])


async def _post_view(storage: Storage, post: CommunityPost, user: User | None) -> PostOutSchema:
    view = PostOutSchema.model_validate(post)
    if user is not None:
        view.is_liked = await storage.get_post_like(post.id, user.id) is not None
    return view


async def _post_views(storage: Storage, posts: list[CommunityPost], user: User | None) -> list[PostOutSchema]:
    return [await _post_view(storage, post, user) for post in posts]


async def _require_post(storage: Storage, post_id: int) -> CommunityPost:
    post = await storage.get_community_post(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


# ---------- posts ----------

@router.get("/posts", response_model=list[PostOutSchema])
async def list_posts(storage: StorageDep, current_user: OptionalUser):
    return await _post_views(storage, await storage.get_community_posts(), current_user)


@router.post("/posts", response_model=PostOutSchema, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: PostInSchema,
    current_user: CurrentUser,
    storage: StorageDep,
    settings: SettingsDep,
):
    if body.module_id is not None and await storage.get_module(body.module_id) is None:
        raise NotFoundError("Module not found")

    user_id = current_user.id
    post = await storage.create_community_post(
        user_id=user_id,
        title=body.title,
        content=body.content,
        module_id=body.module_id,
        file_url=body.file_url,
    )
    await storage.update_user_points(user_id, settings.post_points)
    logger.info("User %s created post %s", user_id, post.id)
    return PostOutSchema.model_validate(post)


@router.get("/posts/{post_id}", response_model=PostOutSchema)
async def get_post(post_id: int, storage: StorageDep, current_user: OptionalUser):
    post = await _require_post(storage, post_id)
    return await _post_view(storage, post, current_user)


@router.get("/user/{user_id}/posts", response_model=list[PostOutSchema])
async def list_user_posts(user_id: int, storage: StorageDep, current_user: OptionalUser):
    return await _post_views(storage, await storage.get_community_posts_by_user(user_id), current_user)


@router.get("/module/{module_id}/posts", response_model=list[PostOutSchema])
async def list_module_posts(module_id: int, storage: StorageDep, current_user: OptionalUser):
    return await _post_views(storage, await storage.get_community_posts_by_module(module_id), current_user)


# ---------- comments ----------

@router.get("/posts/{post_id}/comments", response_model=list[CommentOutSchema])
async def list_comments(post_id: int, storage: StorageDep):
    await _require_post(storage, post_id)
    return await storage.get_community_comments(post_id)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentOutSchema,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: int,
    body: CommentInSchema,
    current_user: CurrentUser,
    storage: StorageDep,
    settings: SettingsDep,
):
    await _require_post(storage, post_id)
    user_id = current_user.id
    comment = await storage.create_community_comment(post_id=post_id, user_id=user_id, content=body.content)
    await storage.update_user_points(user_id, settings.comment_points)
    return comment


# ---------- likes ----------

@router.post("/posts/{post_id}/like", response_model=PostOutSchema)
async def like_post(post_id: int, current_user: CurrentUser, storage: StorageDep):
    await _require_post(storage, post_id)
    user_id = current_user.id
    if await storage.create_post_like(post_id, user_id) is None:
        raise ConflictError("You have already liked this post")
    post = await _require_post(storage, post_id)
    view = PostOutSchema.model_validate(post)
    view.is_liked = True
    return view


@router.delete("/posts/{post_id}/like", response_model=PostOutSchema)
async def unlike_post(post_id: int, current_user: CurrentUser, storage: StorageDep):
    await _require_post(storage, post_id)
    user_id = current_user.id
    if not await storage.delete_post_like(post_id, user_id):
        raise ConflictError("You have not liked this post")
    post = await _require_post(storage, post_id)
    view = PostOutSchema.model_validate(post)
    view.is_liked = False
    return view
