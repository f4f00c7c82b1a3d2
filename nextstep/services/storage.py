"""Entity store: async accessors over the ORM models.

A Storage wraps one AsyncSession (one per request, see `open_session`). Every
mutating call commits before returning. At-most-one rows (progress per module,
unlocked achievement, like per post) rest on unique constraints; unlocks and
likes are written with INSERT .. ON CONFLICT DO NOTHING, and a like row and its
likes_count change commit together.
"""
import logging
from datetime import timedelta

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nextstep.core.errors import ConflictError
from nextstep.core.security import generate_session_token
from nextstep.db.session import utcnow
from nextstep.models import (
    Achievement,
    AuthSession,
    CareerRecommendation,
    ChatMessage,
    CommunityComment,
    CommunityPost,
    Module,
    PostLike,
    Referral,
    Scholarship,
    User,
    UserAchievement,
    UserProgress,
)
from nextstep.services.rewards import COMPLETE

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=7)


class Storage:
    def __init__(self, db: AsyncSession, session_ttl: timedelta = DEFAULT_SESSION_TTL):
        self.db = db
        self.session_ttl = session_ttl

    async def _save(self, obj):
        self.db.add(obj)
        await self.db.commit()
        await self.db.refresh(obj)
        return obj

    # ---------- users ----------

    async def get_user(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.username) == username.lower())
        )
        return result.scalars().first()

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalars().first()

    async def get_user_by_referral_code(self, referral_code: str) -> User | None:
        result = await self.db.execute(select(User).where(User.referral_code == referral_code))
        return result.scalar_one_or_none()

    async def create_user(
        self,
        *,
        username: str,
        email: str,
        hashed_password: str,
        first_name: str,
        last_name: str,
        grade: int,
        referral_code: str,
        referred_by: str | None = None,
        avatar_url: str | None = None,
    ) -> User:
        user = User(
            username=username,
            email=email,
            hashed_password=hashed_password,
            first_name=first_name,
            last_name=last_name,
            grade=grade,
            points=0,
            referral_code=referral_code,
            referred_by=referred_by,
            avatar_url=avatar_url,
        )
        try:
            return await self._save(user)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Username or email already exists")

    async def update_user_points(self, user_id: int, points: int) -> User | None:
        """Add points (atomic increment); None if the user does not exist."""
        result = await self.db.execute(
            update(User).where(User.id == user_id).values(points=User.points + points)
        )
        if not result.rowcount:
            return None
        await self.db.commit()
        return await self.db.get(User, user_id, populate_existing=True)

    # ---------- sessions ----------

    async def create_session(self, user_id: int) -> AuthSession:
        now = utcnow()
        session = AuthSession(
            user_id=user_id,
            token=generate_session_token(),
            expires_at=now + self.session_ttl,
            created_at=now,
        )
        return await self._save(session)

    async def get_session_by_token(self, token: str) -> AuthSession | None:
        """Live session for token; an expired one is reported as missing."""
        result = await self.db.execute(select(AuthSession).where(AuthSession.token == token))
        session = result.scalar_one_or_none()
        if session is None or session.expires_at <= utcnow():
            return None
        return session

    async def delete_session(self, token: str) -> None:
        await self.db.execute(delete(AuthSession).where(AuthSession.token == token))
        await self.db.commit()

    # ---------- modules ----------

    async def get_modules(self) -> list[Module]:
        result = await self.db.execute(select(Module).order_by(Module.order, Module.id))
        return list(result.scalars().all())

    async def get_module(self, module_id: int) -> Module | None:
        return await self.db.get(Module, module_id)

    async def get_modules_by_category(self, category: str) -> list[Module]:
        result = await self.db.execute(
            select(Module).where(Module.category == category).order_by(Module.order, Module.id)
        )
        return list(result.scalars().all())

    async def create_module(self, **fields) -> Module:
        return await self._save(Module(**fields))

    # ---------- progress ----------

    async def get_user_progress(self, user_id: int) -> list[UserProgress]:
        result = await self.db.execute(
            select(UserProgress).where(UserProgress.user_id == user_id).order_by(UserProgress.id)
        )
        return list(result.scalars().all())

    async def get_user_progress_by_module(self, user_id: int, module_id: int) -> UserProgress | None:
        result = await self.db.execute(
            select(UserProgress).where(
                UserProgress.user_id == user_id,
                UserProgress.module_id == module_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_user_progress(self, user_id: int, module_id: int, progress: int) -> UserProgress:
        now = utcnow()
        completed = progress == COMPLETE
        row = UserProgress(
            user_id=user_id,
            module_id=module_id,
            progress=progress,
            is_completed=completed,
            completed_at=now if completed else None,
            last_accessed_at=now,
        )
        try:
            return await self._save(row)
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("Progress was updated concurrently, please retry")

    async def update_user_progress(self, user_id: int, module_id: int, progress: int) -> UserProgress:
        """Upsert the (user, module) row; stamps last_accessed_at, and completed_at at 100."""
        row = await self.get_user_progress_by_module(user_id, module_id)
        if row is None:
            return await self.create_user_progress(user_id, module_id, progress)

        now = utcnow()
        row.progress = progress
        row.is_completed = progress == COMPLETE
        if row.is_completed:
            row.completed_at = now
        row.last_accessed_at = now
        await self.db.commit()
        return row

    # ---------- achievements ----------

    async def get_achievements(self) -> list[Achievement]:
        result = await self.db.execute(select(Achievement).order_by(Achievement.id))
        return list(result.scalars().all())

    async def get_user_achievements(self, user_id: int) -> list[Achievement]:
        result = await self.db.execute(
            select(Achievement)
            .join(UserAchievement, UserAchievement.achievement_id == Achievement.id)
            .where(UserAchievement.user_id == user_id)
            .order_by(Achievement.id)
        )
        return list(result.scalars().all())

    async def _get_user_achievement(self, user_id: int, achievement_id: int) -> UserAchievement | None:
        result = await self.db.execute(
            select(UserAchievement).where(
                UserAchievement.user_id == user_id,
                UserAchievement.achievement_id == achievement_id,
            )
        )
        return result.scalar_one_or_none()

    async def unlock_achievement(self, user_id: int, achievement_id: int) -> UserAchievement | None:
        """Idempotent: a second unlock returns the existing record."""
        if await self.db.get(Achievement, achievement_id) is None:
            return None

        result = await self.db.execute(
            sqlite_insert(UserAchievement)
            .values(user_id=user_id, achievement_id=achievement_id, unlocked_at=utcnow())
            .on_conflict_do_nothing(index_elements=["user_id", "achievement_id"])
        )
        await self.db.commit()
        if result.rowcount:
            logger.info("User %s unlocked achievement %s", user_id, achievement_id)
        return await self._get_user_achievement(user_id, achievement_id)

    async def create_achievement(self, **fields) -> Achievement:
        return await self._save(Achievement(**fields))

    # ---------- scholarships ----------

    async def get_scholarships(self) -> list[Scholarship]:
        result = await self.db.execute(select(Scholarship).order_by(Scholarship.id))
        return list(result.scalars().all())

    async def get_scholarship(self, scholarship_id: int) -> Scholarship | None:
        return await self.db.get(Scholarship, scholarship_id)

    async def create_scholarship(self, **fields) -> Scholarship:
        return await self._save(Scholarship(**fields))

    # ---------- chat ----------

    async def get_chat_messages(self, user_id: int) -> list[ChatMessage]:
        result = await self.db.execute(
            select(ChatMessage)
            .where(ChatMessage.user_id == user_id)
            .order_by(ChatMessage.created_at, ChatMessage.id)
        )
        return list(result.scalars().all())

    async def get_recent_chat_messages(
        self, user_id: int, limit: int, before_id: int | None = None
    ) -> list[ChatMessage]:
        """Last `limit` messages (optionally older than before_id), oldest first."""
        stmt = select(ChatMessage).where(ChatMessage.user_id == user_id)
        if before_id is not None:
            stmt = stmt.where(ChatMessage.id < before_id)
        stmt = stmt.order_by(ChatMessage.created_at.desc(), ChatMessage.id.desc()).limit(limit)
        result = await self.db.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def create_chat_message(self, user_id: int, message: str, is_from_user: bool) -> ChatMessage:
        return await self._save(ChatMessage(user_id=user_id, message=message, is_from_user=is_from_user))

    # ---------- career recommendations ----------

    async def get_career_recommendations(self, user_id: int) -> list[CareerRecommendation]:
        result = await self.db.execute(
            select(CareerRecommendation)
            .where(CareerRecommendation.user_id == user_id)
            .order_by(CareerRecommendation.id)
        )
        return list(result.scalars().all())

    async def create_career_recommendation(self, user_id: int, **fields) -> CareerRecommendation:
        return await self._save(CareerRecommendation(user_id=user_id, **fields))

    # ---------- referrals ----------

    async def create_referral(
        self,
        referrer_user_id: int,
        referred_user_id: int,
        is_school: bool = False,
        commission_paid: bool = False,
    ) -> Referral:
        return await self._save(
            Referral(
                referrer_user_id=referrer_user_id,
                referred_user_id=referred_user_id,
                is_school=is_school,
                commission_paid=commission_paid,
            )
        )

    async def get_referrals(self, user_id: int) -> list[Referral]:
        result = await self.db.execute(
            select(Referral).where(Referral.referrer_user_id == user_id).order_by(Referral.id)
        )
        return list(result.scalars().all())

    # ---------- community posts ----------

    async def _list_posts(self, *criteria) -> list[CommunityPost]:
        result = await self.db.execute(
            select(CommunityPost)
            .where(*criteria)
            .order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
        )
        return list(result.scalars().all())

    async def get_community_posts(self) -> list[CommunityPost]:
        return await self._list_posts()

    async def get_community_posts_by_user(self, user_id: int) -> list[CommunityPost]:
        return await self._list_posts(CommunityPost.user_id == user_id)

    async def get_community_posts_by_module(self, module_id: int) -> list[CommunityPost]:
        return await self._list_posts(CommunityPost.module_id == module_id)

    async def get_community_post(self, post_id: int) -> CommunityPost | None:
        return await self.db.get(CommunityPost, post_id, populate_existing=True)

    async def create_community_post(
        self,
        user_id: int,
        title: str,
        content: str,
        module_id: int | None = None,
        file_url: str | None = None,
    ) -> CommunityPost:
        now = utcnow()
        post = CommunityPost(
            user_id=user_id,
            title=title,
            content=content,
            module_id=module_id,
            file_url=file_url,
            likes_count=0,
            created_at=now,
            updated_at=now,
        )
        return await self._save(post)

    async def _bump_like_count(self, post_id: int, increment_by: int):
        return await self.db.execute(
            update(CommunityPost)
            .where(CommunityPost.id == post_id)
            .values(likes_count=CommunityPost.likes_count + increment_by, updated_at=utcnow())
        )

    # ---------- community comments ----------

    async def get_community_comments(self, post_id: int) -> list[CommunityComment]:
        result = await self.db.execute(
            select(CommunityComment)
            .where(CommunityComment.post_id == post_id)
            .order_by(CommunityComment.created_at, CommunityComment.id)
        )
        return list(result.scalars().all())

    async def create_community_comment(self, post_id: int, user_id: int, content: str) -> CommunityComment:
        now = utcnow()
        return await self._save(
            CommunityComment(post_id=post_id, user_id=user_id, content=content, created_at=now, updated_at=now)
        )

    # ---------- likes ----------

    async def get_post_like(self, post_id: int, user_id: int) -> PostLike | None:
        result = await self.db.execute(
            select(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_post_like(self, post_id: int, user_id: int) -> PostLike | None:
        """Like a post and bump its counter in one transaction; None if already liked."""
        result = await self.db.execute(
            sqlite_insert(PostLike)
            .values(post_id=post_id, user_id=user_id, created_at=utcnow())
            .on_conflict_do_nothing(index_elements=["post_id", "user_id"])
        )
        if not result.rowcount:
            return None
        await self._bump_like_count(post_id, 1)
        await self.db.commit()
        return await self.get_post_like(post_id, user_id)

    async def delete_post_like(self, post_id: int, user_id: int) -> bool:
        """Remove a like and decrement the counter; False if there was none."""
        result = await self.db.execute(
            delete(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == user_id)
        )
        if not result.rowcount:
            return False
        await self._bump_like_count(post_id, -1)
        await self.db.commit()
        return True
