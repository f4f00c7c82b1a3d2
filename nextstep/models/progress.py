"""UserProgress model: one row per (user, module); is_completed iff progress == 100."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, UniqueConstraint

from nextstep.db.session import Base, utcnow


class UserProgress(Base):
    __tablename__ = "user_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "module_id", name="uq_user_progress_user_module"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    module_id = Column(Integer, ForeignKey("modules.id"), nullable=False, index=True)
    progress = Column(Integer, nullable=False, default=0)  # 0-100
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    last_accessed_at = Column(DateTime, nullable=False, default=utcnow)
