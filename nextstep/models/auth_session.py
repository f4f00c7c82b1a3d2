"""Login session: opaque bearer token mapped to a user until expires_at."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from nextstep.db.session import Base, utcnow


class AuthSession(Base):
    __tablename__ = "sessions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
