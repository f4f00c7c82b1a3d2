"""User model: a student account. Points only ever grow."""
from sqlalchemy import Column, Integer, String, DateTime

from nextstep.db.session import Base, utcnow


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    # uniqueness is case-insensitive; enforced by lookups at registration
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    grade = Column(Integer, nullable=False)  # 9-12
    points = Column(Integer, nullable=False, default=0)
    referral_code = Column(String(16), unique=True, nullable=False, index=True)
    referred_by = Column(String(16), nullable=True)  # code presented at registration
    avatar_url = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
