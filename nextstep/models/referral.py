"""Referral: created at registration when a known referral code is presented."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer

from nextstep.db.session import Base, utcnow


class Referral(Base):
    __tablename__ = "referrals"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    referrer_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    referred_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    is_school = Column(Boolean, nullable=False, default=False)
    commission_paid = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
