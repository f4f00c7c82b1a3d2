"""Scholarship model: read-only reference data."""
from sqlalchemy import Boolean, Column, Integer, String, Text

from nextstep.db.session import Base


class Scholarship(Base):
    __tablename__ = "scholarships"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    amount = Column(Integer, nullable=False)
    points_required = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
