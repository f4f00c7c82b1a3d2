"""Curriculum module: seeded at startup, read-only afterwards."""
from sqlalchemy import Boolean, Column, Integer, String, Text

from nextstep.db.session import Base


class Module(Base):
    __tablename__ = "modules"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(64), nullable=False, index=True)
    image_url = Column(String(512), nullable=True)
    duration = Column(Integer, nullable=False)  # minutes
    points = Column(Integer, nullable=False)  # reward on completion
    order = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
