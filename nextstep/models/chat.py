"""Chat message: one row per turn, user input or coach reply."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text

from nextstep.db.session import Base, utcnow


class ChatMessage(Base):
    __tablename__ = "chat_messages"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_from_user = Column(Boolean, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
