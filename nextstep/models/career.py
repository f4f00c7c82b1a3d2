"""Career recommendation: created in batches by the generate action, never updated."""
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from nextstep.db.session import Base, utcnow


class CareerRecommendation(Base):
    __tablename__ = "career_recommendations"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    match_score = Column(Integer, nullable=False)  # 0-100
    field_of_study = Column(String(255), nullable=False)
    avg_salary = Column(Integer, nullable=True)
    edu_requirements = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
