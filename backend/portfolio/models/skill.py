"""
Skill model
"""
from sqlalchemy import Column, DateTime, Integer, String

from portfolio.core.database import Base
from portfolio.utils.datetime_utils import utc_now


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, index=True)  # frontend, backend, tool, soft, ...
    proficiency = Column(Integer, nullable=True, default=100)
    icon = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<Skill(id={self.id}, name={self.name}, category={self.category})>"
