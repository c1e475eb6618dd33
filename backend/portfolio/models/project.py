"""
Project model
"""
from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from portfolio.core.database import Base
from portfolio.utils.datetime_utils import utc_now


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    project_url = Column(Text, nullable=True)
    repo_url = Column(Text, nullable=True)
    tech_stack = Column(JSON, nullable=True)  # ordered list of strings
    display_order = Column(Integer, nullable=True, default=0, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    def __repr__(self):
        return f"<Project(id={self.id}, title={self.title}, display_order={self.display_order})>"
