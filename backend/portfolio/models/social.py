"""
Social link model
"""
from sqlalchemy import Boolean, Column, Integer, String, Text

from portfolio.core.database import Base


class Social(Base):
    __tablename__ = "socials"

    id = Column(Integer, primary_key=True, autoincrement=True)
    platform = Column(String(100), nullable=False)  # github, linkedin, twitter, email, ...
    url = Column(Text, nullable=False)
    icon = Column(String(100), nullable=True)
    active = Column(Boolean, nullable=True, default=True)

    def __repr__(self):
        return f"<Social(id={self.id}, platform={self.platform}, active={self.active})>"
