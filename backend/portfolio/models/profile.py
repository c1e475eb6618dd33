"""
Profile model (singleton row)
"""
from sqlalchemy import CheckConstraint, Column, Integer, String, Text

from portfolio.core.database import Base

# Every profile row carries this key; the unique constraint caps the table at one row.
PROFILE_SINGLETON_KEY = 1


class Profile(Base):
    """Owner's name, bio and links"""
    __tablename__ = "profile"
    __table_args__ = (
        CheckConstraint(f"singleton_key = {PROFILE_SINGLETON_KEY}", name="ck_profile_singleton_key"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    singleton_key = Column(Integer, nullable=False, unique=True, default=PROFILE_SINGLETON_KEY)
    name = Column(String(255), nullable=False)
    bio = Column(Text, nullable=False)
    tagline = Column(String(500), nullable=False)
    avatar_url = Column(Text, nullable=True)
    resume_url = Column(Text, nullable=True)

    def __repr__(self):
        return f"<Profile(id={self.id}, name={self.name})>"
