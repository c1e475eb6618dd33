"""
Site visit counter rows
"""
from sqlalchemy import Column, DateTime, Integer

from portfolio.core.database import Base
from portfolio.utils.datetime_utils import utc_now


class SiteVisit(Base):
    __tablename__ = "site_visits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    visited_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
