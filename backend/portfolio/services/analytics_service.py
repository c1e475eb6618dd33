"""
Dashboard counters: totals now versus totals at the start of the month
"""
import math
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from portfolio.models import Project, SiteVisit, Skill
from portfolio.services.storage import StorageService
from portfolio.utils.datetime_utils import start_of_month, utc_now


def calculate_growth(current: int, previous: int) -> int:
    """Percentage change rounded to an integer.

    Halves round up. From zero the growth is 100 when anything was added,
    otherwise 0.
    """
    if previous == 0:
        return 100 if current > 0 else 0
    return math.floor((current - previous) / previous * 100 + 0.5)


class AnalyticsService:
    """Simple counting queries for the admin dashboard"""

    def __init__(self, db: Session):
        self.storage = StorageService(db)

    def _compare(self, model, month_start: datetime) -> Dict[str, int]:
        current = self.storage.count_rows(model)
        last_month = self.storage.count_rows(model, created_before=month_start)
        return {
            "current": current,
            "last_month": last_month,
            "growth": calculate_growth(current, last_month),
        }

    def summary(self, now: Optional[datetime] = None) -> Dict[str, Dict[str, int]]:
        month_start = start_of_month(now or utc_now())
        return {
            "projects": self._compare(Project, month_start),
            "skills": self._compare(Skill, month_start),
            "visits": self._compare(SiteVisit, month_start),
        }
