"""
Visit counting and dashboard analytics routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from portfolio.api.deps import get_storage
from portfolio.api.routing import route_kwargs
from portfolio.components.contracts import api
from portfolio.core.database import get_db
from portfolio.services.analytics_service import AnalyticsService
from portfolio.services.storage import StorageService

router = APIRouter(tags=["analytics"])


@router.post(api.visits.record.route_path, **route_kwargs(api.visits.record))
def record_visit(storage: StorageService = Depends(get_storage)):
    return storage.record_visit()


@router.get(api.analytics.summary.route_path, **route_kwargs(api.analytics.summary))
def analytics_summary(db: Session = Depends(get_db)):
    """Projects, skills and visits: total, total at month start, growth %"""
    return AnalyticsService(db).summary()
