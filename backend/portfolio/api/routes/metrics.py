"""
Prometheus exposition endpoint
"""
from fastapi import APIRouter
from fastapi.responses import Response

from portfolio.core.metrics import get_metrics_response

router = APIRouter(tags=["metrics"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    payload, content_type = get_metrics_response()
    return Response(content=payload, media_type=content_type)
