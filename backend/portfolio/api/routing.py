"""
Translate contract routes into FastAPI route arguments
"""
from typing import Annotated, Any, Dict

from fastapi import Depends, Path

from portfolio.components.contracts import ErrorBody, Route
from portfolio.core.auth import get_current_user_required

# Largest value a signed 64-bit primary key column can hold
MAX_ID = 2 ** 63 - 1

ItemId = Annotated[int, Path(ge=1, le=MAX_ID)]


def route_kwargs(route: Route) -> Dict[str, Any]:
    """Status code, response model, error docs and auth guard for a route"""
    kwargs: Dict[str, Any] = {
        "status_code": route.success_status,
        "responses": {code: {"model": ErrorBody} for code in route.responses if code >= 400},
        "name": route.name,
    }
    if route.response_model is not None:
        kwargs["response_model"] = route.response_model
    if route.auth_required:
        # Route-level dependencies resolve before the endpoint's own, so an
        # anonymous request is rejected before any storage is touched.
        kwargs["dependencies"] = [Depends(get_current_user_required)]
    return kwargs
