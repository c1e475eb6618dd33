"""
Profile routes (singleton resource)
"""
from fastapi import APIRouter, Depends

from portfolio.api.deps import get_storage
from portfolio.api.routing import route_kwargs
from portfolio.components.contracts import api
from portfolio.components.entities import ProfileCreate
from portfolio.core.exceptions import NotFound
from portfolio.services.storage import StorageService

router = APIRouter(tags=["profile"])


@router.get(api.profile.get.route_path, **route_kwargs(api.profile.get))
def get_profile(storage: StorageService = Depends(get_storage)):
    profile = storage.get_profile()
    if profile is None:
        raise NotFound("Profile not found")
    return profile


@router.put(api.profile.update.route_path, **route_kwargs(api.profile.update))
def update_profile(payload: ProfileCreate, storage: StorageService = Depends(get_storage)):
    """Create the profile on first save, overwrite it afterwards"""
    return storage.update_profile(payload)
