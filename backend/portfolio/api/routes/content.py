"""
CRUD routes for skills, projects and socials, mounted from the API contract
"""
from fastapi import APIRouter, Depends, Response, status

from portfolio.api.deps import get_storage
from portfolio.api.routing import ItemId, route_kwargs
from portfolio.components.contracts import CONTENT_RESOURCES, RouteGroup, api
from portfolio.core.exceptions import NotFound
from portfolio.services.storage import StorageService

# resource -> singular name used by StorageService methods
_SINGULAR = {
    "skills": "skill",
    "projects": "project",
    "socials": "social",
}


def build_content_router(resource: str, routes: RouteGroup) -> APIRouter:
    """Bind one resource's contract routes to StorageService calls"""
    router = APIRouter(tags=[resource])
    singular = _SINGULAR[resource]
    entity = singular.capitalize()
    list_attr = f"get_{resource}"
    get_attr = f"get_{singular}"
    create_attr = f"create_{singular}"
    update_attr = f"update_{singular}"
    delete_attr = f"delete_{singular}"

    create_model = routes.create.input
    update_model = routes.update.input

    @router.get(routes.list.route_path, **route_kwargs(routes.list))
    def list_view(storage: StorageService = Depends(get_storage)):
        return getattr(storage, list_attr)()

    @router.get(routes.get.route_path, **route_kwargs(routes.get))
    def get_view(id: ItemId, storage: StorageService = Depends(get_storage)):
        item = getattr(storage, get_attr)(id)
        if item is None:
            raise NotFound(f"{entity} {id} not found")
        return item

    @router.post(routes.create.route_path, **route_kwargs(routes.create))
    def create_view(payload: create_model, storage: StorageService = Depends(get_storage)):
        return getattr(storage, create_attr)(payload)

    @router.put(routes.update.route_path, **route_kwargs(routes.update))
    def update_view(id: ItemId, payload: update_model, storage: StorageService = Depends(get_storage)):
        return getattr(storage, update_attr)(id, payload)

    @router.delete(routes.delete.route_path, **route_kwargs(routes.delete))
    def delete_view(id: ItemId, storage: StorageService = Depends(get_storage)):
        # Deleting an unknown id is reported as 404 for every resource
        if getattr(storage, get_attr)(id) is None:
            raise NotFound(f"{entity} {id} not found")
        getattr(storage, delete_attr)(id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


router = APIRouter()
for _resource in CONTENT_RESOURCES:
    router.include_router(build_content_router(_resource, getattr(api, _resource)))
