"""
HTTP client for the portfolio API.

Every call goes through a contract ``Route``: the payload is validated before
it is sent, the response is validated against the model declared for its
status code, reads are served from a ``QueryCache`` and successful mutations
invalidate the collections the route names.
"""
from typing import Any, List, Optional

import httpx

from portfolio.client.cache import QueryCache
from portfolio.components.contracts import Route, api
from portfolio.core.exceptions import ValidationError
from portfolio.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)


class ApiError(Exception):
    """Non-success response from the API"""

    def __init__(self, status_code: int, message: str, field: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.field = field
        super().__init__(f"{status_code}: {message}")


class PortfolioClient:
    """Typed access to the portfolio API over an ``httpx.Client``.

    The session cookie set by ``login`` lives in the http client's cookie
    jar, so the same instance must be used for authenticated calls.
    """

    def __init__(self, http: httpx.Client, cache: Optional[QueryCache] = None):
        self.http = http
        self.cache = cache if cache is not None else QueryCache()

    # ------------------------------------------------------------------
    # Core request path
    # ------------------------------------------------------------------

    def call(self, route: Route, payload: Any = None, **params) -> Any:
        """Send one contract operation and return its validated body"""
        url = route.url(**params)

        if not route.is_mutation and route.cache_key and self.cache.has(route.cache_key, url):
            return self.cache.get(route.cache_key, url)

        body = None
        if route.input is not None:
            data = route.parse_input(payload)
            body = data.model_dump(mode="json", by_alias=True, exclude_unset=True)

        response = self.http.request(route.method, url, json=body)
        result = self._parse(route, response)

        if route.is_mutation:
            for collection in route.invalidates:
                self.cache.invalidate(collection)
        elif route.cache_key:
            self.cache.set(route.cache_key, result, query=url)
        return result

    def _parse(self, route: Route, response: httpx.Response) -> Any:
        status_code = response.status_code
        payload = self._json(response)

        if status_code >= 400:
            message = f"Request failed with status {status_code}"
            field = None
            if isinstance(payload, dict):
                message = payload.get("message") or message
                field = payload.get("field")
            logger.info(
                f"{route.method} {route.path} failed",
                extra={"status_code": status_code, "error_message": message}
            )
            raise ApiError(status_code, message, field)

        try:
            return route.parse_response(status_code, payload)
        except ValidationError as e:
            raise ApiError(status_code, f"Unexpected response body: {e.message}", e.field) from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def login(self, username: str, password: str):
        return self.call(api.auth.login, {"username": username, "password": password})

    def logout(self):
        result = self.call(api.auth.logout)
        self.cache.clear()
        return result

    def me(self):
        return self.call(api.auth.me)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self):
        """Profile, or None before one has been saved"""
        try:
            return self.call(api.profile.get)
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    def update_profile(self, data: Any):
        return self.call(api.profile.update, data)

    # ------------------------------------------------------------------
    # Content collections
    # ------------------------------------------------------------------

    def list(self, resource: str) -> List[Any]:
        return self.call(getattr(api, resource).list)

    def get(self, resource: str, item_id: int):
        return self.call(getattr(api, resource).get, id=item_id)

    def create(self, resource: str, data: Any):
        return self.call(getattr(api, resource).create, data)

    def update(self, resource: str, item_id: int, data: Any):
        return self.call(getattr(api, resource).update, data, id=item_id)

    def delete(self, resource: str, item_id: int) -> None:
        self.call(getattr(api, resource).delete, id=item_id)

    def list_skills(self):
        return self.list("skills")

    def create_skill(self, data: Any):
        return self.create("skills", data)

    def update_skill(self, skill_id: int, data: Any):
        return self.update("skills", skill_id, data)

    def delete_skill(self, skill_id: int):
        self.delete("skills", skill_id)

    def list_projects(self):
        return self.list("projects")

    def create_project(self, data: Any):
        return self.create("projects", data)

    def update_project(self, project_id: int, data: Any):
        return self.update("projects", project_id, data)

    def delete_project(self, project_id: int):
        self.delete("projects", project_id)

    def list_socials(self):
        return self.list("socials")

    def create_social(self, data: Any):
        return self.create("socials", data)

    def update_social(self, social_id: int, data: Any):
        return self.update("socials", social_id, data)

    def delete_social(self, social_id: int):
        self.delete("socials", social_id)

    # ------------------------------------------------------------------
    # Public page and analytics
    # ------------------------------------------------------------------

    def record_visit(self):
        return self.call(api.visits.record)

    def analytics(self):
        return self.call(api.analytics.summary)

    def portfolio_page(self):
        return self.call(api.portfolio.page)
