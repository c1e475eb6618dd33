"""
API contract shared by the HTTP routes and the client.

Every operation is a ``Route``: method, path template (``:id`` style
placeholders), input model, and a map from status code to the model the
response body must satisfy. The server mounts its routes from this table and
the client validates what it sends and receives against the same models, so
the two sides cannot drift apart.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from types import SimpleNamespace
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, StrictInt, StrictStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from portfolio.components.entities import (EntityModel, LoginRequest,
                                           ProfileCreate, ProfilePublic,
                                           ProjectCreate, ProjectPublic,
                                           ProjectUpdate, SkillCreate,
                                           SkillPublic, SkillUpdate,
                                           SocialCreate, SocialPublic,
                                           SocialUpdate, UserPublic)
from portfolio.components.icons import Glyph
from portfolio.core.exceptions import ValidationError

_PLACEHOLDER = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


# ---------------------------------------------------------------------------
# Non-entity bodies
# ---------------------------------------------------------------------------

class ErrorBody(EntityModel):
    message: StrictStr
    field: Optional[StrictStr] = None


class Message(EntityModel):
    message: StrictStr


class StatComparison(EntityModel):
    current: StrictInt
    last_month: StrictInt
    growth: StrictInt


class AnalyticsSummary(EntityModel):
    projects: StatComparison
    skills: StatComparison
    visits: StatComparison


class VisitPublic(EntityModel):
    id: StrictInt
    visited_at: datetime


class SocialLink(SocialPublic):
    glyph: Glyph


class PortfolioPage(EntityModel):
    profile: Optional[ProfilePublic] = None
    skills_by_category: Dict[str, List[SkillPublic]]
    projects: List[ProjectPublic]
    socials: List[SocialLink]


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

def build_url(path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Substitute ``:name`` placeholders in a path template.

    Raises ValueError when a placeholder has no value or a parameter matches
    no placeholder.
    """
    params = dict(params or {})
    names = _PLACEHOLDER.findall(path)

    missing = [name for name in names if params.get(name) is None]
    if missing:
        raise ValueError(f"Missing URL parameter(s) {missing} for path {path}")
    unknown = sorted(set(params) - set(names))
    if unknown:
        raise ValueError(f"Unknown URL parameter(s) {unknown} for path {path}")

    return _PLACEHOLDER.sub(lambda m: str(params[m.group(1)]), path)


@lru_cache(maxsize=None)
def _adapter(validator: Any) -> TypeAdapter:
    return TypeAdapter(validator)


def _to_validation_error(exc: PydanticValidationError) -> ValidationError:
    return ValidationError.from_pydantic(exc)


@dataclass(frozen=True)
class Route:
    """One API operation"""
    name: str
    method: str
    path: str
    responses: Mapping[int, Any]
    input: Optional[Type[BaseModel]] = None
    auth_required: bool = False
    cache_key: Optional[str] = None
    invalidates: Tuple[str, ...] = ()

    @property
    def route_path(self) -> str:
        """Path in FastAPI ``{name}`` form"""
        return _PLACEHOLDER.sub(r"{\1}", self.path)

    @property
    def success_status(self) -> int:
        return min(code for code in self.responses if code < 300)

    @property
    def response_model(self) -> Any:
        return self.responses[self.success_status]

    @property
    def is_mutation(self) -> bool:
        return self.method != "GET"

    def url(self, **params) -> str:
        return build_url(self.path, params)

    def parse_input(self, payload: Any) -> Optional[BaseModel]:
        """Validate a request body; raises ValidationError"""
        if self.input is None:
            return None
        if isinstance(payload, self.input):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return self.input.model_validate(payload)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e

    def parse_response(self, status_code: int, body: Any) -> Any:
        """Validate a response body against the model declared for its status"""
        if status_code not in self.responses:
            raise ValidationError(
                f"{self.method} {self.path} does not declare status {status_code}"
            )
        validator = self.responses[status_code]
        if validator is None:
            return None
        try:
            return _adapter(validator).validate_python(body)
        except PydanticValidationError as e:
            raise _to_validation_error(e) from e


class RouteGroup(SimpleNamespace):
    """Routes of one resource, reachable as attributes"""

    def __iter__(self) -> Iterator[Route]:
        return iter(self.__dict__.values())


def _crud_routes(
    resource: str,
    public: Type[BaseModel],
    create: Type[BaseModel],
    update: Type[BaseModel],
) -> RouteGroup:
    base = f"/api/{resource}"
    item = f"{base}/:id"
    invalidates = (resource, "portfolio", "analytics")
    return RouteGroup(
        list=Route(
            name=f"list_{resource}",
            method="GET",
            path=base,
            responses={200: List[public]},
            cache_key=resource,
        ),
        get=Route(
            name=f"get_{resource}",
            method="GET",
            path=item,
            responses={200: public, 400: ErrorBody, 404: ErrorBody},
            cache_key=resource,
        ),
        create=Route(
            name=f"create_{resource}",
            method="POST",
            path=base,
            input=create,
            responses={201: public, 400: ErrorBody, 401: ErrorBody},
            auth_required=True,
            invalidates=invalidates,
        ),
        update=Route(
            name=f"update_{resource}",
            method="PUT",
            path=item,
            input=update,
            responses={200: public, 400: ErrorBody, 401: ErrorBody, 404: ErrorBody},
            auth_required=True,
            invalidates=invalidates,
        ),
        delete=Route(
            name=f"delete_{resource}",
            method="DELETE",
            path=item,
            responses={204: None, 400: ErrorBody, 401: ErrorBody, 404: ErrorBody},
            auth_required=True,
            invalidates=invalidates,
        ),
    )


api = SimpleNamespace(
    auth=RouteGroup(
        login=Route(
            name="login",
            method="POST",
            path="/api/login",
            input=LoginRequest,
            responses={200: UserPublic, 400: ErrorBody, 401: ErrorBody},
            invalidates=("user",),
        ),
        logout=Route(
            name="logout",
            method="POST",
            path="/api/logout",
            responses={200: Message, 401: ErrorBody},
            auth_required=True,
            invalidates=("user",),
        ),
        me=Route(
            name="me",
            method="GET",
            path="/api/user",
            responses={200: UserPublic, 401: ErrorBody},
            auth_required=True,
            cache_key="user",
        ),
    ),
    profile=RouteGroup(
        get=Route(
            name="get_profile",
            method="GET",
            path="/api/profile",
            responses={200: ProfilePublic, 404: ErrorBody},
            cache_key="profile",
        ),
        update=Route(
            name="update_profile",
            method="PUT",
            path="/api/profile",
            input=ProfileCreate,
            responses={200: ProfilePublic, 400: ErrorBody, 401: ErrorBody},
            auth_required=True,
            invalidates=("profile", "portfolio"),
        ),
    ),
    skills=_crud_routes("skills", SkillPublic, SkillCreate, SkillUpdate),
    projects=_crud_routes("projects", ProjectPublic, ProjectCreate, ProjectUpdate),
    socials=_crud_routes("socials", SocialPublic, SocialCreate, SocialUpdate),
    visits=RouteGroup(
        record=Route(
            name="record_visit",
            method="POST",
            path="/api/visits",
            responses={201: VisitPublic},
            invalidates=("analytics",),
        ),
    ),
    analytics=RouteGroup(
        summary=Route(
            name="analytics_summary",
            method="GET",
            path="/api/analytics",
            responses={200: AnalyticsSummary, 401: ErrorBody},
            auth_required=True,
            cache_key="analytics",
        ),
    ),
    portfolio=RouteGroup(
        page=Route(
            name="portfolio_page",
            method="GET",
            path="/api/portfolio",
            responses={200: PortfolioPage},
            cache_key="portfolio",
        ),
    ),
)

CONTENT_RESOURCES = ("skills", "projects", "socials")


def iter_routes() -> Iterator[Route]:
    """Every route in the contract"""
    for group in vars(api).values():
        yield from group
