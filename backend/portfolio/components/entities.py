"""
Entity shapes shared by the HTTP layer, the storage layer and the client.

Each entity has three models:

- ``<E>Create``: insert shape, every column except the generated id
- ``<E>Update``: partial insert shape, every field optional; only the fields
  a caller actually sends are applied (``model_dump(exclude_unset=True)``)
- ``<E>Public``: insert shape plus ``id``, the response body

JSON uses camelCase keys (``avatarUrl``, ``techStack``); Python attributes
are snake_case and match the SQLAlchemy column names.
"""
from typing import Annotated, List, Optional

from pydantic import (BaseModel, ConfigDict, Field, StrictBool, StrictInt,
                      StrictStr, StringConstraints, field_validator)
from pydantic.alias_generators import to_camel

# Categories offered by the admin UI. Storage accepts any non-empty text.
SKILL_CATEGORIES = ("frontend", "backend", "tool", "soft")

NonEmptyStr = Annotated[StrictStr, StringConstraints(min_length=1)]


class EntityModel(BaseModel):
    """Base model: camelCase aliases, ORM reads, unknown keys dropped"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


def _reject_null(value):
    if value is None:
        raise ValueError("Field may not be null")
    return value


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class ProfileCreate(EntityModel):
    name: NonEmptyStr
    bio: NonEmptyStr
    tagline: NonEmptyStr
    avatar_url: Optional[StrictStr] = None
    resume_url: Optional[StrictStr] = None


class ProfileUpdate(EntityModel):
    name: Optional[NonEmptyStr] = None
    bio: Optional[NonEmptyStr] = None
    tagline: Optional[NonEmptyStr] = None
    avatar_url: Optional[StrictStr] = None
    resume_url: Optional[StrictStr] = None

    @field_validator("name", "bio", "tagline")
    @classmethod
    def required_fields_not_null(cls, value):
        return _reject_null(value)


class ProfilePublic(ProfileCreate):
    id: StrictInt


# ---------------------------------------------------------------------------
# Skill
# ---------------------------------------------------------------------------

class SkillCreate(EntityModel):
    name: NonEmptyStr
    category: NonEmptyStr
    proficiency: Optional[StrictInt] = 100
    icon: Optional[StrictStr] = None


class SkillUpdate(EntityModel):
    name: Optional[NonEmptyStr] = None
    category: Optional[NonEmptyStr] = None
    proficiency: Optional[StrictInt] = None
    icon: Optional[StrictStr] = None

    @field_validator("name", "category")
    @classmethod
    def required_fields_not_null(cls, value):
        return _reject_null(value)


class SkillPublic(SkillCreate):
    id: StrictInt


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

class ProjectCreate(EntityModel):
    title: NonEmptyStr
    description: NonEmptyStr
    image_url: Optional[StrictStr] = None
    project_url: Optional[StrictStr] = None
    repo_url: Optional[StrictStr] = None
    tech_stack: Optional[List[StrictStr]] = Field(default_factory=list)
    display_order: Optional[StrictInt] = 0


class ProjectUpdate(EntityModel):
    title: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    image_url: Optional[StrictStr] = None
    project_url: Optional[StrictStr] = None
    repo_url: Optional[StrictStr] = None
    tech_stack: Optional[List[StrictStr]] = None
    display_order: Optional[StrictInt] = None

    @field_validator("title", "description")
    @classmethod
    def required_fields_not_null(cls, value):
        return _reject_null(value)


class ProjectPublic(ProjectCreate):
    id: StrictInt


# ---------------------------------------------------------------------------
# Social
# ---------------------------------------------------------------------------

class SocialCreate(EntityModel):
    platform: NonEmptyStr
    url: NonEmptyStr
    icon: Optional[StrictStr] = None
    active: Optional[StrictBool] = True


class SocialUpdate(EntityModel):
    platform: Optional[NonEmptyStr] = None
    url: Optional[NonEmptyStr] = None
    icon: Optional[StrictStr] = None
    active: Optional[StrictBool] = None

    @field_validator("platform", "url")
    @classmethod
    def required_fields_not_null(cls, value):
        return _reject_null(value)


class SocialPublic(SocialCreate):
    id: StrictInt


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class LoginRequest(EntityModel):
    username: NonEmptyStr
    password: NonEmptyStr


class UserPublic(EntityModel):
    """User as seen by clients; the password hash has no field here"""
    id: StrictInt
    username: StrictStr
