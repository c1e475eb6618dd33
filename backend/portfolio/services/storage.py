"""
Storage service: CRUD over the portfolio content tables
"""
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from portfolio.components.entities import (ProfileCreate, ProjectCreate,
                                           ProjectUpdate, SkillCreate,
                                           SkillUpdate, SocialCreate,
                                           SocialUpdate)
from portfolio.core.exceptions import InternalError, NotFound
from portfolio.core.logging_config import LoggingConfig
from portfolio.core.metrics import content_mutations_total
from portfolio.models import (PROFILE_SINGLETON_KEY, Base, Profile, Project,
                              SiteVisit, Skill, Social)
from portfolio.utils.datetime_utils import utc_now

logger = LoggingConfig.get_logger(__name__)


class StorageService:
    """Durable CRUD for profile, skills, projects and socials.

    Reads return ORM rows (or None). ``update_*`` raises NotFound for a
    missing id; ``delete_*`` treats a missing id as already deleted.
    Database failures are rolled back and surface as InternalError.
    """

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self) -> Optional[Profile]:
        return self.db.query(Profile).filter(
            Profile.singleton_key == PROFILE_SINGLETON_KEY
        ).first()

    def update_profile(self, data: ProfileCreate) -> Profile:
        """Create the profile row if absent, otherwise overwrite it.

        Two writers racing on an empty table both attempt the insert; the
        unique singleton key lets exactly one succeed and the loser applies
        its values as an update to the winner's row.
        """
        values = data.model_dump()
        try:
            profile = self.get_profile()
            if profile is None:
                profile = self._insert_profile(values)
                if profile is not None:
                    self._count("profile", "create")
                    return profile
                profile = self.get_profile()
                if profile is None:
                    raise InternalError()

            for key, value in values.items():
                setattr(profile, key, value)
            self.db.commit()
            self.db.refresh(profile)
            self._count("profile", "update")
            logger.info("Updated profile", extra={"profile_id": profile.id})
            return profile
        except SQLAlchemyError as e:
            self._fail("update profile", e)

    def _insert_profile(self, values: Dict[str, Any]) -> Optional[Profile]:
        """Insert the singleton row; None when another writer got there first"""
        profile = Profile(singleton_key=PROFILE_SINGLETON_KEY, **values)
        self.db.add(profile)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info("Profile created concurrently, applying as update")
            return None
        self.db.refresh(profile)
        logger.info("Created profile", extra={"profile_id": profile.id})
        return profile

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    def get_skills(self) -> List[Skill]:
        return self._list(Skill, Skill.id.asc())

    def get_skill(self, skill_id: int) -> Optional[Skill]:
        return self.db.get(Skill, skill_id)

    def create_skill(self, data: SkillCreate) -> Skill:
        return self._create(Skill, data)

    def update_skill(self, skill_id: int, data: SkillUpdate) -> Skill:
        return self._update(Skill, skill_id, data)

    def delete_skill(self, skill_id: int) -> None:
        self._delete(Skill, skill_id)

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def get_projects(self) -> List[Project]:
        return self._list(Project, func.coalesce(Project.display_order, 0).asc(), Project.id.asc())

    def get_project(self, project_id: int) -> Optional[Project]:
        return self.db.get(Project, project_id)

    def create_project(self, data: ProjectCreate) -> Project:
        return self._create(Project, data)

    def update_project(self, project_id: int, data: ProjectUpdate) -> Project:
        return self._update(Project, project_id, data)

    def delete_project(self, project_id: int) -> None:
        self._delete(Project, project_id)

    # ------------------------------------------------------------------
    # Socials
    # ------------------------------------------------------------------

    def get_socials(self, active_only: bool = False) -> List[Social]:
        if active_only:
            return self.db.query(Social).filter(
                or_(Social.active.is_(True), Social.active.is_(None))
            ).order_by(Social.id.asc()).all()
        return self._list(Social, Social.id.asc())

    def get_social(self, social_id: int) -> Optional[Social]:
        return self.db.get(Social, social_id)

    def create_social(self, data: SocialCreate) -> Social:
        return self._create(Social, data)

    def update_social(self, social_id: int, data: SocialUpdate) -> Social:
        return self._update(Social, social_id, data)

    def delete_social(self, social_id: int) -> None:
        self._delete(Social, social_id)

    # ------------------------------------------------------------------
    # Counting (analytics)
    # ------------------------------------------------------------------

    def count_rows(self, model: Type[Base], created_before=None) -> int:
        """Row count, optionally limited to rows created before a moment"""
        column = model.visited_at if model is SiteVisit else model.created_at
        query = self.db.query(func.count(model.id))
        if created_before is not None:
            query = query.filter(column < created_before)
        return query.scalar() or 0

    def record_visit(self) -> SiteVisit:
        visit = SiteVisit(visited_at=utc_now())
        try:
            self.db.add(visit)
            self.db.commit()
            self.db.refresh(visit)
            return visit
        except SQLAlchemyError as e:
            self._fail("record visit", e)

    # ------------------------------------------------------------------
    # Generic helpers
    # ------------------------------------------------------------------

    def _list(self, model: Type[Base], *order_by) -> List[Any]:
        return self.db.query(model).order_by(*order_by).all()

    def _create(self, model: Type[Base], data: BaseModel) -> Any:
        row = model(**data.model_dump())
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._fail(f"create {model.__tablename__}", e)
        self._count(model.__tablename__, "create")
        logger.info(f"Created {model.__tablename__} row", extra={"row_id": row.id})
        return row

    def _update(self, model: Type[Base], row_id: int, data: BaseModel) -> Any:
        row = self.db.get(model, row_id)
        if row is None:
            raise NotFound(f"{model.__name__} {row_id} not found")

        changes = data.model_dump(exclude_unset=True)
        try:
            for key, value in changes.items():
                setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            self._fail(f"update {model.__tablename__}", e)
        self._count(model.__tablename__, "update")
        logger.info(
            f"Updated {model.__tablename__} row",
            extra={"row_id": row_id, "fields": sorted(changes)}
        )
        return row

    def _delete(self, model: Type[Base], row_id: int) -> None:
        row = self.db.get(model, row_id)
        if row is None:
            return
        try:
            # Session-level delete so the identity map forgets the row
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self._fail(f"delete {model.__tablename__}", e)
        self._count(model.__tablename__, "delete")
        logger.info(f"Deleted {model.__tablename__} row", extra={"row_id": row_id})

    def _count(self, entity: str, action: str):
        content_mutations_total.labels(entity=entity, action=action).inc()

    def _fail(self, action: str, error: Exception):
        self.db.rollback()
        logger.error(f"Failed to {action}: {error}", exc_info=True)
        raise InternalError() from error
