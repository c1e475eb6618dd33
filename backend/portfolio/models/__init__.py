"""
SQLAlchemy models
"""
# Import all models here so Alembic and create_all can detect them
from portfolio.core.database import Base  # noqa: F401
from portfolio.models.profile import PROFILE_SINGLETON_KEY, Profile  # noqa: F401
from portfolio.models.project import Project  # noqa: F401
from portfolio.models.site_visit import SiteVisit  # noqa: F401
from portfolio.models.skill import Skill  # noqa: F401
from portfolio.models.social import Social  # noqa: F401
from portfolio.models.user import Session, User  # noqa: F401
