"""
Pytest configuration and fixtures
"""
import os
import shutil
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy.orm import Session

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Settings are read once and cached, so the environment is fixed before any
# portfolio module is imported: a throwaway SQLite file, no startup seeding.
_tmp_dir = tempfile.mkdtemp(prefix="portfolio-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_tmp_dir) / 'test.db'}"
os.environ["SEED_ADMIN_ON_STARTUP"] = "false"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from portfolio.core.database import (Base, dispose_engine, get_engine,  # noqa: E402
                                     get_session_local)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="session", autouse=True)
def _temp_database_dir():
    """Release the SQLite file and remove its directory after the run"""
    yield
    dispose_engine()
    shutil.rmtree(_tmp_dir, ignore_errors=True)


@pytest.fixture(scope="function")
def db() -> Session:
    """Database session on a freshly created schema"""
    import portfolio.models  # noqa: F401  registers models with Base.metadata

    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = get_session_local()()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def app():
    from portfolio.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app, db: Session):
    """Create test client with database dependency override"""
    from fastapi.testclient import TestClient

    from portfolio.core.database import get_db

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)


@pytest.fixture
def admin(db: Session):
    """Registered admin user"""
    from portfolio.services.auth_service import AuthService

    return AuthService(db).register_user(ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def auth_client(client, admin):
    """Test client holding a valid session cookie"""
    response = client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture
def skill_payload():
    return {"name": "Python", "category": "backend", "proficiency": 90, "icon": "code"}


@pytest.fixture
def project_payload():
    return {
        "title": "Portfolio",
        "description": "This site",
        "imageUrl": "https://example.com/shot.png",
        "projectUrl": "https://example.com",
        "repoUrl": "https://github.com/example/portfolio",
        "techStack": ["Python", "FastAPI"],
        "displayOrder": 1,
    }


@pytest.fixture
def social_payload():
    return {"platform": "github", "url": "https://github.com/example", "icon": None, "active": True}


@pytest.fixture
def profile_payload():
    return {
        "name": "Ada Example",
        "bio": "Builds things",
        "tagline": "Engineer",
        "avatarUrl": "https://example.com/me.png",
        "resumeUrl": None,
    }
