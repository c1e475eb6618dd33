"""
API tests for profile, skills, projects and socials
"""
import pytest
from fastapi.testclient import TestClient

from portfolio.api.deps import get_storage
from portfolio.components.contracts import api
from portfolio.services.auth_service import AuthService

RESOURCES = ["skills", "projects", "socials"]


@pytest.fixture
def payloads(skill_payload, project_payload, social_payload):
    return {"skills": skill_payload, "projects": project_payload, "socials": social_payload}


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("resource", RESOURCES)
def test_create_get_round_trip(auth_client, payloads, resource):
    payload = payloads[resource]
    r = auth_client.post(f"/api/{resource}", json=payload)
    assert r.status_code == 201
    created = r.json()
    assert isinstance(created["id"], int)
    assert {k: created[k] for k in payload} == payload

    r2 = auth_client.get(f"/api/{resource}/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == created

    r3 = auth_client.get(f"/api/{resource}")
    assert r3.status_code == 200
    assert r3.json() == [created]


@pytest.mark.parametrize("resource", RESOURCES)
def test_delete_then_get_is_404(auth_client, payloads, resource):
    created = auth_client.post(f"/api/{resource}", json=payloads[resource]).json()

    r = auth_client.delete(f"/api/{resource}/{created['id']}")
    assert r.status_code == 204
    assert r.content == b""

    assert auth_client.get(f"/api/{resource}/{created['id']}").status_code == 404


@pytest.mark.parametrize("resource", RESOURCES)
def test_delete_missing_is_404(auth_client, resource):
    r = auth_client.delete(f"/api/{resource}/4242")
    assert r.status_code == 404
    assert "not found" in r.json()["message"]


@pytest.mark.parametrize("resource", RESOURCES)
def test_update_missing_is_404(auth_client, resource):
    r = auth_client.put(f"/api/{resource}/4242", json={})
    assert r.status_code == 404


@pytest.mark.parametrize("resource", RESOURCES)
def test_non_integer_id_is_400(client, resource):
    r = client.get(f"/api/{resource}/abc")
    assert r.status_code == 400
    assert r.json()["field"] == "id"


@pytest.mark.parametrize("resource", RESOURCES)
def test_id_beyond_64_bits_is_400(auth_client, resource):
    huge = "99999999999999999999"
    for r in (
        auth_client.get(f"/api/{resource}/{huge}"),
        auth_client.put(f"/api/{resource}/{huge}", json={}),
        auth_client.delete(f"/api/{resource}/{huge}"),
    ):
        assert r.status_code == 400
        assert r.json()["field"] == "id"


def test_id_zero_is_400(client):
    r = client.get("/api/skills/0")
    assert r.status_code == 400
    assert r.json()["field"] == "id"


def test_partial_project_update(auth_client, project_payload):
    created = auth_client.post("/api/projects", json=project_payload).json()

    r = auth_client.put(f"/api/projects/{created['id']}", json={"techStack": ["Go"]})
    assert r.status_code == 200
    updated = r.json()

    assert updated["techStack"] == ["Go"]
    for key in ("title", "description", "imageUrl", "projectUrl", "repoUrl", "displayOrder"):
        assert updated[key] == created[key]


def test_projects_listed_by_display_order(auth_client, project_payload):
    for title, order in [("late", 5), ("early", 0), ("middle", 2)]:
        auth_client.post("/api/projects", json={**project_payload, "title": title, "displayOrder": order})

    titles = [p["title"] for p in auth_client.get("/api/projects").json()]
    assert titles == ["early", "middle", "late"]


def test_skill_defaults_applied(auth_client):
    r = auth_client.post("/api/skills", json={"name": "Teamwork", "category": "soft"})
    assert r.status_code == 201
    assert r.json()["proficiency"] == 100


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_missing_required_field_is_400_with_field(auth_client):
    r = auth_client.post("/api/skills", json={"category": "backend"})
    assert r.status_code == 400
    body = r.json()
    assert body["field"] == "name"
    assert body["message"]


def test_wrong_type_is_400(auth_client, project_payload):
    r = auth_client.post("/api/projects", json={**project_payload, "techStack": "Go"})
    assert r.status_code == 400
    assert r.json()["field"] == "techStack"


def test_non_integer_proficiency_is_400(auth_client):
    r = auth_client.post("/api/skills", json={"name": "Go", "category": "backend", "proficiency": "high"})
    assert r.status_code == 400
    assert r.json()["field"] == "proficiency"


def test_update_rejects_null_required_field(auth_client, social_payload):
    created = auth_client.post("/api/socials", json=social_payload).json()
    r = auth_client.put(f"/api/socials/{created['id']}", json={"url": None})
    assert r.status_code == 400
    assert r.json()["field"] == "url"


# ---------------------------------------------------------------------------
# Auth guard
# ---------------------------------------------------------------------------

class CountingStorage:
    """Storage stand-in that records every attribute access"""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        self.calls.append(name)
        raise AssertionError(f"storage.{name} must not be reached")


MUTATIONS = [
    ("post", "/api/skills"),
    ("put", "/api/skills/1"),
    ("delete", "/api/skills/1"),
    ("post", "/api/projects"),
    ("put", "/api/projects/1"),
    ("delete", "/api/projects/1"),
    ("post", "/api/socials"),
    ("put", "/api/socials/1"),
    ("delete", "/api/socials/1"),
    ("put", "/api/profile"),
]


@pytest.mark.parametrize("method,path", MUTATIONS)
def test_mutation_without_session_is_401_and_skips_storage(app, client, method, path, skill_payload):
    created = []

    def counting_storage():
        storage = CountingStorage()
        created.append(storage)
        return storage

    app.dependency_overrides[get_storage] = counting_storage

    kwargs = {"json": skill_payload} if method in ("post", "put") else {}
    r = getattr(client, method)(path, **kwargs)

    assert r.status_code == 401
    assert r.json() == {"message": "Authentication required"}
    assert created == []


def test_mutation_with_invalid_token_is_401(client, skill_payload):
    client.cookies.set("session_token", "forged")
    r = client.post("/api/skills", json=skill_payload)
    assert r.status_code == 401


def test_bearer_token_is_accepted(client, db, admin, skill_payload):
    token = AuthService(db).create_session(admin.id).token

    r = client.post("/api/skills", json=skill_payload, headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 201


def test_public_reads_need_no_session(client):
    assert client.get("/api/skills").status_code == 200
    assert client.get("/api/projects").status_code == 200
    assert client.get("/api/socials").status_code == 200


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

def test_profile_absent_is_404(client):
    r = client.get("/api/profile")
    assert r.status_code == 404
    assert r.json()["message"] == "Profile not found"


def test_profile_upsert(auth_client, profile_payload):
    r = auth_client.put("/api/profile", json=profile_payload)
    assert r.status_code == 200
    first = r.json()
    assert {k: first[k] for k in profile_payload} == profile_payload

    r2 = auth_client.put("/api/profile", json={**profile_payload, "tagline": "Engineer & writer"})
    assert r2.status_code == 200
    assert r2.json()["id"] == first["id"]
    assert auth_client.get("/api/profile").json()["tagline"] == "Engineer & writer"


def test_profile_update_requires_full_shape(auth_client):
    r = auth_client.put("/api/profile", json={"name": "Only a name"})
    assert r.status_code == 400
    assert r.json()["field"] in {"bio", "tagline"}


# ---------------------------------------------------------------------------
# Errors and plumbing
# ---------------------------------------------------------------------------

def test_unexpected_error_is_generic_500(app, client):
    class BrokenStorage:
        def get_skills(self):
            raise RuntimeError("connection string postgres://secret@db")

    app.dependency_overrides[get_storage] = lambda: BrokenStorage()
    no_raise = TestClient(app, raise_server_exceptions=False)

    r = no_raise.get("/api/skills")
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}
    assert "secret" not in r.text


def test_unparseable_body_is_400_error_body(auth_client):
    r = auth_client.post(
        "/api/skills",
        content=b"\xff\xfe{",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    body = api.skills.create.parse_response(400, r.json())
    assert body.message
    assert body.field is None


def test_unknown_route_is_404_error_body(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json() == {"message": "Not Found"}


def test_wrong_method_is_405_error_body(client):
    r = client.patch("/api/skills")
    assert r.status_code == 405
    assert r.json() == {"message": "Method Not Allowed"}
    assert "GET" in r.headers["allow"]


def test_responses_match_contract(auth_client, payloads):
    for resource in RESOURCES:
        routes = getattr(api, resource)
        r = auth_client.post(routes.create.url(), json=payloads[resource])
        created = routes.create.parse_response(r.status_code, r.json())
        listed = routes.list.parse_response(200, auth_client.get(routes.list.url()).json())
        assert listed == [created]


def test_request_id_header(client):
    r = client.get("/api/skills", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["components"]["database"] == "healthy"


def test_metrics_endpoint(client):
    client.get("/api/skills")
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "http_requests_total" in r.text
