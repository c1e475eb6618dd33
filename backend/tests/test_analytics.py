"""
Tests for visit counting, dashboard analytics and the public page payload
"""
from datetime import datetime, timedelta, timezone

import pytest

from portfolio.models import Project, SiteVisit, Skill
from portfolio.services.analytics_service import (AnalyticsService,
                                                  calculate_growth)
from portfolio.utils.datetime_utils import start_of_month

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
LAST_MONTH = datetime(2026, 9, 20, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("current,previous,growth", [
    (0, 0, 0),
    (3, 0, 100),
    (4, 2, 100),
    (2, 4, -50),
    (3, 3, 0),
    (2, 3, -33),
    (5, 3, 67),
    (7, 8, -12),
])
def test_calculate_growth(current, previous, growth):
    assert calculate_growth(current, previous) == growth


def test_start_of_month():
    assert start_of_month(NOW) == datetime(2026, 10, 1, tzinfo=timezone.utc)
    assert start_of_month(datetime(2026, 1, 31, 23, 59)) == datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_summary_counts(db):
    db.add_all([
        Skill(name="Go", category="backend", created_at=LAST_MONTH),
        Skill(name="Rust", category="backend", created_at=NOW),
        Project(title="Old", description="D", created_at=LAST_MONTH),
        SiteVisit(visited_at=LAST_MONTH),
        SiteVisit(visited_at=LAST_MONTH),
        SiteVisit(visited_at=NOW),
    ])
    db.commit()

    summary = AnalyticsService(db).summary(now=NOW)

    assert summary["skills"] == {"current": 2, "last_month": 1, "growth": 100}
    assert summary["projects"] == {"current": 1, "last_month": 1, "growth": 0}
    assert summary["visits"] == {"current": 3, "last_month": 2, "growth": 50}


def test_record_visit_endpoint_is_public(client):
    r = client.post("/api/visits")
    assert r.status_code == 201
    body = r.json()
    assert isinstance(body["id"], int)
    assert "visitedAt" in body


def test_analytics_requires_session(client):
    assert client.get("/api/analytics").status_code == 401


def test_analytics_endpoint(auth_client, skill_payload):
    auth_client.post("/api/skills", json=skill_payload)
    auth_client.post("/api/visits")

    r = auth_client.get("/api/analytics")
    assert r.status_code == 200
    body = r.json()
    assert body["skills"]["current"] == 1
    assert body["visits"] == {"current": 1, "lastMonth": 0, "growth": 100}
    assert body["projects"] == {"current": 0, "lastMonth": 0, "growth": 0}


def test_portfolio_page_when_empty(client):
    r = client.get("/api/portfolio")
    assert r.status_code == 200
    assert r.json() == {"profile": None, "skillsByCategory": {}, "projects": [], "socials": []}


def test_portfolio_page(auth_client, profile_payload, project_payload):
    auth_client.put("/api/profile", json=profile_payload)
    for name, category in [("Python", "backend"), ("React", "frontend"), ("SQL", "backend")]:
        auth_client.post("/api/skills", json={"name": name, "category": category})
    auth_client.post("/api/projects", json={**project_payload, "title": "Second", "displayOrder": 2})
    auth_client.post("/api/projects", json={**project_payload, "title": "First", "displayOrder": 1})
    auth_client.post("/api/socials", json={"platform": "GitHub", "url": "https://github.com/x"})
    auth_client.post("/api/socials", json={"platform": "email", "url": "mailto:x@example.com", "active": False})
    auth_client.post("/api/socials", json={"platform": "Mastodon", "url": "https://example.social/@x"})

    body = auth_client.get("/api/portfolio").json()

    assert body["profile"]["name"] == profile_payload["name"]
    assert {k: [s["name"] for s in v] for k, v in body["skillsByCategory"].items()} == {
        "backend": ["Python", "SQL"],
        "frontend": ["React"],
    }
    assert [p["title"] for p in body["projects"]] == ["First", "Second"]
    assert [(s["platform"], s["glyph"]) for s in body["socials"]] == [
        ("GitHub", "github"),
        ("Mastodon", "external-link"),
    ]


def test_row_just_before_month_start_counts_as_last_month(db):
    db.add(Skill(name="Go", category="backend", created_at=start_of_month(NOW) - timedelta(seconds=1)))
    db.commit()
    assert AnalyticsService(db).summary(now=NOW)["skills"]["last_month"] == 1
