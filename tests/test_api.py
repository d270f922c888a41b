"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from skillrouter.api.main import create_app
from skillrouter.remote.guidelines import GuidelineFetcher

from tests.conftest import make_project


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


def test_health(client):
    for path in ("/health", "/api/health"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["skills"] == 9


def test_list_skills(client):
    resp = client.get("/api/skills", params={"project_type": "vue"})

    assert resp.status_code == 200
    names = [s["name"] for s in resp.json()]
    assert "vue-composition" in names
    assert "angular-standards" not in names


def test_list_skills_bad_type(client):
    assert client.get("/api/skills", params={"project_type": "svelte"}).status_code == 422


def test_get_skill(client):
    resp = client.get("/api/skills/react-query")

    assert resp.status_code == 200
    body = resp.json()
    assert body["project_types"] == ["react", "nextjs"]
    assert body["prompt_text"].startswith("# React Query")


def test_get_unknown_skill(client):
    resp = client.get("/api/skills/nope")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Unknown skill: nope"


def test_detect(client, tmp_path):
    make_project(tmp_path, {"angular.json": "{}"})

    resp = client.post("/api/detect", json={"root": str(tmp_path)})

    assert resp.status_code == 200
    assert resp.json()["project_types"] == ["angular"]


def test_detect_missing_root(client, tmp_path):
    resp = client.post("/api/detect", json={"root": str(tmp_path / "missing")})
    assert resp.status_code == 404


def test_route_with_root(client, tmp_path):
    make_project(tmp_path, {"layout/theme.liquid": ""})

    resp = client.post("/api/route", json={"query": "add a cart drawer", "root": str(tmp_path)})

    assert resp.status_code == 200
    body = resp.json()
    assert body["result"]["project_types"] == ["shopify-liquid"]
    assert [m["name"] for m in body["result"]["selected"]] == ["shopify-liquid"]
    assert "### shopify-liquid" in body["context"]


def test_route_fetches_guidelines(client, monkeypatch):
    async def fake_fetch(self, url):
        return "Live rule: labels everywhere."

    monkeypatch.setattr(GuidelineFetcher, "_do_fetch", fake_fetch)

    resp = client.post(
        "/api/route",
        json={"query": "review my ui", "project_types": ["html"], "fetch_guidelines": True},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert "web-design-guidelines" in [m["name"] for m in body["result"]["selected"]]
    assert "Live rule: labels everywhere." in body["context"]


@pytest.mark.parametrize("limit", [0, -1])
def test_route_rejects_non_positive_max_skills(client, limit):
    resp = client.post("/api/route", json={"query": "button", "max_skills": limit})
    assert resp.status_code == 422


def test_route_max_skills(client):
    resp = client.post(
        "/api/route",
        json={"query": "add a zod schema to the signup form", "project_types": ["react"], "max_skills": 1},
    )

    assert resp.status_code == 200
    assert [m["name"] for m in resp.json()["result"]["selected"]] == ["zod-validation"]


def test_deps_require_init():
    from skillrouter.api import deps

    with pytest.raises(RuntimeError):
        deps.get_router()
    with pytest.raises(RuntimeError):
        deps.get_fetcher()
