import pytest
from fastapi.testclient import TestClient

import blog_api.main as main_module
from blog_api import dependencies as deps
from blog_api.main import app
from blog_api.security import WEBHOOK_SECRET_HEADER, get_settings
from blog_api.settings import Settings
from tests.conftest import make_post

ADMIN_HEADERS = {"Authorization": "Bearer secret"}


@pytest.fixture
def client(monkeypatch, service):
    init_calls = []
    monkeypatch.setattr(main_module, "init_db", lambda: init_calls.append(True))

    original_overrides = dict(app.dependency_overrides)
    app.dependency_overrides[deps.get_posts_service] = lambda: service
    app.dependency_overrides[get_settings] = lambda: Settings(
        ADMIN_BEARER_TOKEN="secret", N8N_WEBHOOK_SECRET="hook"
    )
    try:
        with TestClient(app) as test_client:
            test_client.init_calls = init_calls
            yield test_client
    finally:
        app.dependency_overrides = original_overrides


def test_root_endpoint_runs_lifespan(client):
    res = client.get("/")

    assert res.status_code == 200
    assert res.json()["message"] == "Blog API is running"
    assert res.json()["endpoints"]["public"]["rss"] == "/api/rss"
    assert client.init_calls == [True]


def test_admin_routes_require_bearer_token(client):
    assert client.get("/api/admin/posts").status_code == 401

    res = client.get("/api/admin/posts", headers=ADMIN_HEADERS)
    assert res.status_code == 200
    assert res.json()["total"] == 0


def test_webhook_requires_secret(client):
    payload = {"title": "Hooked", "contentHtml": "<p>x</p>"}

    assert client.post("/api/webhook/n8n", json=payload).status_code == 401

    res = client.post(
        "/api/webhook/n8n", json=payload, headers={WEBHOOK_SECRET_HEADER: "hook"}
    )
    assert res.status_code == 200
    assert res.json()["slug"] == "hooked"


def test_public_routes_are_open(client, service):
    make_post(service, "Open")

    assert client.get("/api/posts").json()["total"] == 1
    assert client.get("/api/posts/open").status_code == 200
    assert client.get("/api/rss").status_code == 200
    assert client.get("/api/health").json()["ok"] is True


def test_request_validation_errors_return_400(client):
    bad_url = client.post(
        "/api/admin/posts",
        json={"title": "Bad", "contentHtml": "<p>x</p>", "imageUrl": "not a url"},
        headers=ADMIN_HEADERS,
    )
    missing_title = client.post(
        "/api/webhook/n8n",
        json={"contentHtml": "<p>x</p>"},
        headers={WEBHOOK_SECRET_HEADER: "hook"},
    )
    bad_page = client.get("/api/posts", params={"page": 0})
    bad_date = client.post(
        "/api/admin/posts",
        json={"title": "Bad", "contentHtml": "<p>x</p>", "publishedAt": "yesterday"},
        headers=ADMIN_HEADERS,
    )

    for res in (bad_url, missing_title, bad_page, bad_date):
        assert res.status_code == 400
        assert res.json()["error"] == "Validation error"


def test_cors_allows_local_frontend(client):
    res = client.get("/api/health", headers={"Origin": "http://localhost:4321"})

    assert res.headers["access-control-allow-origin"] == "http://localhost:4321"
