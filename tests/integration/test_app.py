"""
Application wiring: the app imports with every router mounted, and CORS
answers the dashboard origins only.
"""

import importlib

import pytest
from fastapi.testclient import TestClient

from app.config import settings

ALLOWED_ORIGIN = "http://localhost:5173"


@pytest.fixture
def client():
    from app.main import app

    return TestClient(app)


def test_app_imports_with_all_routers():
    main = importlib.import_module("app.main")
    paths = {route.path for route in main.app.routes}

    assert ALLOWED_ORIGIN in settings.CORS_ORIGINS
    for path in (
        "/healthz",
        "/readyz",
        "/api/v1/auth/login",
        "/api/v1/posts/scheduled/calendar",
        "/api/v1/posts/{post_id}/retry",
        "/api/v1/recruiters/search/linkedin-urls",
        "/api/v1/opportunities/{opportunity_id}/stage",
        "/api/v1/linkedin/callback",
    ):
        assert path in paths


def test_preflight_from_allowed_origin(client):
    response = client.options(
        "/api/v1/posts",
        headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 204
    assert response.headers["Access-Control-Allow-Origin"] == ALLOWED_ORIGIN
    assert response.headers["Access-Control-Allow-Credentials"] == "true"
    assert "PATCH" not in response.headers["Access-Control-Allow-Methods"]
    assert "Authorization" in response.headers["Access-Control-Allow-Headers"]


def test_preflight_from_unknown_origin_forbidden(client):
    response = client.options(
        "/api/v1/posts",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 403
    assert response.json() == {"error": "ForbiddenError", "message": "Origin not allowed"}


def test_options_without_origin_reaches_router(client):
    response = client.options("/healthz")

    assert response.status_code == 405


def test_simple_request_gets_cors_headers(client):
    allowed = client.get("/healthz", headers={"Origin": ALLOWED_ORIGIN})
    assert allowed.headers["Access-Control-Allow-Origin"] == ALLOWED_ORIGIN
    assert allowed.headers["Access-Control-Expose-Headers"] == "X-Request-ID"

    other = client.get("/healthz", headers={"Origin": "https://evil.example"})
    assert other.status_code == 200
    assert "Access-Control-Allow-Origin" not in other.headers
