# tests/test_api_smoke.py
from fastapi.testclient import TestClient

from user_directory import __version__
from user_directory.adapters.api.main import create_app
from user_directory.bootstrap import build_components

API_PREFIX = "/api/v1"


def test_root_banner(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "User Directory API", "version": __version__}


def test_health_live(client):
    resp = client.get("/health/live")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_health_ready(client):
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"storage": "up"}


def test_health_ready_reports_storage_down(app, mock_repo):
    mock_repo.health_check.return_value = False
    app.state.user_repository = mock_repo

    with TestClient(app) as client:
        resp = client.get("/health/ready")

    assert resp.status_code == 503
    assert resp.json() == {"storage": "down"}


def test_openapi_lists_user_routes(client):
    resp = client.get("/openapi.json")
    assert resp.status_code == 200

    paths = resp.json()["paths"]
    assert f"{API_PREFIX}/users" in paths
    assert f"{API_PREFIX}/users/{{user_id}}" in paths
    assert set(paths[f"{API_PREFIX}/users/{{user_id}}"]) == {"get", "patch", "delete"}


def test_docs_pages(client):
    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200


def test_docs_can_be_disabled(settings):
    settings = settings.model_copy(update={"DOCS_ENABLED": False})
    components = build_components(settings)
    try:
        client = TestClient(create_app(settings, components=components))
        assert client.get("/openapi.json").status_code == 404
        assert client.get("/docs").status_code == 404
        assert client.get(f"{API_PREFIX}/users").status_code == 200
    finally:
        components.dispose()


def test_custom_prefix(settings):
    settings = settings.model_copy(update={"API_PREFIX": "v2/"})
    components = build_components(settings)
    try:
        client = TestClient(create_app(settings, components=components))
        assert client.get("/v2/users").json()["total"] == 0
    finally:
        components.dispose()
