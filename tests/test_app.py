"""
Application wiring: configuration, startup checks and error translation.
"""

import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.errors import ConfigurationError
from main import create_app


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.text == "E-Commerce API is running"


def test_unknown_route_has_message(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert "message" in res.json()


def test_missing_signing_key_fails_at_startup(settings):
    with pytest.raises(ConfigurationError):
        create_app(settings.model_copy(update={"jwt_secret_key": None}))


def test_seeded_app_accepts_admin_login(settings):
    app = create_app(settings.model_copy(update={"seed_sample_data": True}))
    with TestClient(app) as client:
        res = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "password123"})
        assert res.status_code == 200

        headers = {"Authorization": f"Bearer {res.json()['token']}"}
        assert len(client.get("/api/categories", headers=headers).json()) == 6
    app.state.engine.dispose()


def test_unexpected_error_becomes_500(app, auth_headers, monkeypatch):
    from core.categories import CategoryManager

    def boom(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(CategoryManager, "list", boom)
    with TestClient(app, raise_server_exceptions=False) as client:
        res = client.get("/api/categories", headers=auth_headers)
    assert res.status_code == 500
    assert res.json() == {"message": "Server error"}


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("JWT_SECRET_KEY", "from-env")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("SEED_SAMPLE_DATA", "yes")
    monkeypatch.delenv("MAX_UPLOAD_BYTES", raising=False)

    settings = Settings()
    assert settings.jwt_secret_key == "from-env"
    assert settings.access_token_expire_minutes == 15
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.seed_sample_data is True
    assert settings.max_upload_bytes == 5 * 1024 * 1024
