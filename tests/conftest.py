import os
import tempfile

# main.py builds a module-level app from the environment on import
_scratch = tempfile.mkdtemp(prefix="shop-api-")
os.environ.setdefault("JWT_SECRET_KEY", "import-time-secret")
os.environ["DATABASE_URL"] = f"sqlite:///{_scratch}/import.db"
os.environ["UPLOAD_DIR"] = os.path.join(_scratch, "uploads")
os.environ["SEED_SAMPLE_DATA"] = "false"

import secrets

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


# PNG signature followed by filler; the store only checks type and size
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def settings(tmp_path):
    return Settings(
        jwt_secret_key=secrets.token_hex(16),
        database_url=f"sqlite:///{tmp_path}/test.db",
        upload_dir=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(settings):
    application = create_app(settings)
    yield application
    application.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_payload():
    return {"username": "alice", "email": "alice@example.com", "password": "s3cret-pass"}


@pytest.fixture
def auth_headers(client, user_payload):
    client.post("/api/auth/register", json=user_payload)
    res = client.post(
        "/api/auth/login",
        json={"email": user_payload["email"], "password": user_payload["password"]},
    )
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def db(app):
    session = app.state.SessionLocal()
    yield session
    session.close()


@pytest.fixture
def png_bytes():
    return PNG_BYTES
