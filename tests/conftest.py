import os
import sqlite3
import tempfile
from pathlib import Path

import pytest

# окружение задаётся до импорта pizzahub: settings и engine создаются при импорте
DB_PATH = Path(tempfile.mkdtemp(prefix="pizzahub-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_MENU"] = "true"
os.environ["JWT_SECRET"] = "test-secret"

from fastapi.testclient import TestClient  # noqa: E402

from pizzahub.config import settings  # noqa: E402
from pizzahub.main import app  # noqa: E402


@pytest.fixture
def client():
    # чистая база на каждый тест, lifespan создаёт таблицы и seed
    if DB_PATH.exists():
        DB_PATH.unlink()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_conn(client):
    conn = sqlite3.connect(DB_PATH)
    yield conn
    conn.close()


def register(client, email="user@example.com", name="Aru", phone="+77010000000", password="secret1"):
    response = client.post(
        "/api/register",
        json={"name": name, "email": email, "phone": phone, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    return register(client)


@pytest.fixture
def admin_token(client):
    response = client.post(
        "/api/login",
        json={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]
