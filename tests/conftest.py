"""
Pytest configuration.

The application reads its settings at import time, so the test database is
configured through the environment before anything from the project is
imported. Every test gets freshly created tables.
"""

import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="onlinekonto-tests-")
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from components.core.init_db import db_manager
from main import app

ADMIN = ("admin@onlinekonto.de", "admin123")
CUSTOMER = ("user@onlinekonto.de", "user123")
PENDING = ("thomas@onlinekonto.de", "demo123")


async def _reset_database():
    await db_manager.drop_tables()
    await db_manager.create_tables()


def _login(client: TestClient, email: str, password: str) -> dict:
    response = client.post("/auth/login", data={"username": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def user_id_by_email(client: TestClient, admin_headers: dict, email: str) -> str:
    users = client.get("/users/", headers=admin_headers).json()
    return next(user["id"] for user in users if user["email"] == email)


@pytest.fixture
def client():
    """Test client on empty tables."""
    asyncio.run(_reset_database())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client):
    """Test client on the demo data set."""
    response = client.post("/setup")
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def login(seeded_client):
    """Log in and return the authorization header."""
    def _do_login(email: str, password: str) -> dict:
        return _login(seeded_client, email, password)
    return _do_login


@pytest.fixture
def admin_headers(seeded_client):
    return _login(seeded_client, *ADMIN)


@pytest.fixture
def customer_headers(seeded_client):
    return _login(seeded_client, *CUSTOMER)


@pytest.fixture
def pending_headers(seeded_client):
    return _login(seeded_client, *PENDING)


@pytest.fixture
def customer_id(seeded_client, admin_headers):
    return user_id_by_email(seeded_client, admin_headers, CUSTOMER[0])


@pytest.fixture
def pending_id(seeded_client, admin_headers):
    return user_id_by_email(seeded_client, admin_headers, PENDING[0])


@pytest.fixture
def admin_id(seeded_client, admin_headers):
    return user_id_by_email(seeded_client, admin_headers, ADMIN[0])
