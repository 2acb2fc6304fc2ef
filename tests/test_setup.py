import asyncio

from fastapi.testclient import TestClient

from components.core.init_db import db_manager
from main import app


def test_startup_creates_missing_tables():
    asyncio.run(db_manager.drop_tables())
    with TestClient(app) as fresh_client:
        response = fresh_client.post("/auth/login", data={"username": "admin@onlinekonto.de", "password": "admin123"})
        # unknown user, not a missing table
        assert response.status_code == 401
        assert fresh_client.post("/setup").json()["users"] == 3


def test_post_setup_seeds_demo_data(client):
    response = client.post("/setup")
    assert response.status_code == 200
    result = response.json()
    assert result["message"] == "Database initialized successfully!"
    assert result["users"] == 3
    assert result["anlagen"] == 2
    assert result["transaktionen"] == 2
    assert result["credentials"]["admin"] == "admin@onlinekonto.de / admin123"


def test_post_setup_twice_reports_existing_data(client):
    client.post("/setup")
    result = client.post("/setup").json()
    assert result["already_setup"] is True
    assert result["users"] == 3


def test_get_setup_seeds_empty_database(client):
    result = client.get("/setup").json()
    assert result["auto_setup"] is True
    assert result["users"] == 3


def test_get_setup_reports_ready_database(client):
    client.get("/setup")
    result = client.get("/setup").json()
    assert result == {"status": "Database ready", "users": 3, "anlagen": 2, "ready": True}


def test_health_check(client):
    response = client.get("/health_check/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
