"""Shared test fixtures for the Natours API.

Each test gets a fresh SQLite file: the app lifespan creates the tables on
startup and disposes the engine on shutdown, then the file is removed.
DATABASE_URL must be set before any app module is imported.
"""

import os
import tempfile
from pathlib import Path

_DB_FILE = Path(tempfile.mkdtemp(prefix="natours-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"
os.environ["APP_ENV"] = "test"
os.environ["AUTO_CREATE_TABLES"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.main import create_app

TOURS_URL = "/api/v1/tours"


@pytest.fixture()
def client():
    """TestClient with lifespan running against an empty database."""
    with TestClient(create_app()) as c:
        yield c
    if _DB_FILE.exists():
        _DB_FILE.unlink()


def tour_payload(**overrides) -> dict:
    """A valid tour body; override any JSON field by its camelCase name."""
    body = {
        "name": "The Forest Hiker",
        "duration": 5,
        "maxGroupSize": 25,
        "difficulty": "easy",
        "ratingAverage": 4.7,
        "price": 397,
        "summary": "Breathtaking hike through the Canadian Banff National Park",
        "imageCover": "tour-1-cover.jpg",
        "images": ["tour-1-1.jpg"],
        "startDates": ["2021-04-25T09:00:00Z", "2021-07-20T09:00:00Z"],
    }
    body.update(overrides)
    return body


@pytest.fixture()
def create_tour(client: TestClient):
    """Factory: POST a tour and return the created document."""

    def _create(**overrides) -> dict:
        resp = client.post(TOURS_URL, json=tour_payload(**overrides))
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]["tour"]

    return _create
