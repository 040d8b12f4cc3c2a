"""App wiring: health check, error envelope, request time stamp."""

from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient

from app.core.exceptions import AppException, BadRequestError, NotFoundError
from tests.conftest import TOURS_URL


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "app": "Natours API", "env": "test"}


def test_unknown_route_uses_error_envelope(client: TestClient):
    resp = client.get("/api/v1/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"status": "fail", "message": "Can't find /api/v1/nowhere on this server!"}


def test_method_not_allowed(client: TestClient):
    resp = client.put(f"{TOURS_URL}/some-id", json={})
    assert resp.status_code == 405
    assert resp.json()["status"] == "fail"


def test_request_time_is_iso_utc(client: TestClient):
    body = client.get(TOURS_URL).json()
    stamp = body["requestTime"]
    assert stamp.endswith("Z")
    datetime.fromisoformat(stamp.replace("Z", "+00:00"))


def test_malformed_json_body(client: TestClient):
    resp = client.post(TOURS_URL, content=b"{not json", headers={"content-type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["message"].startswith("Invalid input data.")


def test_operational_error_status():
    assert NotFoundError("x").status == "fail"
    assert NotFoundError("x").status_code == 404
    assert BadRequestError("x").status == "fail"
    assert AppException("boom").status == "error"
