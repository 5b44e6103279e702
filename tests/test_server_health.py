"""Tests for /health and /status endpoints."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from server.app import app
from server.config import Settings
from server.dependencies import get_settings


client = TestClient(app)


def test_health_returns_200():
    resp = client.get("/health")
    assert resp.status_code == 200


def test_health_body():
    resp = client.get("/health")
    assert resp.json() == {"ok": True}


def test_status_reports_unit_and_collection():
    with tempfile.TemporaryDirectory() as tmp:
        settings = Settings(data_dir=Path(tmp), unit_is_minutes=False, collection='deck')
        app.dependency_overrides[get_settings] = lambda: settings
        try:
            body = client.get("/status").json()
            assert body['unit'] == 'days'
            assert body['collection'] == 'deck'
            assert body['storage_backend'] in ('file', 'sql')
            assert body['version']
        finally:
            app.dependency_overrides.clear()
