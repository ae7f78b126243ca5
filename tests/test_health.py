from fastapi.testclient import TestClient

from src import __version__
from src.api.main import app


def test_health():
    r = TestClient(app).get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "healthy"
    assert body["version"] == __version__


def test_ready_with_key(gateway_key):
    r = TestClient(app).get("/health/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


def test_ready_without_key(no_gateway_key):
    r = TestClient(app).get("/health/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "not_configured"


def test_security_headers():
    r = TestClient(app).get("/")
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-frame-options"] == "DENY"
    assert r.json()["chat"] == "/api/chat"


def test_package_metadata_has_no_readme():
    from pathlib import Path

    lines = (Path(__file__).parent.parent / "pyproject.toml").read_text().splitlines()
    assert not any(line.startswith("readme") for line in lines)
    assert f'version = "{__version__}"' in lines
