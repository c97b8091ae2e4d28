"""HTTP surface: GET / and GET /status always answer 200, whatever the dependencies do."""

import pytest
from fastapi.testclient import TestClient

from turbo_status.probes import CACHE_PRIMARY, CACHE_SECONDARY, DATABASE, ServiceProbe
from turbo_status.status_server.app import create_app
from turbo_status.status_server.report import StatusReporter


class _UpProbe(ServiceProbe):
    def __init__(self, service: str) -> None:
        super().__init__(1.0)
        self.service = service

    @property
    def target(self) -> str:
        return f"{self.service}:0"

    def check(self) -> None:
        return None


@pytest.fixture
def down_client(unreachable_settings, registry) -> TestClient:
    """All three services point at a refused local port."""
    return TestClient(create_app(StatusReporter(unreachable_settings, registry)))


@pytest.fixture
def up_client(unreachable_settings, registry) -> TestClient:
    probes = [_UpProbe(name) for name in (DATABASE, CACHE_PRIMARY, CACHE_SECONDARY)]
    return TestClient(create_app(StatusReporter(unreachable_settings, registry, probes=probes)))


class TestPage:
    def test_all_down_still_200(self, down_client):
        resp = down_client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert resp.text.count("○ Disconnected") == 3
        assert "● Connected" not in resp.text

    def test_all_up(self, up_client):
        resp = up_client.get("/")
        assert resp.status_code == 200
        assert resp.text.count("● Connected") == 3
        assert "○ Disconnected" not in resp.text

    def test_render_error_returns_fallback_page(self, registry, unreachable_settings, monkeypatch):
        reporter = StatusReporter(unreachable_settings, registry, probes=[])

        def broken(snapshot):
            raise RuntimeError("template missing")

        monkeypatch.setattr(reporter, "render", broken)
        resp = TestClient(create_app(reporter)).get("/")
        assert resp.status_code == 200
        assert "Status report unavailable" in resp.text


class TestStatusJson:
    def test_all_down(self, down_client):
        resp = down_client.get("/status")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status_lamp"] == "red"
        assert body["self_check"] == "blocked"
        assert body["service_status"][DATABASE] is False
        assert body["service_status"][CACHE_PRIMARY] is False
        assert body["service_status"][CACHE_SECONDARY] is False
        assert all(p["error"] for p in body["probes"])
        assert body["loaded_modules"] == ["array", "math", "posix", "zlib"]

    def test_all_up(self, up_client):
        body = up_client.get("/status").json()
        assert body["status_lamp"] == "green"
        assert body["block_reasons"] == []
        assert body["service_status"]["bytecode-cache"] is True
        assert body["service_status"]["object-cache"] is False
