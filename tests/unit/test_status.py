"""Unit tests for the system status probe."""

import requests

from edgeboard.status import check_system_status


class StubResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class StubSession:
    """Maps URL suffixes to responses or exceptions."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        for suffix, outcome in self.routes.items():
            if url.endswith(suffix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        return StubResponse(404)


class TestCheckSystemStatus:
    """Tests for check_system_status."""

    def test_online_with_summary(self):
        session = StubSession({
            "/api/health": StubResponse(200, {"status": "ok"}),
            "/api/performance/summary": StubResponse(200, {"win_rate": 56.2}),
        })

        status = check_system_status("http://feed:8001/", timeout=3.0, session=session)

        assert status.api_server == "online"
        assert status.dashboard == "online"
        assert status.system == {"win_rate": 56.2}
        assert session.requests[0] == ("http://feed:8001/api/health", 3.0)

    def test_online_without_summary(self):
        session = StubSession({
            "/api/health": StubResponse(200),
            "/api/performance/summary": StubResponse(200),
        })

        status = check_system_status("http://feed:8001", session=session)

        assert status.api_server == "online"
        assert status.system is None

    def test_offline_on_error_status(self):
        session = StubSession({"/api/health": StubResponse(503)})

        status = check_system_status("http://feed:8001", session=session)

        assert status.api_server == "offline"
        assert len(session.requests) == 1

    def test_offline_on_timeout(self):
        session = StubSession({"/api/health": requests.Timeout("timed out")})

        status = check_system_status("http://feed:8001", session=session)

        assert status.api_server == "offline"
        assert status.dashboard == "online"

    def test_to_dict(self):
        session = StubSession({"/api/health": requests.ConnectionError("refused")})

        data = check_system_status("http://feed:8001", session=session).to_dict()

        assert data["apiServer"] == "offline"
        assert data["dashboard"] == "online"
        assert data["system"] is None
        assert data["lastChecked"]
