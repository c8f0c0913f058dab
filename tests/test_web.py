"""Tests for the HTTP API."""

import json
import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from vet_pathways.config import AppConfig, ServerConfig
from vet_pathways.pipeline.analyzer import Analyzer, Mode
from vet_pathways.web import InMemoryRateLimiter, create_app
from vet_pathways.web.api import GENERIC_ERROR, content_length_exceeds, sanitize_error
from vet_pathways.web.security import SECURITY_HEADERS


def _client(**kwargs) -> TestClient:
    kwargs.setdefault("config", AppConfig())
    kwargs.setdefault("analyzer", Analyzer())
    return TestClient(create_app(**kwargs))


@pytest.fixture
def client() -> TestClient:
    return _client()


class TestAnalyzeEndpoint:
    def test_demo_analysis(self, client, sample_profile_data):
        response = client.post("/api/analyze", json=sample_profile_data)
        assert response.status_code == 200
        body = response.json()
        assert [p["type"] for p in body["pathways"]] == ["fast-income", "balanced", "max-upside"]
        assert "incomeTrajectory" in body["pathways"][0]
        assert response.headers["X-RateLimit-Limit"] == "10"
        assert response.headers["X-RateLimit-Remaining"] == "9"

    def test_deterministic(self, client, sample_profile_data):
        first = client.post("/api/analyze", json=sample_profile_data).json()
        second = client.post("/api/analyze", json=sample_profile_data).json()
        assert first == second

    def test_invalid_profile(self, client, sample_profile_data):
        data = {**sample_profile_data, "dependents": -1, "timeline": ""}
        response = client.post("/api/analyze", json=data)
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request body"
        assert {d["field"] for d in body["details"]} == {"dependents", "timeline"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/analyze", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "__root__"

    def test_non_object_body(self, client):
        response = client.post("/api/analyze", json=["a", "b"])
        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "__root__"

    def test_body_too_large(self, sample_profile_data):
        client = _client(config=AppConfig(server=ServerConfig(max_body_bytes=1024)))
        data = {**sample_profile_data, "careerGoals": "x" * 2000}
        response = client.post("/api/analyze", content=json.dumps(data))
        assert response.status_code == 413
        body = response.json()
        assert body["error"] == "Request too large"
        assert "1KB" in body["message"]

    def test_declared_length_rejected_before_reading(self, sample_profile_data):
        client = _client(config=AppConfig(server=ServerConfig(max_body_bytes=1024)))
        response = client.post(
            "/api/analyze",
            content=json.dumps(sample_profile_data),
            headers={"Content-Type": "application/json", "Content-Length": "500000"},
        )
        assert response.status_code == 413
        assert response.json()["error"] == "Request too large"

    def test_remote_failure_still_succeeds(self, sample_profile_data):
        remote = MagicMock()
        remote.produce = AsyncMock(side_effect=TimeoutError("timed out"))
        client = _client(analyzer=Analyzer(remote=remote))
        response = client.post("/api/analyze", json=sample_profile_data)
        assert response.status_code == 200
        assert len(response.json()["pathways"]) == 3

    def test_unexpected_error_is_sanitized(self, sample_profile_data):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(side_effect=RuntimeError("invalid x-api-key sk-ant-123"))
        client = _client(analyzer=analyzer)
        response = client.post("/api/analyze", json=sample_profile_data)
        assert response.status_code == 500
        assert response.json() == {"error": GENERIC_ERROR}

    def test_unexpected_error_message_kept_when_harmless(self, sample_profile_data):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(side_effect=RuntimeError("catalogue unavailable"))
        client = _client(analyzer=analyzer)
        response = client.post("/api/analyze", json=sample_profile_data)
        assert response.status_code == 500
        assert response.json() == {"error": "catalogue unavailable"}


class TestRateLimiting:
    def test_limit_exceeded(self, sample_profile_data):
        limiter = InMemoryRateLimiter(max_requests=2, window_seconds=900)
        client = _client(limiter=limiter)

        for _ in range(2):
            assert client.post("/api/analyze", json=sample_profile_data).status_code == 200
        response = client.post("/api/analyze", json=sample_profile_data)

        assert response.status_code == 429
        assert response.json()["error"] == "Rate limit exceeded"
        assert 898 <= int(response.headers["Retry-After"]) <= 900
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert int(response.headers["X-RateLimit-Reset"]) >= int(time.time()) + 898

    def test_limits_per_client(self, sample_profile_data):
        limiter = InMemoryRateLimiter(max_requests=1)
        client = _client(limiter=limiter)
        first = client.post("/api/analyze", json=sample_profile_data, headers={"X-Forwarded-For": "10.0.0.1"})
        other = client.post("/api/analyze", json=sample_profile_data, headers={"X-Forwarded-For": "10.0.0.2"})
        again = client.post("/api/analyze", json=sample_profile_data, headers={"X-Forwarded-For": "10.0.0.1"})
        assert (first.status_code, other.status_code, again.status_code) == (200, 200, 429)

    def test_apps_do_not_share_counts(self, sample_profile_data):
        config = AppConfig()
        a = _client(config=config)
        b = _client(config=config)
        a.post("/api/analyze", json=sample_profile_data)
        response = b.post("/api/analyze", json=sample_profile_data)
        assert response.headers["X-RateLimit-Remaining"] == "9"


class TestMetaEndpoints:
    def test_mode_demo(self, client):
        body = client.get("/api/mode").json()
        assert body["mode"] == "demo"
        assert "Demo Mode" in body["description"]

    def test_mode_real(self):
        remote = MagicMock()
        client = _client(analyzer=Analyzer(remote=remote))
        assert client.get("/api/mode").json()["mode"] == Mode.REAL.value

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["mode"] == "demo"
        assert "timestamp" in body
        assert "no-cache" in response.headers["Cache-Control"]

    def test_security_headers(self, client):
        response = client.get("/api/health")
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value


class TestSanitizeError:
    @pytest.mark.parametrize(
        "message",
        ["Invalid API key", "anthropic overloaded", "token expired", "sk-ant-abc", ""],
    )
    def test_sensitive_messages_hidden(self, message):
        assert sanitize_error(RuntimeError(message)) == GENERIC_ERROR

    def test_plain_message_kept(self):
        assert sanitize_error(RuntimeError("disk full")) == "disk full"


class TestContentLength:
    def test_over_limit(self):
        assert content_length_exceeds({"content-length": "2048"}, 1024)

    def test_within_limit(self):
        assert not content_length_exceeds({"content-length": "1024"}, 1024)

    def test_absent_or_malformed(self):
        assert not content_length_exceeds({}, 1024)
        assert not content_length_exceeds({"content-length": "lots"}, 1024)
