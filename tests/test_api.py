"""Tests for the HTTP layer."""

import pytest
from fastapi.testclient import TestClient

from citro.api.routes.voice import sanitize_transcript
from citro.core.exceptions import TranscriptValidationException
from citro.core.pipeline import PipelineOrchestrator
from citro.main import app


@pytest.fixture
def client(registry):
    """Client with the lifespan run and the pipeline swapped for mocked services."""
    with TestClient(app) as test_client:
        app.state.pipeline = PipelineOrchestrator(registry)
        yield test_client


class TestHealth:
    """Tests for health endpoints."""

    def test_health(self, client):
        """Basic health reports the version."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        """Readiness passes once the lifespan has run."""
        data = client.get("/health/ready").json()
        assert data["status"] == "ready"
        assert all(data["checks"].values())

    def test_live(self, client):
        """Liveness always answers."""
        assert client.get("/health/live").json()["status"] == "alive"

    def test_root(self, client):
        """Root lists the service name."""
        assert client.get("/").json()["status"] == "running"


class TestVoiceProcess:
    """Tests for POST /api/voice/process."""

    def test_process(self, client):
        """A transcript comes back as a rendered response."""
        response = client.post(
            "/api/voice/process",
            json={"transcript": "dikhao events", "currentPage": "/dashboard"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["intent"] == "NAV_EVENTS"
        assert body["data"]["action"] == {"type": "navigate", "path": "/events"}
        assert "X-Process-Time-Ms" in response.headers

    def test_event_data_serialized(self, client):
        """Knowledge-base events are serialized to JSON."""
        body = client.post("/api/voice/process", json={"transcript": "tell me about cardiology"}).json()
        assert body["data"]["intent"] == "EVENT_DETAILS"
        assert body["data"]["data"]["event"]["name"] == "Codeology"
        assert body["data"]["data"]["event"]["days"] == [1]

    def test_cart_action(self, client):
        """Cart commands carry the cart item."""
        body = client.post("/api/voice/process", json={"transcript": "add master chef to cart"}).json()
        assert body["data"]["action"]["type"] == "add-to-cart"
        assert body["data"]["action"]["cartItem"]["title"] == "Master Chef"

    @pytest.mark.parametrize("payload", [{}, {"transcript": "   "}, {"transcript": 42}])
    def test_invalid_transcript(self, client, payload):
        """Missing, blank or non-text transcripts are rejected."""
        response = client.post("/api/voice/process", json=payload)
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "INVALID_TRANSCRIPT"

    def test_pipeline_failure(self, client):
        """Unexpected pipeline errors become a generic 500."""
        class Broken:
            async def process_command(self, transcript, context):
                raise RuntimeError("boom")

        app.state.pipeline = Broken()
        response = client.post("/api/voice/process", json={"transcript": "show events"})
        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Voice processing failed"}


class TestSanitizeTranscript:
    """Tests for transcript sanitizing."""

    def test_strips(self):
        """Surrounding whitespace is removed."""
        assert sanitize_transcript("  show events ") == "show events"

    def test_truncates(self):
        """Long transcripts are capped."""
        assert len(sanitize_transcript("a" * 2000)) == 500

    def test_rejects_non_string(self):
        """Non-strings are rejected."""
        with pytest.raises(TranscriptValidationException):
            sanitize_transcript(["show"])
