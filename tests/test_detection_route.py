"""
Tests for POST /api/detect/text, POST /api/detect/image and GET /api/detect/status.

Detectors are FakeDetector instances injected through the router dependency.
"""

import pytest

from artfolio.core.auth import get_current_user
from artfolio.core.errors import CapabilityUnsupportedError, TransportError
from artfolio.main import app
from tests.conftest import make_tiny_jpeg


def test_text_check_passes(client, fake_text_detector):
    fake_text_detector.text_score = 0.12
    response = client.post("/api/detect/text", json={"text": "Hand-written essay"})

    assert response.status_code == 200
    data = response.json()
    assert data["passed"] is True
    assert data["score"] == 0.12
    assert data["confidence"] == pytest.approx(0.88)
    assert data["provider"] == "fake-text"


def test_text_check_failure_is_not_an_error(client, fake_text_detector):
    fake_text_detector.text_score = 0.91
    response = client.post("/api/detect/text", json={"text": "Generated essay"})

    assert response.status_code == 200
    assert response.json()["passed"] is False


def test_text_check_missing_field(client):
    response = client.post("/api/detect/text", json={})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_text_check_blank_text(client, fake_text_detector):
    response = client.post("/api/detect/text", json={"text": "  "})
    assert response.status_code == 400
    assert fake_text_detector.calls == []


def test_transport_error_maps_to_503_retryable(client, fake_text_detector):
    fake_text_detector.error = TransportError("timed out", provider="fake-text")
    response = client.post("/api/detect/text", json={"text": "essay"})

    assert response.status_code == 503
    error = response.json()["error"]
    assert error["code"] == "DETECTION_UNAVAILABLE"
    assert error["details"]["retryable"] is True


def test_capability_error_maps_to_500(client, fake_text_detector):
    fake_text_detector.error = CapabilityUnsupportedError("no text")
    response = client.post("/api/detect/text", json={"text": "essay"})

    assert response.status_code == 500
    assert response.json()["error"]["code"] == "DETECTION_UNSUPPORTED"


def test_image_check_passes(client, fake_image_detector):
    response = client.post(
        "/api/detect/image",
        files={"file": ("sketch.jpg", make_tiny_jpeg(), "image/jpeg")},
    )

    assert response.status_code == 200
    assert response.json()["passed"] is True
    assert fake_image_detector.calls == [("image", "sketch.jpg")]


def test_image_check_unsupported_extension(client, fake_image_detector):
    response = client.post(
        "/api/detect/image",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert response.status_code == 415
    assert fake_image_detector.calls == []


def test_status_reports_built_detectors(client):
    assert client.get("/api/detect/status").json() == {"image": False, "text": False}
    client.post("/api/detect/text", json={"text": "essay"})
    assert client.get("/api/detect/status").json() == {"image": False, "text": True}


def test_rate_limit_returns_429(client, monkeypatch):
    from artfolio.core import rate_limiter

    monkeypatch.setattr(rate_limiter, "MAX_REQUESTS_PER_WINDOW", 2)
    for _ in range(2):
        assert client.post("/api/detect/text", json={"text": "essay"}).status_code == 200

    response = client.post("/api/detect/text", json={"text": "essay"})
    assert response.status_code == 429
    assert response.json()["error"]["code"] == "RATE_LIMITED"


def test_requires_authentication(client):
    app.dependency_overrides.pop(get_current_user)
    response = client.post("/api/detect/text", json={"text": "essay"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"
