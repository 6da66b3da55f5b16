"""
Shared pytest fixtures for all test modules.

Vendor credentials are cleared before the app is imported so nothing in the
suite can reach GPTZero or Sightengine; detectors under test get explicit
keys and a mocked aiohttp session instead.
"""

import io
import json
import os

for _var in ("GPTZERO_API_KEY", "SIGHTENGINE_API_USER", "SIGHTENGINE_API_SECRET",
             "UPSTASH_REDIS_REST_URL", "UPSTASH_REDIS_REST_TOKEN"):
    os.environ.pop(_var, None)

from contextlib import asynccontextmanager  # noqa: E402
from unittest.mock import AsyncMock, MagicMock, patch  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from artfolio.core.auth import get_current_user  # noqa: E402
from artfolio.detection.router import DetectionRouter, Strategy, default_strategies, get_detection_router  # noqa: E402
from artfolio.detection.types import AIDetector, ContentType, DetectionResult  # noqa: E402
from artfolio.main import app  # noqa: E402
from tests.mocks.firebase_mock import MockFirestore  # noqa: E402
from tests.mocks.redis_mock import MockRedis  # noqa: E402

TEST_UID = "user-alice"


# ---------------------------------------------------------------------------
# Core infrastructure fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_firebase(monkeypatch):
    """Replace firebase.db with an in-memory MockFirestore."""
    from artfolio.integrations import firebase as fb

    mock_db = MockFirestore()
    monkeypatch.setattr(fb, "db", mock_db)
    return mock_db


@pytest.fixture
def mock_redis(monkeypatch):
    """Replace redis_client.client with an in-memory MockRedis."""
    from artfolio.integrations import redis_client as rc

    mock_rc = MockRedis()
    monkeypatch.setattr(rc, "client", mock_rc)
    return mock_rc


@pytest.fixture
def fake_text_detector():
    return FakeDetector("fake-text", text_score=0.1)


@pytest.fixture
def fake_image_detector():
    return FakeDetector("fake-image", image_score=0.1)


@pytest.fixture
def detection_router(fake_text_detector, fake_image_detector):
    return make_router(text=fake_text_detector, image=fake_image_detector)


@pytest.fixture
def client(mock_firebase, mock_redis, detection_router):
    """
    TestClient with mocked Firebase and Redis, a signed-in user and fake detectors.

    initialize() calls are patched to no-ops so they can't overwrite our mocks
    or attempt real network connections during the lifespan startup.
    """
    app.dependency_overrides[get_current_user] = lambda: TEST_UID
    app.dependency_overrides[get_detection_router] = lambda: detection_router
    try:
        with (
            patch("artfolio.integrations.firebase.initialize"),
            patch("artfolio.integrations.redis_client.initialize"),
        ):
            with TestClient(app, raise_server_exceptions=False) as c:
                yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    from artfolio.core.rate_limiter import _rate_limits

    _rate_limits.clear()
    yield
    _rate_limits.clear()


# ---------------------------------------------------------------------------
# Detector doubles
# ---------------------------------------------------------------------------


class FakeDetector(AIDetector):
    """Records calls and returns fixed scores; error overrides the score."""

    def __init__(self, name: str, text_score=None, image_score=None, error=None, threshold=0.5):
        self.name = name
        self.text_score = text_score
        self.image_score = image_score
        self.error = error
        self.threshold = threshold
        self.calls: list[tuple] = []

    @property
    def provider_name(self) -> str:
        return self.name

    def _result(self, score):
        return DetectionResult(
            passed=score < self.threshold,
            confidence=1 - score,
            raw_score=score,
            provider=self.name,
        )

    async def check_text(self, text: str) -> DetectionResult:
        self.calls.append(("text", text))
        if self.error:
            raise self.error
        if self.text_score is None:
            from artfolio.core.errors import CapabilityUnsupportedError
            raise CapabilityUnsupportedError(f"{self.name} does not support text")
        return self._result(self.text_score)

    async def check_image(self, image_bytes: bytes, filename: str) -> DetectionResult:
        self.calls.append(("image", filename))
        if self.error:
            raise self.error
        if self.image_score is None:
            from artfolio.core.errors import CapabilityUnsupportedError
            raise CapabilityUnsupportedError(f"{self.name} does not support images")
        return self._result(self.image_score)


def _unconfigured():
    from artfolio.core.errors import ConfigurationError
    raise ConfigurationError("detector not configured")


def make_router(text=None, image=None) -> DetectionRouter:
    """Router whose factories hand out the given detectors (or a factory callable)."""
    base = default_strategies()
    strategies = {}
    for content_type, detector in ((ContentType.TEXT, text), (ContentType.IMAGE, image)):
        if detector is None:
            factory = _unconfigured
        elif isinstance(detector, AIDetector):
            factory = lambda d=detector: d  # noqa: E731
        else:
            factory = detector
        strategies[content_type] = Strategy(
            factory=factory,
            accepts=base[content_type].accepts,
            invoke=base[content_type].invoke,
            expected=base[content_type].expected,
        )
    return DetectionRouter(strategies)


# ---------------------------------------------------------------------------
# aiohttp session doubles
# ---------------------------------------------------------------------------


def make_mock_session(status=200, body=None, raw=None, post_error=None):
    """Mock aiohttp session whose .post() returns a context-manager response."""
    mock_resp = MagicMock()
    mock_resp.__aenter__ = AsyncMock(return_value=mock_resp)
    mock_resp.__aexit__ = AsyncMock(return_value=None)
    mock_resp.status = status
    text = raw if raw is not None else json.dumps(body if body is not None else {})
    mock_resp.text = AsyncMock(return_value=text)

    mock_session = MagicMock()
    if post_error is not None:
        mock_session.post = MagicMock(side_effect=post_error)
    else:
        mock_session.post = MagicMock(return_value=mock_resp)
    return mock_session


def patch_session(mock_session):
    """
    Patch http_client.request_session to yield mock_session directly,
    bypassing aiohttp.ClientSession construction entirely.
    """
    @asynccontextmanager
    async def _fake_request_session():
        yield mock_session

    return patch(
        "artfolio.integrations.http_client.request_session",
        side_effect=_fake_request_session,
    )


def gptzero_body(prob: float) -> dict:
    return {"documents": [{"completely_generated_prob": prob, "average_generated_prob": prob}]}


# ---------------------------------------------------------------------------
# Shared test-data helpers
# ---------------------------------------------------------------------------


def make_tiny_jpeg() -> bytes:
    """Create a minimal 10×10 JPEG in memory — fast and valid."""
    buf = io.BytesIO()
    Image.new("RGB", (10, 10), color=(128, 128, 128)).save(buf, format="JPEG")
    return buf.getvalue()


def make_tiny_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4)).save(buf, format="PNG")
    return buf.getvalue()
