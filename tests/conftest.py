"""Pytest configuration for ytcaptions tests."""

import pytest

from ytcaptions.config import clear_config_cache
from ytcaptions.models.captions import CaptionSegment


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against the real yt-dlp executable (requires network)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the developer's real config and environment."""
    for var in (
        "YTCAPTIONS_ROOT",
        "YTCAPTIONS_CACHE_ENABLED",
        "YTCAPTIONS_CACHE_DEFAULT_TTL",
        "YTCAPTIONS_CACHE_MAX_KEYS",
        "YTCAPTIONS_CACHE_CHECK_PERIOD",
        "YTCAPTIONS_DEFAULT_LANGUAGE",
        "YTCAPTIONS_CLIENT_TIMEOUT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("YTCAPTIONS_ROOT", str(tmp_path / "ytcaptions-root"))
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def segments():
    """Three well-formed, non-overlapping segments."""
    return [
        CaptionSegment(start=0.0, duration=2.0, text="Hello world"),
        CaptionSegment(start=2.5, duration=1.5, text="This is a test"),
        CaptionSegment(start=5.0, duration=3.0, text="Goodbye"),
    ]


class FakeTimer:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_timer():
    return FakeTimer()
