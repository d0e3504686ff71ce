"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import io
import logging
import sys
from pathlib import Path

import pytest

# Add tests directory to path so helpers can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from helpers import FakeClock  # noqa: E402

from renderdocs import logging as sdk_logging  # noqa: E402
from renderdocs.config import Settings  # noqa: E402


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fresh fake clock."""
    return FakeClock()


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    for name in (
        "RENDERDOCS_API_KEY",
        "RENDERDOCS_BASE_URL",
        "RENDERDOCS_TIMEOUT_MS",
        "RENDERDOCS_POLL_INTERVAL_MS",
        "RENDERDOCS_POLL_TIMEOUT_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, api_key="rd_test_key", base_url="https://api.test")


@pytest.fixture
def log_stream():
    """Capture SDK log output and restore the renderdocs logger afterwards."""
    stream = io.StringIO()
    yield stream

    sdk_logger = logging.getLogger(sdk_logging.SDK_LOGGER)
    if sdk_logging._handler is not None:
        sdk_logger.removeHandler(sdk_logging._handler)
    sdk_logger.setLevel(logging.NOTSET)
    sdk_logger.propagate = True
    sdk_logging._handler = None
    sdk_logging.clear_context()
