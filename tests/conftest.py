"""Pytest configuration for test discovery and shared fixtures.

This file ensures that:
- `src/` is importable
- no developer config file leaks into tests through `MOCHOW_CONFIG_PATH`
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from mochow_sdk.config import ClientConfiguration  # noqa: E402

ENDPOINT = "http://mochow.test:5287"


@pytest.fixture(autouse=True)
def _isolate_config_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MOCHOW_CONFIG_PATH", raising=False)


@pytest.fixture
def client_config() -> ClientConfiguration:
    """Configuration pointing at the mocked endpoint, with instant retries."""
    return ClientConfiguration(
        account="root",
        api_key="mochow",
        endpoint=ENDPOINT,
        timeout_seconds=5,
        max_retries=2,
        retry_backoff_seconds=0,
    )
