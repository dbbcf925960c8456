"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from voicekit.telephony.config import VoiceConfig  # noqa: E402


@pytest.fixture
def voice_config() -> VoiceConfig:
    return VoiceConfig(
        username="sandbox",
        api_key="test_api_key_12345",
        format="application/json",
        live_url="https://voice.example.com",
        sandbox_url="https://voice.sandbox.example.com",
        request_timeout_seconds=30,
        respond_timeout_seconds=1,
    )


@pytest.fixture
def mock_http_client() -> MagicMock:
    return MagicMock(spec=httpx.Client)
