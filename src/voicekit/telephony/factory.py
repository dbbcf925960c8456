"""
Voice client factory.

Single source of truth for configuration: VoiceConfig (pydantic settings)
loads from OS env + .env; never read raw os.getenv("VOICE_*") here.
"""

from __future__ import annotations

from functools import lru_cache

from voicekit.shared.logging import get_logger
from voicekit.telephony.client import VoiceClient
from voicekit.telephony.config import VoiceConfig
from voicekit.telephony.config import get_voice_config as _get_settings_voice_config

logger = get_logger(__name__)


def _mask(s: str, keep: int = 6) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return f"{s[:keep]}***"


@lru_cache(maxsize=1)
def get_voice_config() -> VoiceConfig:
    """Return cached VoiceConfig loaded from OS env + .env."""
    return _get_settings_voice_config()


@lru_cache(maxsize=1)
def get_voice_client() -> VoiceClient:
    """Create and cache the voice client using VoiceConfig."""
    cfg = get_voice_config()

    logger.info(
        "Voice config resolved",
        extra={
            "username": cfg.username,
            "api_key": _mask(cfg.api_key),
            "voice_url": cfg.voice_url,
            "sandbox": cfg.is_sandbox,
            "request_timeout_seconds": cfg.request_timeout_seconds,
        },
    )

    return VoiceClient(cfg)
