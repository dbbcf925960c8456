"""
Voice platform configuration.

Credentials and endpoints for the call-control API, plus the knobs of the
inbound webhook adapter.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SANDBOX_USERNAME = "sandbox"


class VoiceConfig(BaseSettings):
    """Voice platform configuration from environment."""

    model_config = SettingsConfigDict(
        env_prefix="VOICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Account credentials
    username: str = Field(default=SANDBOX_USERNAME)
    api_key: str = Field(default="")

    # Value of the Accept header sent with every API request
    format: str = Field(default="application/json")

    # API endpoints; the sandbox one is picked for the sandbox account
    live_url: str = Field(default="https://voice.africastalking.com")
    sandbox_url: str = Field(default="https://voice.sandbox.africastalking.com")

    # Timeouts
    request_timeout_seconds: int = Field(default=30, ge=10, le=300)
    respond_timeout_seconds: float = Field(
        default=10.0,
        ge=1,
        le=60,
        description="How long an inbound exchange waits for the handler to respond.",
    )

    @property
    def is_sandbox(self) -> bool:
        return self.username == SANDBOX_USERNAME

    @property
    def voice_url(self) -> str:
        base = self.sandbox_url if self.is_sandbox else self.live_url
        return base.rstrip("/")

    def get_endpoint_url(self, path: str) -> str:
        return f"{self.voice_url}{path}"


def get_voice_config() -> VoiceConfig:
    return VoiceConfig()
