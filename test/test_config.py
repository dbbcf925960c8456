"""
Tests for configuration, validation predicates and the client factory.
"""

import pytest

from voicekit.config import Settings
from voicekit.telephony import factory
from voicekit.telephony.client import VoiceClient
from voicekit.telephony.config import VoiceConfig
from voicekit.telephony.interface import ValidationError, Violation, ViolationKind
from voicekit.telephony.validation import (
    Validator,
    is_phone_number,
    is_phone_number_list,
    is_present,
    is_url,
    matches,
    required,
)


class TestVoiceConfig:
    def test_default_values(self) -> None:
        # Environment variables may override runtime values; check declared defaults.
        assert VoiceConfig.model_fields["username"].default == "sandbox"
        assert VoiceConfig.model_fields["format"].default == "application/json"

    def test_sandbox_url_selected_for_sandbox_account(self) -> None:
        config = VoiceConfig(
            username="sandbox",
            sandbox_url="https://voice.sandbox.example.com/",
            live_url="https://voice.example.com",
        )

        assert config.is_sandbox
        assert config.voice_url == "https://voice.sandbox.example.com"
        assert config.get_endpoint_url("/call") == "https://voice.sandbox.example.com/call"

    def test_live_url_selected_for_real_account(self) -> None:
        config = VoiceConfig(username="acme", live_url="https://voice.example.com")

        assert not config.is_sandbox
        assert config.voice_url == "https://voice.example.com"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VOICE_USERNAME", "from_env")
        monkeypatch.setenv("VOICE_API_KEY", "env_key")

        config = VoiceConfig()

        assert config.username == "from_env"
        assert config.api_key == "env_key"

    def test_timeout_bounds(self) -> None:
        with pytest.raises(Exception):
            VoiceConfig(request_timeout_seconds=1)


class TestSettings:
    def test_log_level_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert Settings().log_level == "DEBUG"


class TestPredicates:
    @pytest.mark.parametrize("value", ["+15551234567", "5551234567", "0"])
    def test_valid_phone_numbers(self, value: str) -> None:
        assert is_phone_number(value)

    @pytest.mark.parametrize(
        "value",
        [
            "", "+", "++1555", "555-1234", "+1 555", None, 15551234567,
            "+15551234567\n", "+١٥٥٥", "１５５５",
        ],
    )
    def test_invalid_phone_numbers(self, value) -> None:
        assert not is_phone_number(value)

    def test_phone_number_list(self) -> None:
        assert is_phone_number_list("+1555,+1666")
        assert is_phone_number_list("+1555, +1666")
        assert not is_phone_number_list("+1555;+1666")
        assert not is_phone_number_list("+1555,")
        assert not is_phone_number_list("+1555,+1666\n")
        assert not is_phone_number_list("+1555,+١٦٦٦")

    def test_is_present(self) -> None:
        assert is_present("x")
        assert is_present(0)
        assert not is_present(None)
        assert not is_present("   ")
        assert not is_present([])

    def test_is_url(self) -> None:
        assert is_url("https://example.com/a.mp3")
        assert is_url("http://example.com")
        assert is_url("relative/path.mp3")
        assert not is_url("file:///etc/passwd")
        assert not is_url("https://example.com/a b")
        assert not is_url(None)


class TestValidator:
    def test_reports_first_failure_per_field_for_all_fields(self) -> None:
        validator = Validator(
            {
                "a": [required(), matches(is_phone_number, "must be a phone number")],
                "b": [required(), matches(is_phone_number, "must be a phone number")],
            }
        )

        violations = validator.validate({"a": None, "b": "abc"})

        assert violations == [
            Violation("a", ViolationKind.PRESENCE, "is required"),
            Violation("b", ViolationKind.FORMAT, "must be a phone number"),
        ]

    def test_check_raises_aggregated_error(self) -> None:
        validator = Validator({"a": [required()], "b": [required()]})

        with pytest.raises(ValidationError) as exc_info:
            validator.check({})

        assert str(exc_info.value) == "a is required b is required"
        assert exc_info.value.fields == ["a", "b"]
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_check_passes_valid_params(self) -> None:
        Validator({"a": [required()]}).check({"a": "x"})

    def test_validation_error_from_message(self) -> None:
        error = ValidationError("something is wrong")

        assert str(error) == "something is wrong"
        assert error.violations[0].kind == ViolationKind.FORMAT


class TestFactory:
    def test_get_voice_client_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VOICE_USERNAME", "factory_user")
        monkeypatch.setenv("VOICE_API_KEY", "secret-api-key")
        factory.get_voice_config.cache_clear()
        factory.get_voice_client.cache_clear()

        try:
            client = factory.get_voice_client()

            assert isinstance(client, VoiceClient)
            assert client.config.username == "factory_user"
            assert factory.get_voice_client() is client
        finally:
            factory.get_voice_config.cache_clear()
            factory.get_voice_client.cache_clear()

    def test_mask(self) -> None:
        assert factory._mask("") == ""
        assert factory._mask("abc") == "***"
        assert factory._mask("secret-api-key") == "secret***"
