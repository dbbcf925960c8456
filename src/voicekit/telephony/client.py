"""
Voice call-control client.

Two outbound operations share one shape: validate, build the request, send
it, interpret the response. Both are single-shot: placing a call is not
idempotent, so nothing here retries.

The ``*_sync`` methods do the work over an ``httpx.Client``. The async entry
points validate eagerly (errors surface at call time, before anything is
sent) and then return an awaitable that runs the exchange in a worker
thread.
"""

from __future__ import annotations

from typing import Any, Awaitable, Iterable

import anyio.to_thread
import httpx
from fastapi import APIRouter

from voicekit.shared.logging import get_logger
from voicekit.telephony.config import VoiceConfig, get_voice_config
from voicekit.telephony.interface import TransportError
from voicekit.telephony.markup.builder import DocumentBuilder
from voicekit.telephony.validation import PLACE_CALL_VALIDATOR, QUEUE_STATUS_VALIDATOR
from voicekit.telephony.webhooks.router import CallHandler, create_call_router

logger = get_logger(__name__)

CALL_PATH = "/call"
QUEUE_STATUS_PATH = "/queueStatus"

PLACE_CALL_SUCCESS = frozenset({200, 201})
QUEUE_STATUS_SUCCESS = frozenset({201})


def _join_numbers(phone_numbers: str | Iterable[str] | None) -> str | None:
    if phone_numbers is None or isinstance(phone_numbers, str):
        return phone_numbers
    return ",".join(str(n).strip(" ") for n in phone_numbers)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_detail(body: Any) -> Any:
    if isinstance(body, dict):
        for key in ("errorMessage", "error", "message"):
            if body.get(key):
                return body[key]
    return body


class VoiceClient:
    """Client for the platform's voice call-control API."""

    def __init__(
        self,
        config: VoiceConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or get_voice_config()
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def config(self) -> VoiceConfig:
        return self._config

    def _get_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(
                timeout=httpx.Timeout(float(self._config.request_timeout_seconds))
            )
        return self._http_client

    def close(self) -> None:
        if self._owns_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> VoiceClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _get_headers(self) -> dict[str, str]:
        return {
            "apikey": self._config.api_key,
            "Accept": self._config.format,
        }

    def _post(
        self,
        path: str,
        data: dict[str, str],
        success: frozenset[int],
    ) -> Any:
        url = self._config.get_endpoint_url(path)
        client = self._get_client()

        try:
            response = client.post(url, data=data, headers=self._get_headers())
        except httpx.HTTPError as e:
            logger.exception("HTTP error calling voice API", extra={"url": url})
            raise TransportError(f"HTTP error: {e!s}") from e

        body = _decode_body(response)

        if response.status_code not in success:
            logger.error(
                "Voice API request failed",
                extra={
                    "url": url,
                    "status_code": response.status_code,
                    "error": body,
                },
            )
            raise TransportError(
                _error_detail(body) or f"HTTP {response.status_code}",
                status_code=response.status_code,
                response_body=body,
            )

        return body

    # -- Place call --

    def _validated_call_body(self, call_to: Any, call_from: Any) -> dict[str, str]:
        PLACE_CALL_VALIDATOR.check({"call_to": call_to, "call_from": call_from})
        return {
            "username": self._config.username,
            "to": call_to,
            "from": call_from,
        }

    def _send_call(self, body: dict[str, str]) -> Any:
        logger.info(
            "Placing call",
            extra={"to": body["to"], "from": body["from"], "sandbox": self._config.is_sandbox},
        )
        return self._post(CALL_PATH, body, PLACE_CALL_SUCCESS)

    def place_call_sync(self, *, call_to: str, call_from: str) -> Any:
        """Place an outbound call from ``call_from`` to ``call_to``."""
        return self._send_call(self._validated_call_body(call_to, call_from))

    def place_call(self, *, call_to: str, call_from: str) -> Awaitable[Any]:
        body = self._validated_call_body(call_to, call_from)
        return anyio.to_thread.run_sync(self._send_call, body)

    # -- Queue status --

    def _validated_queue_body(self, phone_numbers: Any) -> dict[str, str]:
        joined = _join_numbers(phone_numbers)
        QUEUE_STATUS_VALIDATOR.check({"phone_numbers": joined})
        return {
            "username": self._config.username,
            "phoneNumbers": joined,
        }

    def _send_queue_status(self, body: dict[str, str]) -> Any:
        logger.info("Requesting queued call count", extra={"phone_numbers": body["phoneNumbers"]})
        return self._post(QUEUE_STATUS_PATH, body, QUEUE_STATUS_SUCCESS)

    def get_queued_call_count_sync(self, *, phone_numbers: str | Iterable[str]) -> Any:
        """Query how many calls are queued on each of ``phone_numbers``."""
        return self._send_queue_status(self._validated_queue_body(phone_numbers))

    def get_queued_call_count(self, *, phone_numbers: str | Iterable[str]) -> Awaitable[Any]:
        body = self._validated_queue_body(phone_numbers)
        return anyio.to_thread.run_sync(self._send_queue_status, body)

    # -- Markup / inbound helpers --

    def builder(self) -> DocumentBuilder:
        return DocumentBuilder()

    def call_handler(self, handle: CallHandler, path: str = "/") -> APIRouter:
        """Router delivering inbound events at ``path`` to ``handle(call: Call)``."""
        return create_call_router(handle, path=path, config=self._config)

