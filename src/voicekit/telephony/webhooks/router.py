"""
FastAPI adapter for inbound call events.

The platform POSTs each call event (form-encoded or JSON). The adapter turns
it into a ``Call`` record, hands it to the application's handler and answers
the exchange with whatever the handler passes to ``call.respond``.

Usage::

    def handle(call: Call) -> None:
        xml = DocumentBuilder().say(f"Hello {call.caller}").build()
        call.respond(None, xml)

    app.include_router(create_call_router(handle, path="/voice"))
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

import anyio
import anyio.to_thread
from fastapi import APIRouter, Request, Response, status

from voicekit.shared.logging import bind_correlation_id, get_logger
from voicekit.telephony.config import VoiceConfig, get_voice_config
from voicekit.telephony.events import Call
from voicekit.telephony.webhooks.responder import CONTENT_TYPE, CallResponder

logger = get_logger(__name__)

CallHandler = Callable[[Call], Union[None, Awaitable[None]]]


class PayloadDecodeError(ValueError):
    """The inbound body could not be decoded into a flat mapping."""


async def decode_payload(request: Request) -> dict[str, Any]:
    """Decode the request body; query parameters fill in missing keys."""
    payload: dict[str, Any] = dict(request.query_params)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json":
        try:
            body = await request.json()
        except ValueError as e:
            raise PayloadDecodeError(f"Invalid JSON body: {e!s}") from e
        if not isinstance(body, dict):
            raise PayloadDecodeError("JSON body must be an object")
        payload.update(body)
    else:
        form = await request.form()
        payload.update({k: v for k, v in form.items() if isinstance(v, str)})

    return payload


def _plain(status_code: int, body: str = "") -> Response:
    return Response(content=body, status_code=status_code, media_type=CONTENT_TYPE)


async def _run_handler(handle: CallHandler, call: Call) -> None:
    if inspect.iscoroutinefunction(handle):
        await handle(call)
        return
    result = await anyio.to_thread.run_sync(handle, call)
    if inspect.isawaitable(result):
        await result


async def handle_inbound_request(
    request: Request,
    handle: CallHandler,
    config: VoiceConfig | None = None,
) -> Response:
    """Run one inbound event through ``handle`` and produce its HTTP response.

    Coroutine handlers run on the event loop; plain callables run in a worker
    thread so a blocking handler does not stall other exchanges.
    """
    cfg = config or get_voice_config()

    try:
        payload = await decode_payload(request)
    except PayloadDecodeError as e:
        logger.warning("Inbound call payload rejected", extra={"error": str(e)})
        return _plain(status.HTTP_400_BAD_REQUEST, str(e))

    responder = CallResponder(session=payload.get("sessionId"))
    call = Call.from_payload(payload, responder)

    with bind_correlation_id(call.session):
        logger.info(
            "Inbound call event received",
            extra={
                "session": call.session,
                "direction": call.direction,
                "status": call.status,
                "session_state": call.session_state,
            },
        )

        try:
            await _run_handler(handle, call)
        except Exception:
            logger.exception("Inbound call handler failed", extra={"session": call.session})
            if not responder.responded:
                return _plain(status.HTTP_500_INTERNAL_SERVER_ERROR)
            # The handler answered before failing; that answer stands.
            return responder.to_response()

        with anyio.move_on_after(cfg.respond_timeout_seconds):
            await responder.wait()

        if not responder.responded:
            logger.warning(
                "Inbound call handler never responded",
                extra={
                    "session": call.session,
                    "timeout_seconds": cfg.respond_timeout_seconds,
                },
            )
            return _plain(status.HTTP_504_GATEWAY_TIMEOUT)

        return responder.to_response()


def create_call_router(
    handle: CallHandler,
    *,
    path: str = "/",
    config: VoiceConfig | None = None,
) -> APIRouter:
    """Build a router that feeds inbound events at ``path`` to ``handle``."""
    router = APIRouter(tags=["voice"])

    @router.post(path, response_class=Response)
    async def inbound_call(request: Request) -> Response:
        return await handle_inbound_request(request, handle, config)

    return router
