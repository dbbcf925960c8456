"""
One-shot response capability for an inbound call event.
"""

from __future__ import annotations

import threading
from typing import Any

import anyio
import anyio.from_thread
from fastapi import Response

from voicekit.shared.logging import get_logger
from voicekit.telephony.interface import ResponseAlreadySentError

logger = get_logger(__name__)

CONTENT_TYPE = "text/plain"


class CallResponder:
    """Bound to exactly one inbound exchange and consumed on first use.

    ``respond`` only records the outcome; the transport turns it into the
    HTTP response once the handler has answered (see ``wait``). It may be
    called from the event loop or from an anyio worker thread.
    """

    def __init__(self, session: str | None = None) -> None:
        self._session = session
        self._lock = threading.Lock()
        self._done: anyio.Event | None = None
        self._loop_thread: int | None = None
        self._status_code: int | None = None
        self._body: str = ""

    @property
    def responded(self) -> bool:
        return self._status_code is not None

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def body(self) -> str:
        return self._body

    def respond(self, error: Any, payload: Any) -> None:
        with self._lock:
            already_sent = self.responded
            if not already_sent:
                self._status_code = 500 if error is not None else 200
                self._body = "" if payload is None else str(payload)
            done, loop_thread = self._done, self._loop_thread

        if already_sent:
            logger.warning(
                "Inbound call already responded",
                extra={"session": self._session},
            )
            raise ResponseAlreadySentError(self._session)

        if done is not None:
            if threading.get_ident() == loop_thread:
                done.set()
            else:
                anyio.from_thread.run_sync(done.set)

        if error is not None:
            logger.error(
                "Inbound call responded with error",
                extra={"session": self._session, "error": str(error)},
            )

    async def wait(self) -> None:
        with self._lock:
            if self.responded:
                return
            if self._done is None:
                self._done = anyio.Event()
                self._loop_thread = threading.get_ident()
            done = self._done
        await done.wait()

    def to_response(self) -> Response:
        if self._status_code is None:
            raise RuntimeError("No response recorded yet")
        return Response(
            content=self._body,
            status_code=self._status_code,
            media_type=CONTENT_TYPE,
        )
