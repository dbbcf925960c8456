"""
Inbound call webhooks.

Keep import side-effect free.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from voicekit.telephony.webhooks.responder import CallResponder  # noqa: F401
    from voicekit.telephony.webhooks.router import create_call_router  # noqa: F401
