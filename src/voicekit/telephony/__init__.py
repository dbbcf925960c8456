"""
Telephony package: outbound call control, inbound call events and the
call-flow markup builder.

Keep package import side-effects to a minimum to avoid circular imports.
Do not import factory/client here.
"""

__all__ = [
    "interface",
    "config",
    "validation",
    "events",
    "client",
    "factory",
    "markup",
    "webhooks",
]
