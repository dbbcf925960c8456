"""
voicekit: client library for a voice telephony platform.

Keep package import side-effects to a minimum; the public entrypoints live in
``voicekit.telephony``.
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "shared",
    "telephony",
]
