"""
Call-flow markup: verb model and document builder.
"""

from voicekit.telephony.markup.builder import DocumentBuilder
from voicekit.telephony.markup.verbs import (
    CollectDigits,
    Conference,
    Dequeue,
    Dial,
    Enqueue,
    Play,
    Record,
    Redirect,
    Reject,
    Say,
    Utterance,
    Verb,
)

__all__ = [
    "DocumentBuilder",
    "CollectDigits",
    "Conference",
    "Dequeue",
    "Dial",
    "Enqueue",
    "Play",
    "Record",
    "Redirect",
    "Reject",
    "Say",
    "Utterance",
    "Verb",
]
