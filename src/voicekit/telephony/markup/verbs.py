"""
Call-control verbs.

Each verb is a frozen dataclass whose ``tag`` is the element name the
platform expects. ``render()`` produces the verb's XML fragment; attribute
values and text content are always escaped, and attributes left as ``None``
are omitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union, cast

from voicekit.telephony.interface import MissingUtteranceError

DEFAULT_VOICE = "woman"


def xml_escape(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def _render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return xml_escape(str(value))


def _element(tag: str, attrs: list[tuple[str, Any]], content: str = "") -> str:
    rendered = "".join(
        f' {name}="{_render_value(value)}"' for name, value in attrs if value is not None
    )
    if not content:
        return f"<{tag}{rendered}/>"
    return f"<{tag}{rendered}>{content}</{tag}>"


@dataclass(frozen=True)
class Say:
    tag: ClassVar[str] = "Say"

    text: str
    voice: str = DEFAULT_VOICE
    play_beep: bool = False

    def render(self) -> str:
        return _element(
            self.tag,
            [("voice", self.voice), ("playBeep", self.play_beep)],
            xml_escape(self.text),
        )


@dataclass(frozen=True)
class Play:
    tag: ClassVar[str] = "Play"

    url: str

    def render(self) -> str:
        return _element(self.tag, [("url", self.url)])


Utterance = Union[Say, Play]


def _require_utterance(verb: str, utterance: Any) -> None:
    if not isinstance(utterance, (Say, Play)):
        raise MissingUtteranceError(verb)


@dataclass(frozen=True)
class CollectDigits:
    """Prompt the caller and collect DTMF digits.

    Must wrap exactly one Say or Play, which is the prompt.
    """

    tag: ClassVar[str] = "GetDigits"

    utterance: Utterance
    timeout: int | str | None = None
    finish_on_key: str | None = None
    num_digits: int | str | None = None
    callback_url: str | None = None

    def __post_init__(self) -> None:
        _require_utterance(self.tag, self.utterance)

    def render(self) -> str:
        return _element(
            self.tag,
            [
                ("timeout", self.timeout),
                ("finishOnKey", self.finish_on_key),
                ("numDigits", self.num_digits),
                ("callbackUrl", self.callback_url),
            ],
            self.utterance.render(),
        )


@dataclass(frozen=True)
class Dial:
    tag: ClassVar[str] = "Dial"

    phone_numbers: str | None = None
    record: bool = False
    caller_id: str | None = None
    sequential: bool | None = None
    ring_back_tone: str | None = None
    max_duration: int | str | None = None

    def render(self) -> str:
        return _element(
            self.tag,
            [
                ("phoneNumbers", self.phone_numbers),
                ("record", self.record),
                ("callerId", self.caller_id),
                ("sequential", self.sequential),
                ("ringBackTone", self.ring_back_tone),
                ("maxDuration", self.max_duration),
            ],
        )


@dataclass(frozen=True)
class Conference:
    tag: ClassVar[str] = "Conference"

    def render(self) -> str:
        return _element(self.tag, [])


@dataclass(frozen=True)
class Reject:
    tag: ClassVar[str] = "Reject"

    def render(self) -> str:
        return _element(self.tag, [])


@dataclass(frozen=True)
class Redirect:
    tag: ClassVar[str] = "Redirect"

    url: str

    def render(self) -> str:
        # The target URL is element content, not an attribute.
        return _element(self.tag, [], xml_escape(self.url))


@dataclass(frozen=True)
class Enqueue:
    tag: ClassVar[str] = "Enqueue"

    hold_music: str | None = None
    name: str | None = None

    def render(self) -> str:
        return _element(self.tag, [("holdMusic", self.hold_music), ("name", self.name)])


@dataclass(frozen=True)
class Dequeue:
    tag: ClassVar[str] = "Dequeue"

    phone_number: str | None = None
    name: str | None = None

    def render(self) -> str:
        return _element(self.tag, [("phoneNumber", self.phone_number), ("name", self.name)])


@dataclass(frozen=True)
class Record:
    """Record the caller.

    A terminal Record is bare: no attributes, no prompt. Otherwise it must
    wrap exactly one Say or Play.
    """

    tag: ClassVar[str] = "Record"

    terminal: bool = False
    utterance: Utterance | None = None
    finish_on_key: str | None = None
    max_length: int | str | None = None
    timeout: int | str | None = None
    trim_silence: bool | None = None
    play_beep: bool | None = None
    callback_url: str | None = None

    def __post_init__(self) -> None:
        if not self.terminal:
            _require_utterance(self.tag, self.utterance)

    def render(self) -> str:
        if self.terminal:
            return _element(self.tag, [])
        utterance = cast(Utterance, self.utterance)
        return _element(
            self.tag,
            [
                ("finishOnKey", self.finish_on_key),
                ("maxLength", self.max_length),
                ("timeout", self.timeout),
                ("trimSilence", self.trim_silence),
                ("playBeep", self.play_beep),
                ("callbackUrl", self.callback_url),
            ],
            utterance.render(),
        )


Verb = Union[
    Say,
    Play,
    CollectDigits,
    Dial,
    Conference,
    Reject,
    Redirect,
    Enqueue,
    Dequeue,
    Record,
]
