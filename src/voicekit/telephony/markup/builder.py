"""
Call-flow document builder.

Verbs are appended in call order (the platform executes them sequentially
on the live call) and serialized on demand by ``build()``::

    xml = (
        DocumentBuilder()
        .say("Welcome")
        .get_digits("Press 1 for sales", num_digits=1, say={"voice": "man"})
        .redirect("https://example.com/next")
        .build()
    )
"""

from __future__ import annotations

from typing import Any, Mapping

from voicekit.shared.logging import get_logger
from voicekit.telephony.interface import (
    MissingUtteranceError,
    ValidationError,
    Violation,
    ViolationKind,
)
from voicekit.telephony.markup.verbs import (
    DEFAULT_VOICE,
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
from voicekit.telephony.validation import check_url

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
ROOT_TAG = "Response"


def _check_optional_url(field: str, value: Any) -> None:
    if value is not None:
        check_url(field, value)


def _select_utterance(
    verb: str,
    say: Mapping[str, Any] | None,
    play: Mapping[str, Any] | None,
) -> tuple[str, Mapping[str, Any]]:
    if say is not None and play is not None:
        raise ValidationError(
            [
                Violation(
                    "utterance",
                    ViolationKind.CONFLICT,
                    f"must be either say or play for {verb}, not both",
                )
            ]
        )
    if play is not None:
        return "play", play
    if say is not None:
        return "say", say
    raise MissingUtteranceError(verb)


def _make_say(text: Any, options: Mapping[str, Any]) -> Say:
    return Say(
        text=str(text),
        voice=options.get("voice") or DEFAULT_VOICE,
        play_beep=bool(options.get("play_beep", options.get("playBeep")) or False),
    )


def _make_play(url: Any) -> Play:
    check_url("url", url)
    return Play(url=url)


class DocumentBuilder:
    """Accumulates verbs and renders them as a call-flow document.

    Every construction method returns the builder itself. A failing method
    appends nothing and leaves earlier verbs untouched.
    """

    def __init__(self) -> None:
        self._verbs: list[Verb] = []

    def __len__(self) -> int:
        return len(self._verbs)

    @property
    def verbs(self) -> tuple[Verb, ...]:
        return tuple(self._verbs)

    def _append(self, verb: Verb) -> DocumentBuilder:
        self._verbs.append(verb)
        return self

    def say(self, text: str, *, voice: str | None = None, play_beep: bool = False) -> DocumentBuilder:
        return self._append(_make_say(text, {"voice": voice, "play_beep": play_beep}))

    def play(self, url: str) -> DocumentBuilder:
        return self._append(_make_play(url))

    def get_digits(
        self,
        text: str,
        *,
        timeout: int | str | None = None,
        finish_on_key: str | None = None,
        num_digits: int | str | None = None,
        callback_url: str | None = None,
        say: Mapping[str, Any] | None = None,
        play: Mapping[str, Any] | None = None,
    ) -> DocumentBuilder:
        """Collect digits, prompting with ``text``.

        Exactly one of ``say``/``play`` selects the prompt. With ``say`` the
        text is spoken; with ``play`` the mapping's ``url`` is played, falling
        back to ``text`` itself.
        """
        kind, options = _select_utterance(CollectDigits.tag, say, play)
        _check_optional_url("callback_url", callback_url)

        utterance: Utterance
        if kind == "play":
            utterance = _make_play(options.get("url") or text)
        else:
            utterance = _make_say(text, options)

        return self._append(
            CollectDigits(
                utterance=utterance,
                timeout=timeout,
                finish_on_key=finish_on_key,
                num_digits=num_digits,
                callback_url=callback_url,
            )
        )

    def dial(
        self,
        *,
        phone_numbers: str | None = None,
        record: bool = False,
        caller_id: str | None = None,
        sequential: bool | None = None,
        ring_back_tone: str | None = None,
        max_duration: int | str | None = None,
    ) -> DocumentBuilder:
        _check_optional_url("ring_back_tone", ring_back_tone)
        return self._append(
            Dial(
                phone_numbers=phone_numbers,
                record=bool(record),
                caller_id=caller_id,
                sequential=sequential,
                ring_back_tone=ring_back_tone,
                max_duration=max_duration,
            )
        )

    def conference(self) -> DocumentBuilder:
        return self._append(Conference())

    def reject(self) -> DocumentBuilder:
        return self._append(Reject())

    def redirect(self, url: str) -> DocumentBuilder:
        check_url("url", url)
        return self._append(Redirect(url=url))

    def enqueue(self, *, hold_music: str | None = None, name: str | None = None) -> DocumentBuilder:
        _check_optional_url("hold_music", hold_music)
        return self._append(Enqueue(hold_music=hold_music, name=name))

    def dequeue(self, *, phone_number: str | None = None, name: str | None = None) -> DocumentBuilder:
        return self._append(Dequeue(phone_number=phone_number, name=name))

    def record(
        self,
        *,
        terminal: bool = False,
        finish_on_key: str | None = None,
        max_length: int | str | None = None,
        timeout: int | str | None = None,
        trim_silence: bool | None = None,
        play_beep: bool | None = None,
        callback_url: str | None = None,
        say: Mapping[str, Any] | None = None,
        play: Mapping[str, Any] | None = None,
    ) -> DocumentBuilder:
        """Record the caller.

        ``terminal=True`` appends a bare Record and ignores every other
        option. Otherwise the prompt comes from ``say["text"]`` or
        ``play["url"]``.
        """
        if terminal:
            return self._append(Record(terminal=True))

        kind, options = _select_utterance(Record.tag, say, play)
        _check_optional_url("callback_url", callback_url)

        utterance: Utterance
        if kind == "play":
            utterance = _make_play(options.get("url"))
        else:
            text = options.get("text")
            if text is None or str(text) == "":
                raise ValidationError(
                    [Violation("say.text", ViolationKind.PRESENCE, "is required")]
                )
            utterance = _make_say(text, options)

        return self._append(
            Record(
                terminal=False,
                utterance=utterance,
                finish_on_key=finish_on_key,
                max_length=max_length,
                timeout=timeout,
                trim_silence=trim_silence,
                play_beep=play_beep,
                callback_url=callback_url,
            )
        )

    def build(self) -> str:
        """Serialize the verbs, in order, as a complete document."""
        body = "".join(verb.render() for verb in self._verbs)
        logger.debug("Call-flow document built", extra={"verb_count": len(self._verbs)})
        return f"{XML_DECLARATION}<{ROOT_TAG}>{body}</{ROOT_TAG}>"
