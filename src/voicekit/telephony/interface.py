"""
Error taxonomy and shared value types of the telephony package.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class ViolationKind(str, Enum):
    """Kinds of field-level constraint violations."""

    PRESENCE = "presence"
    FORMAT = "format"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class Violation:
    """A single field-level constraint violation."""

    field: str
    kind: ViolationKind
    message: str

    def __str__(self) -> str:
        return f"{self.field} {self.message}"


class VoiceError(Exception):
    """Base exception for voice library errors."""

    def __init__(self, message: str, code: str = "VOICE_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ValidationError(VoiceError):
    """Caller supplied malformed or missing values.

    Carries every violation found for one call, so the caller can inspect
    them individually; the message joins them all.
    """

    def __init__(
        self,
        violations: Iterable[Violation] | str,
        code: str = "VALIDATION_ERROR",
    ) -> None:
        if isinstance(violations, str):
            violations = [Violation(field="", kind=ViolationKind.FORMAT, message=violations)]
        self.violations: tuple[Violation, ...] = tuple(violations)
        message = " ".join(str(v).strip() for v in self.violations)
        super().__init__(message, code)

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class MissingUtteranceError(ValidationError):
    """A verb that needs one nested Say or Play was finalized without one."""

    def __init__(self, verb: str) -> None:
        super().__init__(
            [
                Violation(
                    field="utterance",
                    kind=ViolationKind.PRESENCE,
                    message=f"is required: {verb} needs either say or play",
                )
            ],
            code="MISSING_UTTERANCE",
        )
        self.verb = verb


class TransportError(VoiceError):
    """The platform rejected a request, or the exchange itself failed."""

    def __init__(
        self,
        detail: Any,
        status_code: int | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(str(detail), "TRANSPORT_ERROR")
        self.detail = detail
        self.status_code = status_code
        self.response_body = response_body


class ResponseAlreadySentError(VoiceError):
    """The one-shot response of an inbound event was used twice."""

    def __init__(self, session: str | None = None) -> None:
        super().__init__(
            f"Response already sent for session {session!r}",
            "RESPONSE_ALREADY_SENT",
        )
        self.session = session
