"""
Predicate-based parameter validation.

A ``Validator`` maps field names to an ordered list of constraints. For each
field the first failing constraint is reported, and every field is checked,
so one call surfaces all of its problems at once.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence
from urllib.parse import urlsplit

from voicekit.telephony.interface import ValidationError, Violation, ViolationKind

PHONE_NUMBER_RE = re.compile(r"\+?[0-9]+")
_ALLOWED_URL_SCHEMES = {"http", "https"}
_WHITESPACE_OR_CONTROL_RE = re.compile(r"[\s\x00-\x1f\x7f]")


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return True


def is_phone_number(value: Any) -> bool:
    return isinstance(value, str) and PHONE_NUMBER_RE.fullmatch(value) is not None


def is_phone_number_list(value: Any) -> bool:
    """Comma separated phone numbers; each entry is checked on its own."""
    if not isinstance(value, str):
        return False
    entries = [entry.strip(" ") for entry in value.split(",")]
    return all(is_phone_number(entry) for entry in entries)


def is_url(value: Any) -> bool:
    """Accept http(s) URLs and relative references, reject anything else."""
    if not isinstance(value, str) or not value:
        return False
    if _WHITESPACE_OR_CONTROL_RE.search(value):
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if not parts.scheme:
        return True
    return parts.scheme.lower() in _ALLOWED_URL_SCHEMES and bool(parts.netloc)


@dataclass(frozen=True)
class Constraint:
    """A predicate plus the violation reported when it does not hold."""

    kind: ViolationKind
    predicate: Callable[[Any], bool]
    message: str


def required(message: str = "is required") -> Constraint:
    return Constraint(ViolationKind.PRESENCE, is_present, message)


def matches(predicate: Callable[[Any], bool], message: str) -> Constraint:
    return Constraint(ViolationKind.FORMAT, predicate, message)


class Validator:
    """Checks a parameter mapping against per-field constraints."""

    def __init__(self, constraints: Mapping[str, Sequence[Constraint]]) -> None:
        self._constraints = {name: tuple(items) for name, items in constraints.items()}

    def validate(self, params: Mapping[str, Any]) -> list[Violation]:
        violations: list[Violation] = []
        for name, constraints in self._constraints.items():
            value = params.get(name)
            for constraint in constraints:
                if not constraint.predicate(value):
                    violations.append(Violation(name, constraint.kind, constraint.message))
                    break
        return violations

    def check(self, params: Mapping[str, Any]) -> None:
        violations = self.validate(params)
        if violations:
            raise ValidationError(violations)


def check_url(field: str, value: Any) -> None:
    """Raise ValidationError unless ``value`` is an acceptable URL."""
    if not is_url(value):
        raise ValidationError(
            [Violation(field, ViolationKind.FORMAT, f"must be a valid http(s) URL, got {value!r}")]
        )


PLACE_CALL_VALIDATOR = Validator(
    {
        "call_to": [
            required(),
            matches(is_phone_number, "must not contain invalid callTo phone number"),
        ],
        "call_from": [
            required(),
            matches(is_phone_number, "must not contain invalid callFrom phone number"),
        ],
    }
)

QUEUE_STATUS_VALIDATOR = Validator(
    {
        "phone_numbers": [
            required(),
            matches(is_phone_number_list, "must contain a VALID phone number"),
        ],
    }
)
