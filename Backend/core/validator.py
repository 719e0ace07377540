"""
Required-field validation for parsed JSON documents.

The validator only looks at top-level keys. It never raises for a document
that is merely missing fields: that outcome is returned as a ValidationResult.
Only input that cannot be checked at all (not a JSON object) raises.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple


class MalformedInputError(ValueError):
    """The document is not a JSON object, so field presence can't be checked."""


_JSON_TYPE_NAMES = {
    list: "array",
    tuple: "array",
    str: "string",
    bool: "boolean",
    int: "number",
    float: "number",
    type(None): "null",
}


def json_type_name(value: Any) -> str:
    return _JSON_TYPE_NAMES.get(type(value), type(value).__name__)


@dataclass(frozen=True)
class PresencePolicy:
    """What counts as a present value.

    null_is_missing: a key holding JSON null is reported as missing.
    empty_string_is_missing: a key holding "" (or only whitespace) is reported as missing.
    """

    null_is_missing: bool = True
    empty_string_is_missing: bool = False

    def is_present(self, document: Mapping, name: str) -> bool:
        if name not in document:
            return False
        value = document[name]
        if value is None:
            return not self.null_is_missing
        if self.empty_string_is_missing and isinstance(value, str) and not value.strip():
            return False
        return True


DEFAULT_POLICY = PresencePolicy()


@dataclass(frozen=True)
class ValidationResult:
    missing_fields: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def missing(cls, names: Iterable[str]) -> "ValidationResult":
        return cls(tuple(names))

    @property
    def valid(self) -> bool:
        return not self.missing_fields

    def message(self) -> str:
        if self.valid:
            return "Validation Success"
        return "Missing required field(s): " + ", ".join(self.missing_fields)

    def to_dict(self) -> Dict[str, Any]:
        return {"valid": self.valid, "missing_fields": list(self.missing_fields)}


def _check_field_names(required_fields: Iterable[str]) -> List[str]:
    if isinstance(required_fields, (str, bytes)):
        raise TypeError("required_fields must be a sequence of field names, not a single string")
    names = list(required_fields)
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"required field names must be strings, got {type(name).__name__}")
    return names


class RequiredFieldValidator:
    """Checks that every required top-level field of a JSON object is present.

    All missing fields are reported at once, in the order they were declared;
    a name declared twice is reported once.
    """

    def __init__(self, policy: PresencePolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def validate(self, document: Any, required_fields: Iterable[str]) -> ValidationResult:
        if not isinstance(document, Mapping):
            raise MalformedInputError(
                f"Expected a JSON object at the top level, got {json_type_name(document)}"
            )
        names = _check_field_names(required_fields)

        missing: List[str] = []
        for name in names:
            if name in missing:
                continue
            if not self.policy.is_present(document, name):
                missing.append(name)
        return ValidationResult.missing(missing) if missing else ValidationResult.ok()


def validate(
    document: Any,
    required_fields: Iterable[str],
    policy: PresencePolicy = DEFAULT_POLICY,
) -> ValidationResult:
    return RequiredFieldValidator(policy).validate(document, required_fields)
