import json
import logging
from typing import Any, Iterable, Union

from config import Settings
from core.profile_registry import ProfileRegistry
from core.validator import MalformedInputError, PresencePolicy, RequiredFieldValidator, ValidationResult

logger = logging.getLogger("validation_service")


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------
def parse_document(raw: Union[bytes, str]) -> Any:
    """Parse a raw request body into a JSON value; unparseable input is malformed."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError("Request body is not valid UTF-8") from e
    if not raw.strip():
        raise MalformedInputError("Request body is empty")
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Request body is not valid JSON: {e.msg} at line {e.lineno} column {e.colno}") from e
    except RecursionError as e:
        raise MalformedInputError("Request body is nested too deeply") from e


def policy_from_settings(settings: Settings) -> PresencePolicy:
    return PresencePolicy(
        null_is_missing=settings.validation.null_is_missing,
        empty_string_is_missing=settings.validation.empty_string_is_missing,
    )


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------
class ValidationService:
    """Glue between HTTP handlers, the profile registry and the validator.

    Logging lives here; the validator itself stays silent.
    """

    def __init__(self, registry: ProfileRegistry, policy: PresencePolicy) -> None:
        self.registry = registry
        self.validator = RequiredFieldValidator(policy)

    def check(self, document: Any, required_fields: Iterable[str], label: str = "adhoc") -> ValidationResult:
        try:
            result = self.validator.validate(document, required_fields)
        except MalformedInputError as e:
            logger.warning(f"[{label}] malformed input: {e}")
            raise
        if result.valid:
            logger.info(f"[{label}] validation passed")
        else:
            logger.warning(f"[{label}] missing field(s): {', '.join(result.missing_fields)}")
        return result

    def check_profile(self, name: str, document: Any) -> ValidationResult:
        profile = self.registry.get(name)
        return self.check(document, profile.required, label=name)

    def check_raw(self, name: str, raw_body: Union[bytes, str]) -> ValidationResult:
        # Resolve the profile first so an unknown name wins over a bad body.
        profile = self.registry.get(name)
        try:
            document = parse_document(raw_body)
        except MalformedInputError as e:
            logger.warning(f"[{name}] malformed input: {e}")
            raise
        return self.check(document, profile.required, label=name)


def build_service(settings: Settings) -> ValidationService:
    registry = ProfileRegistry()
    registry.load_file(settings.validation.profiles_path)
    return ValidationService(registry, policy_from_settings(settings))
