"""Shared validation utilities for from_dict / from_env parsing."""

from collections.abc import Mapping

from memstream.errors import InvalidArgumentError


def as_str_object_dict(value: object, *, field_name: str) -> dict[str, object]:
    """Validate and normalize a mapping value into ``dict[str, object]``."""
    if not isinstance(value, Mapping):
        msg = f"{field_name} must be a mapping."
        raise InvalidArgumentError(msg)
    return {str(key): item for key, item in value.items()}


def optional_string(value: object, *, field_name: str) -> str | None:
    """Validate an optional string field."""
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"{field_name} must be a string or None."
        raise InvalidArgumentError(msg)
    return value


def require_non_negative_int(value: object, *, field_name: str) -> int:
    """Validate a required non-negative integer field (rejects booleans)."""
    if not isinstance(value, int) or isinstance(value, bool):
        msg = f"{field_name} must be an int."
        raise InvalidArgumentError(msg)
    if value < 0:
        msg = f"{field_name} must be >= 0."
        raise InvalidArgumentError(msg)
    return value


def parse_int_string(raw: str, *, field_name: str) -> int:
    """Parse an integer from an environment-style string value."""
    try:
        return int(raw.strip())
    except ValueError:
        msg = f"{field_name} must be an integer, got {raw!r}."
        raise InvalidArgumentError(msg) from None
