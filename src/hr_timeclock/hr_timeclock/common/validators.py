from __future__ import annotations

from typing import Any, MutableMapping

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_int(value: Any, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number


def collect_text(
    errors: MutableMapping[str, str],
    key: str,
    value: Any,
    label: str,
    *,
    required: bool = True,
) -> str:
    """Stripped text for a form field; problems are recorded in ``errors[key]``."""
    if value is None:
        value = ""
    if not isinstance(value, str):
        errors[key] = f"{label} must be text"
        return ""
    cleaned = value.strip()
    if required and not cleaned:
        errors[key] = f"{label} is required"
    return cleaned
