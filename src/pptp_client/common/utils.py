"""Utility functions for the PPTP client."""

from typing import Any


def validate_non_empty_string(value: str, field_name: str) -> str:
    """Validate that a string is not empty or only whitespace.

    Args:
        value: String value to validate
        field_name: Name of the field for error messages

    Returns:
        Stripped string value

    Raises:
        ValueError: If string is empty or only whitespace
    """
    if not value or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value.strip()


def validate_file_name(value: str, field_name: str) -> str:
    """Validate a bare file name (no directory separators)."""
    value = validate_non_empty_string(value, field_name)
    if "/" in value or value in (".", ".."):
        raise ValueError(f"{field_name} must be a bare file name")
    return value


def mask_sensitive_data(
    value: str | None, mask_char: str = "*", show_chars: int = 0
) -> str:
    """Mask sensitive data for logging.

    Args:
        value: Sensitive string to mask (e.g., password)
        mask_char: Character to use for masking
        show_chars: Number of characters to show at the end

    Returns:
        Masked string safe for logging
    """
    if not value:
        return "<None>"

    if len(value) <= show_chars:
        return mask_char * len(value)

    masked_length = len(value) - show_chars
    return mask_char * masked_length + value[len(value) - show_chars:]


def sanitize_log_data(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize dictionary data for safe logging by masking sensitive fields."""
    sensitive_fields = {"passwd", "password", "secret"}

    sanitized = {}
    for key, value in data.items():
        if any(sensitive_field in key.lower() for sensitive_field in sensitive_fields):
            sanitized[key] = mask_sensitive_data(str(value) if value else None)
        else:
            sanitized[key] = value

    return sanitized
