"""Common utilities and shared functionality."""

from .exceptions import (
    ConfigurationError,
    InvalidParameterError,
    MissingCredentialsError,
    MissingParameterError,
    PPTPClientError,
    ScaffoldingError,
    SpawnError,
    StartError,
)
from .logging import get_logger, setup_logging
from .utils import (
    mask_sensitive_data,
    sanitize_log_data,
    validate_file_name,
    validate_non_empty_string,
)

__all__ = [
    # Exceptions
    "PPTPClientError",
    "ConfigurationError",
    "StartError",
    "ScaffoldingError",
    "MissingParameterError",
    "MissingCredentialsError",
    "InvalidParameterError",
    "SpawnError",
    # Logging
    "get_logger",
    "setup_logging",
    # Utils
    "validate_non_empty_string",
    "validate_file_name",
    "mask_sensitive_data",
    "sanitize_log_data",
]
