"""Custom exceptions for the PPTP client lifecycle manager."""


class PPTPClientError(Exception):
    """Base exception for all PPTP client errors."""
    pass


class ConfigurationError(PPTPClientError):
    """Raised when settings or parameter values are invalid."""
    pass


class StartError(PPTPClientError):
    """Raised when the client cannot be started.

    By the time a StartError reaches the caller, teardown has already run.
    """
    pass


class ScaffoldingError(StartError):
    """Raised when the working directory or a symlink cannot be created."""
    pass


class MissingParameterError(StartError):
    """Raised when a required connection parameter is absent."""

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = list(fields)
        super().__init__(message or f"Missing required parameters: {', '.join(self.fields)}")


class MissingCredentialsError(MissingParameterError):
    """Raised when the username and/or password is absent."""
    pass


class InvalidParameterError(StartError, ConfigurationError):
    """Raised when a parameter value cannot be interpreted."""
    pass


class SpawnError(StartError):
    """Raised when the tunnel process cannot be spawned."""
    pass
