"""High-level API for the PPTP client.

Thin wrappers around LifecycleManager for callers that just want the
tunnel up or down.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from .common.logging import get_logger
from .manager import LifecycleManager
from .models import StartOutcome
from .parameters import MappingParameterSource, ParameterSource
from .settings import ClientSettings

logger = get_logger(__name__)


def start_pptp_client(
    source: ParameterSource, settings: ClientSettings | None = None
) -> StartOutcome:
    """Start the PPTP client from the given parameters.

    Args:
        source: Settings store holding the pptp_client_* parameters
        settings: Filesystem layout; the gateway defaults if omitted

    Returns:
        StartOutcome: STARTED, or ALREADY_RUNNING if the tunnel exists

    Raises:
        StartError: If the client could not be started; nothing is left behind

    Example:
        >>> source = MappingParameterSource({
        ...     "pptp_client_srvip": "vpn.example.com",
        ...     "pptp_client_username": "alice",
        ...     "pptp_client_passwd": "secret",
        ... })
        >>> start_pptp_client(source)
        <StartOutcome.STARTED: 'started'>
    """
    return LifecycleManager(source, settings).start()


def stop_pptp_client(settings: ClientSettings | None = None) -> None:
    """Stop the PPTP client and remove its scaffolding. Never raises."""
    # Teardown reads no parameters
    LifecycleManager(MappingParameterSource(), settings).stop()


@contextmanager
def managed_pptp_client(
    source: ParameterSource, settings: ClientSettings | None = None
) -> Iterator[LifecycleManager]:
    """Context manager that keeps the PPTP client up for its body.

    Example:
        >>> with managed_pptp_client(source) as client:
        ...     print(client.status()["state"])
        running
    """
    manager = LifecycleManager(source, settings)
    outcome = manager.start()
    logger.info("Managed PPTP client entered", outcome=outcome.value)
    try:
        yield manager
    finally:
        manager.stop()
