"""PPTP client lifecycle manager for gateway devices."""

from .api import managed_pptp_client, start_pptp_client, stop_pptp_client
from .common.exceptions import (
    ConfigurationError,
    InvalidParameterError,
    MissingCredentialsError,
    MissingParameterError,
    PPTPClientError,
    ScaffoldingError,
    SpawnError,
    StartError,
)
from .common.logging import get_logger, setup_logging
from .config import ConfigMaterializer
from .manager import LifecycleManager
from .models import (
    ClientState,
    ConfigArtifact,
    ConnectionParameters,
    EncryptionMode,
    PeerDns,
    ScaffoldingLink,
    StartOutcome,
    WanProto,
)
from .parameters import MappingParameterSource, ParameterSource
from .process import Launcher, ProcessProbe, signal_all
from .scaffolding import LinkWirer
from .settings import ClientSettings
from .teardown import Teardown

# Setup logging on package initialization
setup_logging(level="INFO")

logger = get_logger(__name__)

__version__ = "0.1.0"


__all__ = [
    # High-level API
    "start_pptp_client",
    "stop_pptp_client",
    "managed_pptp_client",
    # Lifecycle
    "LifecycleManager",
    "ClientState",
    "StartOutcome",
    # Components
    "ProcessProbe",
    "LinkWirer",
    "ConfigMaterializer",
    "Launcher",
    "Teardown",
    "signal_all",
    # Models and configuration
    "ClientSettings",
    "ConnectionParameters",
    "ConfigArtifact",
    "ScaffoldingLink",
    "EncryptionMode",
    "PeerDns",
    "WanProto",
    "ParameterSource",
    "MappingParameterSource",
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
]
