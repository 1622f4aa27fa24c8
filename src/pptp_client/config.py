"""Renders connection parameters into a pppd options file."""

import os
import tempfile
from pathlib import Path

from .common.exceptions import (
    MissingCredentialsError,
    MissingParameterError,
    ScaffoldingError,
)
from .common.logging import get_logger
from .common.utils import mask_sensitive_data
from .models import ConfigArtifact, ConnectionParameters, EncryptionMode, PeerDns
from .settings import ClientSettings

logger = get_logger(__name__)

ENCRYPTION_DIRECTIVES: dict[EncryptionMode, tuple[str, ...]] = {
    EncryptionMode.NONE: ("nomppe",),
    EncryptionMode.REQUIRE_128: ("nomppe-40", "require-mppe-128"),
    EncryptionMode.REQUIRE: ("require-mppe",),
    EncryptionMode.DEFAULT: (),
}


class ConfigMaterializer:
    """Builds the options file consumed by the tunnel process.

    Directive order is fixed: link and auth policy first, then keepalive
    and persistence, the plugin and server, and the per-connection
    directives last. The custom options string always ends the file.
    """

    def __init__(self, settings: ClientSettings | None = None):
        self.settings = settings or ClientSettings()

    def render(self, params: ConnectionParameters) -> ConfigArtifact:
        """Render params to options text, noting missing required fields."""
        settings = self.settings
        missing: list[str] = []

        if params.server is None:
            missing.append("server")

        lines = [
            "lock",
            "noauth",
            "refuse-eap",
            "lcp-echo-failure 3",
            "lcp-echo-interval 2",
            "maxfail 0",
            "persist",
            "plugin pptp.so",
            f"pptp_server {params.server or ''}",
        ]

        if params.default_route:
            lines.append("defaultroute")
        if params.peer_dns is not PeerDns.DISABLED:
            lines.append("usepeerdns")

        lines.extend(
            [
                "idle 0",
                f"ip-up-script {settings.script_path('ip-up')}",
                f"ip-down-script {settings.script_path('ip-down')}",
                f"ipparam {settings.ipparam}",
            ]
        )

        mtu = settings.default_mtu
        if params.mtu_enable and params.mtu is not None:
            mtu = params.mtu
        lines.append(f"mtu {mtu}")

        # MRU is only written while the enable flag is clear
        if not params.mru_enable:
            mru = params.mru if params.mru is not None else settings.default_mru
            lines.append(f"mru {mru}")

        if params.username is None:
            missing.append("username")
        else:
            lines.append(f"name {params.username}")

        if params.password is None:
            missing.append("password")
        else:
            lines.append(f"password {params.password}")

        lines.extend(ENCRYPTION_DIRECTIVES[params.encryption])
        lines.append("nomppe-stateful" if params.stateless else "mppe-stateful")
        lines.append(f"unit {params.wan_proto.ppp_unit}")
        lines.append(params.custom)

        return ConfigArtifact(text="\n".join(lines) + "\n", missing=tuple(missing))

    def materialize(self, params: ConnectionParameters, destination: Path) -> Path:
        """Write the options file for params to destination.

        Nothing is written unless every required field is present, and the
        file only appears at destination once fully written.

        Raises:
            MissingCredentialsError: If username or password is absent
            MissingParameterError: If the server address is absent
            ScaffoldingError: If the file cannot be written
        """
        artifact = self.render(params)
        destination = Path(destination)

        if not artifact.complete:
            credentials = [f for f in artifact.missing if f in ("username", "password")]
            logger.error(
                "Required connection parameters missing",
                missing=list(artifact.missing),
            )
            if credentials:
                raise MissingCredentialsError(list(artifact.missing))
            raise MissingParameterError(list(artifact.missing))

        try:
            fd, temp_path = tempfile.mkstemp(
                dir=destination.parent, prefix=f".{destination.name}."
            )
        except OSError as e:
            raise ScaffoldingError(f"Cannot create options file in {destination.parent}: {e}") from e

        try:
            with os.fdopen(fd, "w") as f:
                f.write(artifact.text)
            os.chmod(temp_path, 0o600)
            os.replace(temp_path, destination)
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            if isinstance(e, OSError):
                raise ScaffoldingError(f"Failed to write options file: {e}") from e
            raise

        logger.info(
            "Options file written",
            path=str(destination),
            server=params.server,
            username=params.username,
            password=mask_sensitive_data(params.password),
            lines=len(artifact.lines),
        )
        return destination
