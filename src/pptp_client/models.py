"""Data models for the PPTP client."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common.exceptions import InvalidParameterError
from .parameters import ParameterSource

# Per-field settings keys, relative to the key prefix
SERVER_KEY = "srvip"
DEFAULT_ROUTE_KEY = "dfltroute"
PEER_DNS_KEY = "peerdns"
MTU_ENABLE_KEY = "mtuenable"
MTU_KEY = "mtu"
MRU_ENABLE_KEY = "mruenable"
MRU_KEY = "mru"
USERNAME_KEY = "username"
PASSWORD_KEY = "passwd"
ENCRYPTION_KEY = "crypt"
STATELESS_KEY = "stateless"
CUSTOM_KEY = "custom"

# Unprefixed: owned by the WAN configuration, not by this client
WAN_PROTO_KEY = "wan_proto"


class ClientState(str, Enum):
    """Lifecycle manager states."""

    IDLE = "idle"
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"


class StartOutcome(str, Enum):
    """Successful results of a start request."""

    STARTED = "started"
    ALREADY_RUNNING = "already_running"


class PeerDns(str, Enum):
    """Whether to accept DNS servers from the peer.

    Stored as an integer: 1 disables, -1 enables, anything else is unset.
    Unset behaves like enabled.
    """

    ENABLED = "enabled"
    DISABLED = "disabled"
    DEFAULT = "default"

    @classmethod
    def from_int(cls, value: int) -> "PeerDns":
        if value == 1:
            return cls.DISABLED
        if value == -1:
            return cls.ENABLED
        return cls.DEFAULT


class EncryptionMode(str, Enum):
    """MPPE policy, stored as 1/2/3 with anything else meaning no preference."""

    NONE = "none"
    REQUIRE_128 = "require_128"
    REQUIRE = "require"
    DEFAULT = "default"

    @classmethod
    def from_int(cls, value: int) -> "EncryptionMode":
        return {1: cls.NONE, 2: cls.REQUIRE_128, 3: cls.REQUIRE}.get(value, cls.DEFAULT)


class WanProto(str, Enum):
    """WAN protocol classes that matter for picking the ppp unit."""

    PPPOE = "pppoe"
    PPTP = "pptp"
    L2TP = "l2tp"
    OTHER = "other"

    @classmethod
    def from_value(cls, value: str | None) -> "WanProto":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER

    @property
    def ppp_unit(self) -> int:
        """ppp0 belongs to the WAN when the WAN itself is PPP based."""
        return 0 if self is WanProto.OTHER else 1


class ScaffoldingLink(BaseModel):
    """One symlink of the scaffolding: link_path -> target."""

    model_config = ConfigDict(frozen=True)

    target: Path
    link_path: Path


def _optional(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def _optional_int(source: ParameterSource, key: str) -> int | None:
    value = _optional(source.get(key))
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise InvalidParameterError(f"{key} is not an integer: {value!r}") from e


class ConnectionParameters(BaseModel):
    """Snapshot of the connection settings taken at start time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    server: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)
    default_route: bool = False
    peer_dns: PeerDns = PeerDns.DEFAULT
    mtu_enable: bool = False
    mtu: int | None = Field(default=None, ge=128, le=16384)
    mru_enable: bool = False
    mru: int | None = Field(default=None, ge=128, le=16384)
    encryption: EncryptionMode = EncryptionMode.DEFAULT
    stateless: bool = False
    custom: str = ""
    wan_proto: WanProto = WanProto.OTHER

    @field_validator("server", "username", "password")
    @classmethod
    def blank_is_absent(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    @classmethod
    def from_source(
        cls, source: ParameterSource, key_prefix: str = "pptp_client_"
    ) -> "ConnectionParameters":
        """Read every connection parameter from source.

        Raises:
            InvalidParameterError: If an MTU or MRU override that would be
                written is not an integer in range
        """

        def key(name: str) -> str:
            return f"{key_prefix}{name}"

        # Overrides are only read when they will be written
        mtu_enable = bool(source.get_int(key(MTU_ENABLE_KEY)))
        mru_enable = bool(source.get_int(key(MRU_ENABLE_KEY)))
        mtu = _optional_int(source, key(MTU_KEY)) if mtu_enable else None
        mru = None if mru_enable else _optional_int(source, key(MRU_KEY))
        try:
            return cls(
                server=source.get(key(SERVER_KEY)),
                username=source.get(key(USERNAME_KEY)),
                password=source.get(key(PASSWORD_KEY)),
                default_route=bool(source.get_int(key(DEFAULT_ROUTE_KEY))),
                peer_dns=PeerDns.from_int(source.get_int(key(PEER_DNS_KEY))),
                mtu_enable=mtu_enable,
                mtu=mtu,
                mru_enable=mru_enable,
                mru=mru,
                encryption=EncryptionMode.from_int(source.get_int(key(ENCRYPTION_KEY))),
                stateless=bool(source.get_int(key(STATELESS_KEY))),
                custom=source.get(key(CUSTOM_KEY)) or "",
                wan_proto=WanProto.from_value(source.get(WAN_PROTO_KEY)),
            )
        except ValueError as e:
            # pydantic.ValidationError subclasses ValueError
            raise InvalidParameterError(str(e)) from e


class ConfigArtifact(BaseModel):
    """Rendered options text and the required fields that were missing."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(repr=False)
    missing: tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.missing

    @property
    def lines(self) -> list[str]:
        return self.text.splitlines()
