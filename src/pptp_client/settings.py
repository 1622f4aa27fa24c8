"""Filesystem layout and fixed names used by the PPTP client."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common.utils import validate_file_name
from .models import ScaffoldingLink


class ClientSettings(BaseModel):
    """Pydantic model for where the client wires its scaffolding.

    Only one tunnel of this kind can exist at a time: the working directory
    and the process name together form its identity.
    """

    model_config = ConfigDict(
        str_strip_whitespace=True, validate_assignment=True, extra="forbid"
    )

    working_dir: Path = Field(
        default=Path("/etc/vpn"), description="Scaffolding directory (mode 0700)"
    )
    template_dir: Path = Field(
        default=Path("/rom/etc/vpn"), description="Read-only helper script templates"
    )
    helper_scripts: tuple[str, ...] = Field(
        default=("ip-down", "ip-up"), description="Helper scripts linked from templates"
    )
    stale_files: tuple[str, ...] = Field(
        default=("ip-vpn",), description="Leftovers removed before wiring"
    )
    tunnel_binary: Path = Field(
        default=Path("/usr/sbin/pppd"), description="Binary aliased as the tunnel process"
    )
    process_name: str = Field(
        default="pptpclient", description="Alias name, also the process identity"
    )
    options_filename: str = Field(default="options.vpn")
    launch_flag: str = Field(default="file", min_length=1)
    ipparam: str = Field(default="kelokepptpd", min_length=1)

    default_mtu: int = Field(default=1450, ge=128, le=16384)
    default_mru: int = Field(default=1450, ge=128, le=16384)

    key_prefix: str = Field(default="pptp_client_")

    @field_validator("process_name", "options_filename")
    @classmethod
    def validate_names(cls, v: str) -> str:
        return validate_file_name(v, "Name")

    @field_validator("helper_scripts", "stale_files")
    @classmethod
    def validate_script_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(validate_file_name(name, "Script name") for name in v)

    @property
    def binary_alias(self) -> Path:
        """Symlink through which the tunnel binary is launched."""
        return self.working_dir / self.process_name

    @property
    def config_path(self) -> Path:
        return self.working_dir / self.options_filename

    @property
    def links(self) -> list[ScaffoldingLink]:
        """Every symlink the tunnel process needs, in creation order."""
        links = [
            ScaffoldingLink(
                target=self.template_dir / name, link_path=self.working_dir / name
            )
            for name in self.helper_scripts
        ]
        links.append(
            ScaffoldingLink(target=self.tunnel_binary, link_path=self.binary_alias)
        )
        return links

    @property
    def scaffolding_paths(self) -> list[Path]:
        """Paths removed on teardown and before wiring."""
        paths = [link.link_path for link in self.links]
        paths.extend(self.working_dir / name for name in self.stale_files)
        paths.append(self.config_path)
        return paths

    def script_path(self, name: str) -> Path:
        return self.working_dir / name
