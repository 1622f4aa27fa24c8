"""Shared pytest fixtures for PPTP client tests."""

from unittest.mock import Mock

import pytest

from pptp_client.parameters import MappingParameterSource
from pptp_client.process import Launcher, ProcessProbe
from pptp_client.settings import ClientSettings


@pytest.fixture
def settings(tmp_path):
    """ClientSettings rooted in tmp_path with real templates and binary.

    Returns:
        ClientSettings: working dir under tmp_path/etc/vpn (not created)
    """
    template_dir = tmp_path / "rom" / "etc" / "vpn"
    template_dir.mkdir(parents=True)
    for name in ("ip-up", "ip-down"):
        script = template_dir / name
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o755)

    binary = tmp_path / "usr" / "sbin" / "pppd"
    binary.parent.mkdir(parents=True)
    binary.write_text("#!/bin/sh\nexit 0\n")
    binary.chmod(0o755)

    (tmp_path / "etc").mkdir()

    return ClientSettings(
        working_dir=tmp_path / "etc" / "vpn",
        template_dir=template_dir,
        tunnel_binary=binary,
    )


@pytest.fixture
def params():
    """Complete set of connection parameters as stored on the gateway."""
    return {
        "pptp_client_srvip": "vpn.example.com",
        "pptp_client_username": "alice",
        "pptp_client_passwd": "s3cret",
        "pptp_client_dfltroute": "1",
        "pptp_client_peerdns": "0",
        "pptp_client_mtuenable": "0",
        "pptp_client_mruenable": "0",
        "pptp_client_crypt": "0",
        "pptp_client_stateless": "0",
        "pptp_client_custom": "",
        "wan_proto": "dhcp",
    }


@pytest.fixture
def source(params):
    return MappingParameterSource(params)


@pytest.fixture
def probe():
    """ProcessProbe mock reporting the tunnel as not running."""
    mock_probe = Mock(spec=ProcessProbe)
    mock_probe.is_running.return_value = False
    return mock_probe


@pytest.fixture
def launcher():
    """Launcher mock that "spawns" pid 4242."""
    mock_launcher = Mock(spec=Launcher)
    mock_launcher.launch.return_value = 4242
    return mock_launcher


@pytest.fixture
def signaller():
    """Replacement for signal_all that signals nothing."""
    return Mock(return_value=0)


@pytest.fixture
def mock_psutil_process():
    """Factory for psutil.Process stand-ins with a given name and pid."""

    def make(name, pid=1000, status="running"):
        proc = Mock()
        proc.info = {"name": name, "status": status}
        proc.pid = pid
        return proc

    return make
