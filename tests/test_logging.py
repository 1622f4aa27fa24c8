"""Test logging configuration."""

import logging
import logging.handlers
import socket
import tempfile
from pathlib import Path
from unittest.mock import patch

import structlog
from structlog.testing import LogCapture, capture_logs

from pptp_client.common.logging import get_logger, setup_logging
from pptp_client.common.utils import mask_sensitive_data, sanitize_log_data
from pptp_client.config import ConfigMaterializer
from pptp_client.models import ConnectionParameters


class TestLogging:
    """Test logging functionality."""

    def setup_method(self) -> None:
        """Setup before each test - reset logging configuration."""
        structlog.reset_defaults()
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

    def teardown_method(self) -> None:
        """Restore the package's default logging setup."""
        structlog.reset_defaults()
        setup_logging()

    def test_setup_logging_default(self) -> None:
        setup_logging()
        logger = get_logger("test")
        assert logger is not None
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")

    def test_setup_logging_with_level(self) -> None:
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_json_format(self) -> None:
        setup_logging(json_format=True)
        logger = get_logger("test")

        cap = LogCapture()
        structlog.configure(processors=[cap])

        logger.info("test message", key="value")

        assert len(cap.entries) == 1
        assert cap.entries[0]["event"] == "test message"
        assert cap.entries[0]["key"] == "value"

    def test_setup_logging_with_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "test.log"
        setup_logging(log_file=str(log_file))

        logging.getLogger("test_file").info("test message")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "test message" in log_file.read_text()

    def test_setup_logging_with_syslog(self) -> None:
        with patch("logging.handlers.SysLogHandler") as mock_handler_class:
            mock_handler_class.return_value.level = logging.INFO
            setup_logging(syslog_address="/dev/log")

        mock_handler_class.assert_called_once_with(address="/dev/log")
        assert mock_handler_class.return_value in logging.getLogger().handlers

    def test_setup_logging_forwards_to_syslog_socket(self) -> None:
        """Records reach a unix datagram syslog socket with the client tag"""
        # AF_UNIX paths are length limited, keep the socket near the root
        with tempfile.TemporaryDirectory(dir="/tmp") as directory:
            address = f"{directory}/log"
            server = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
            server.bind(address)
            server.settimeout(5.0)
            try:
                setup_logging(syslog_address=address)

                logging.getLogger("test_syslog").warning("tunnel down")

                payload = server.recv(4096).decode()
            finally:
                for handler in logging.getLogger().handlers:
                    handler.close()
                server.close()

        assert "pptp_client: tunnel down" in payload


class TestSecretMasking:
    """Passwords never reach the logs."""

    def test_mask_sensitive_data(self) -> None:
        assert mask_sensitive_data("s3cret") == "******"
        assert mask_sensitive_data("s3cret", show_chars=2) == "****et"
        assert mask_sensitive_data(None) == "<None>"

    def test_sanitize_log_data(self) -> None:
        data = {"pptp_client_passwd": "s3cret", "pptp_client_username": "alice"}

        sanitized = sanitize_log_data(data)

        assert sanitized["pptp_client_passwd"] == "******"
        assert sanitized["pptp_client_username"] == "alice"

    def test_materialize_does_not_log_password(self, settings, tmp_path) -> None:
        params = ConnectionParameters(
            server="vpn.example.com", username="alice", password="s3cret"
        )

        with capture_logs() as logs:
            ConfigMaterializer(settings).materialize(params, tmp_path / "options.vpn")

        assert all("s3cret" not in str(entry) for entry in logs)
