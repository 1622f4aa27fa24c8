"""Start/stop orchestration for the PPTP client."""

from types import TracebackType
from typing import Any, Literal

from .common.exceptions import StartError
from .common.logging import get_logger
from .config import ConfigMaterializer
from .models import ClientState, ConnectionParameters, StartOutcome
from .parameters import ParameterSource
from .process import Launcher, ProcessProbe
from .scaffolding import LinkWirer
from .settings import ClientSettings
from .teardown import Teardown

logger = get_logger(__name__)


class LifecycleManager:
    """Brings the PPTP tunnel up and down.

    start() either completes every step or tears everything down before
    raising; stop() is always safe to call. The tunnel process is only ever
    known by name: once spawned it supervises itself, and a successful
    start() means it was launched, not that the tunnel is up.

    There is no lock across start(): two callers racing between the probe
    and the launch can both spawn, and the second pppd then fails on its
    lock file.
    """

    def __init__(
        self,
        source: ParameterSource,
        settings: ClientSettings | None = None,
        *,
        probe: ProcessProbe | None = None,
        wirer: LinkWirer | None = None,
        materializer: ConfigMaterializer | None = None,
        launcher: Launcher | None = None,
        teardown: Teardown | None = None,
    ):
        self.source = source
        self.settings = settings or ClientSettings()
        self.probe = probe or ProcessProbe()
        self.wirer = wirer or LinkWirer(self.settings)
        self.materializer = materializer or ConfigMaterializer(self.settings)
        self.launcher = launcher or Launcher(self.settings.launch_flag)
        self._teardown = teardown or Teardown(self.settings)
        self._state = ClientState.IDLE
        self._last_error: StartError | None = None

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def last_error(self) -> StartError | None:
        """Failure from the most recent start(), if it failed."""
        return self._last_error

    def is_running(self) -> bool:
        return self.probe.is_running(self.settings.process_name)

    def start(self) -> StartOutcome:
        """Start the tunnel unless it is already running.

        Returns:
            StartOutcome.ALREADY_RUNNING without side effects if the tunnel
            process exists, StartOutcome.STARTED once it has been spawned

        Raises:
            ScaffoldingError: If a directory, symlink or file step failed
            MissingCredentialsError: If username or password is not set
            MissingParameterError: If the server address is not set
            InvalidParameterError: If a numeric parameter is malformed
            SpawnError: If the tunnel process could not be created
        """
        settings = self.settings
        if self.is_running():
            logger.info("Tunnel already running", process_name=settings.process_name)
            self._state = ClientState.RUNNING
            return StartOutcome.ALREADY_RUNNING

        self._state = ClientState.STARTING
        self._last_error = None
        logger.info("Starting tunnel", working_dir=str(settings.working_dir))
        try:
            self.wirer.wire()
            params = ConnectionParameters.from_source(self.source, settings.key_prefix)
            self.materializer.materialize(params, settings.config_path)
            pid = self.launcher.launch(settings.binary_alias, settings.config_path)
        except Exception as e:
            logger.error("Tunnel start failed", error=str(e), kind=type(e).__name__)
            if isinstance(e, StartError):
                self._last_error = e
            self._cleanup()
            raise

        self._state = ClientState.RUNNING
        logger.info("Tunnel started", pid=pid, server=params.server)
        return StartOutcome.STARTED

    def stop(self) -> None:
        """Kill the tunnel and remove the scaffolding. Never raises."""
        logger.info("Stopping tunnel", state=self._state.value)
        self._cleanup()

    def restart(self) -> StartOutcome:
        self.stop()
        return self.start()

    def _cleanup(self) -> None:
        self._state = ClientState.STOPPING
        try:
            self._teardown.teardown()
        except Exception as e:
            logger.error("Error during teardown", error=str(e))
        finally:
            self._state = ClientState.IDLE

    def status(self) -> dict[str, Any]:
        """Get a snapshot of the client and its on-disk state."""
        settings = self.settings
        return {
            "state": self._state.value,
            "running": self.is_running(),
            "process_name": settings.process_name,
            "working_dir": str(settings.working_dir),
            "config_path": str(settings.config_path),
            "config_present": settings.config_path.exists(),
            "last_error": str(self._last_error) if self._last_error else None,
        }

    def __enter__(self) -> "LifecycleManager":
        """Context manager entry - start the tunnel.

        Raises:
            StartError: If the tunnel cannot be started
        """
        logger.debug("Entering LifecycleManager context")
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> Literal[False]:
        """Context manager exit - stop the tunnel, never suppressing errors."""
        logger.debug("Exiting LifecycleManager context")
        self.stop()
        return False
