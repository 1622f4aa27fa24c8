"""Idempotent cleanup of the tunnel process and its scaffolding."""

import shutil
import signal
from collections.abc import Callable

from .common.logging import get_logger
from .process import signal_all
from .scaffolding import remove_path
from .settings import ClientSettings

logger = get_logger(__name__)


class Teardown:
    """Stops the tunnel by name and erases the working directory.

    Nothing to signal and nothing to remove are normal outcomes; teardown()
    logs whatever else goes wrong and never raises it.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        signaller: Callable[[str, int], int] = signal_all,
    ):
        self.settings = settings or ClientSettings()
        self._signal_all = signaller

    def teardown(self) -> None:
        settings = self.settings
        logger.info("Tearing down tunnel", process_name=settings.process_name)

        try:
            signalled = self._signal_all(settings.process_name, signal.SIGTERM)
        except Exception as e:
            logger.error("Error signalling tunnel process", error=str(e))
            signalled = 0

        for path in settings.scaffolding_paths:
            try:
                remove_path(path)
            except OSError as e:
                logger.warning("Failed to remove scaffolding", path=str(path), error=str(e))

        working_dir = settings.working_dir
        try:
            if working_dir.is_symlink() or (working_dir.exists() and not working_dir.is_dir()):
                working_dir.unlink()
            else:
                shutil.rmtree(working_dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to remove working dir", path=str(working_dir), error=str(e))

        logger.info("Teardown complete", signalled=signalled)
