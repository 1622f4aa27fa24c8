"""Name-based process lookup, signalling and launching of the tunnel."""

import signal
import subprocess
from pathlib import Path

import psutil

from .common.exceptions import SpawnError
from .common.logging import get_logger

logger = get_logger(__name__)


def find_processes(name: str) -> list[psutil.Process]:
    """Return every live process whose name is exactly name.

    Zombies are skipped: they have exited and only wait to be reaped.
    """
    matches = []
    for proc in psutil.process_iter(["name", "status"]):
        try:
            if proc.info.get("name") != name:
                continue
            if proc.info.get("status") == psutil.STATUS_ZOMBIE:
                continue
            matches.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return matches


def signal_all(name: str, sig: int = signal.SIGTERM) -> int:
    """Send sig to every process named name.

    Processes that vanish or refuse the signal are skipped.

    Returns:
        Number of processes signalled
    """
    count = 0
    try:
        processes = find_processes(name)
    except psutil.Error as e:
        logger.warning("Process lookup failed", name=name, error=str(e))
        return 0

    for proc in processes:
        try:
            proc.send_signal(sig)
            count += 1
            logger.info("Signalled process", name=name, pid=proc.pid, signal=int(sig))
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.debug("Could not signal process", name=name, pid=proc.pid, error=str(e))
    return count


class ProcessProbe:
    """Answers whether a process with a given name is alive.

    A failed lookup counts as "not running". That can let a duplicate start
    through; pppd's own lock file then refuses the second instance.
    """

    def is_running(self, name: str) -> bool:
        try:
            running = bool(find_processes(name))
        except psutil.Error as e:
            logger.warning("Process probe failed, assuming not running", name=name, error=str(e))
            return False
        logger.debug("Process probe", name=name, running=running)
        return running


class Launcher:
    """Spawns the tunnel binary detached from the caller."""

    def __init__(self, launch_flag: str = "file"):
        self.launch_flag = launch_flag

    def launch(self, binary_alias: Path, config_path: Path) -> int:
        """Start ``binary_alias <launch_flag> config_path`` without waiting.

        Returns:
            PID of the spawned process

        Raises:
            SpawnError: If the process cannot be created
        """
        args = [str(binary_alias), self.launch_flag, str(config_path)]
        logger.info("Launching tunnel process", args=args)
        try:
            process = subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                start_new_session=True,
            )
        except OSError as e:
            logger.error("Failed to spawn tunnel process", binary=str(binary_alias), error=str(e))
            raise SpawnError(f"Failed to spawn {binary_alias}: {e}") from e

        logger.info("Tunnel process spawned", pid=process.pid)
        return process.pid
