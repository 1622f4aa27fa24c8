"""Working directory and symlinks the tunnel process runs from."""

import os
from pathlib import Path

from .common.exceptions import ScaffoldingError
from .common.logging import get_logger
from .models import ScaffoldingLink
from .settings import ClientSettings

logger = get_logger(__name__)

WORKING_DIR_MODE = 0o700


def remove_path(path: Path) -> bool:
    """Unlink a file or symlink at path if one is there.

    Returns:
        True if something was removed
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except IsADirectoryError:
        return False
    return True


class LinkWirer:
    """Creates the scaffolding directory and its symlinks.

    wire() stops at the first failing step and raises; whatever it already
    created is left for teardown to remove.
    """

    def __init__(self, settings: ClientSettings | None = None):
        self.settings = settings or ClientSettings()

    @property
    def links(self) -> list[ScaffoldingLink]:
        return self.settings.links

    def clean(self) -> None:
        """Remove stale helper links, the old options file and the alias."""
        working_dir = self.settings.working_dir
        # Something that is not a directory occupies the working dir path
        if working_dir.is_symlink() or (working_dir.exists() and not working_dir.is_dir()):
            try:
                working_dir.unlink()
            except OSError as e:
                raise ScaffoldingError(f"Cannot remove {working_dir}: {e}") from e
            logger.debug("Removed non-directory at working dir", path=str(working_dir))

        for path in self.settings.scaffolding_paths:
            try:
                if remove_path(path):
                    logger.debug("Removed stale scaffolding", path=str(path))
            except OSError as e:
                raise ScaffoldingError(f"Cannot remove {path}: {e}") from e

    def make_working_dir(self) -> None:
        working_dir = self.settings.working_dir
        try:
            working_dir.mkdir(mode=WORKING_DIR_MODE, parents=True, exist_ok=True)
            os.chmod(working_dir, WORKING_DIR_MODE)
        except OSError as e:
            raise ScaffoldingError(f"Cannot create {working_dir}: {e}") from e

    def link(self, link: ScaffoldingLink) -> None:
        if not link.target.exists():
            raise ScaffoldingError(f"Link target does not exist: {link.target}")
        try:
            os.symlink(link.target, link.link_path)
        except OSError as e:
            raise ScaffoldingError(
                f"Cannot link {link.link_path} -> {link.target}: {e}"
            ) from e
        logger.debug("Linked", link=str(link.link_path), target=str(link.target))

    def wire(self) -> list[ScaffoldingLink]:
        """Build the scaffolding from scratch.

        Returns:
            The links created, in creation order

        Raises:
            ScaffoldingError: If any step fails
        """
        self.clean()
        self.make_working_dir()
        links = self.links
        for link in links:
            self.link(link)
        logger.info(
            "Scaffolding wired",
            working_dir=str(self.settings.working_dir),
            links=len(links),
        )
        return links

    def is_wired(self) -> bool:
        """True if every link exists and points at its declared target."""
        for link in self.links:
            if not link.link_path.is_symlink():
                return False
            if Path(os.readlink(link.link_path)) != link.target:
                return False
        return True
