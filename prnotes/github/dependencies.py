"""Checks for executables the notes generator shells out to."""

import shutil
from typing import Callable, Optional

from ..errors import DependencyMissingError
from .client import GH_COMMAND


def command_exists(cmd: str, which: Callable[[str], Optional[str]] = shutil.which) -> bool:
    return which(cmd) is not None


def ensure_installed_dependencies(which: Callable[[str], Optional[str]] = shutil.which) -> None:
    """Make sure the gh CLI can be found in the PATH.

    Args:
        which: Resolves an executable name to its path, or None if not found

    Raises:
        DependencyMissingError: If gh is not installed
    """
    if not command_exists(GH_COMMAND, which):
        raise DependencyMissingError(
            "gh GitHub CLI not available. GitHub CLI is required to be present in the PATH. "
            "Refer to https://cli.github.com/ for installation"
        )
