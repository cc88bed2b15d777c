"""GitHub access through the gh CLI."""

from .client import GithubClient
from .dependencies import command_exists, ensure_installed_dependencies

__all__ = ["GithubClient", "command_exists", "ensure_installed_dependencies"]
