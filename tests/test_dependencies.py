import pytest

from prnotes.errors import DependencyMissingError
from prnotes.github import command_exists, ensure_installed_dependencies


def test_ensure_installed_dependencies_finds_gh():
    looked_up = []

    def which(cmd):
        looked_up.append(cmd)
        return "/usr/bin/gh"

    ensure_installed_dependencies(which)
    assert looked_up == ["gh"]


def test_ensure_installed_dependencies_missing_gh():
    with pytest.raises(DependencyMissingError, match="https://cli.github.com/"):
        ensure_installed_dependencies(lambda cmd: None)


def test_command_exists():
    assert command_exists("gh", lambda cmd: f"/bin/{cmd}")
    assert not command_exists("gh", lambda cmd: None)
