"""Configuration module."""

from .settings import (
    NotesConfig,
    compute_config_defaults,
    default_branch_for_new_tag,
    find_config_file,
    get_config,
    load_json_config,
    parse_release_version,
    prerelease_identifiers,
    release_branch_for_version,
    validate_config,
)

__all__ = [
    "NotesConfig",
    "compute_config_defaults",
    "default_branch_for_new_tag",
    "find_config_file",
    "get_config",
    "load_json_config",
    "parse_release_version",
    "prerelease_identifiers",
    "release_branch_for_version",
    "validate_config",
]
