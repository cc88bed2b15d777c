"""Configuration management for prnotes."""

import json
import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Union

import semver
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigurationError, VersionParseError
from ..releasenote.ref import RefKind, validate_ref

logger = logging.getLogger(__name__)

DEFAULT_REPOSITORY = "kubernetes-sigs/cluster-api"
MAIN_BRANCH = "main"
ENV_PREFIX = "PRNOTES_"

# major[.minor[.patch]] at the start of a version
VERSION_CORE_RE = re.compile(r"\d+(?:\.\d+){0,2}(?=[-+]|$)")


class NotesConfig(BaseSettings):
    """Settings for a single release notes run.

    Empty strings mean "not set". Instances are frozen: computing defaults
    returns a resolved copy.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        frozen=True,
    )

    repository: str = DEFAULT_REPOSITORY
    from_ref: str = ""
    to_ref: str = ""
    new_tag: str = ""
    branch: str = ""

    prefix_area_label: bool = True
    pre_release_version: bool = False
    deprecation: bool = True
    add_kubernetes_version_support: bool = True

    @field_validator("repository")
    @classmethod
    def normalize_repository(cls, v):
        """Accept full GitHub URLs as well as owner/repo."""
        v = v.strip().rstrip("/")
        for prefix in ("https://github.com/", "http://github.com/"):
            if v.startswith(prefix):
                v = v[len(prefix):]
        if v.endswith(".git"):
            v = v[:-len(".git")]
        return v

    @field_validator("from_ref", "to_ref", "new_tag", "branch")
    @classmethod
    def strip_value(cls, v):
        return v.strip()


def validate_config(config: NotesConfig) -> None:
    """Check that the config carries enough information to compute the rest.

    Args:
        config: Configuration to validate

    Raises:
        ConfigurationError: If neither --from nor --release, or neither
            --branch nor --release are set
        ReferenceFormatError: If --from or --to is set but malformed
    """
    if not config.from_ref and not config.new_tag:
        raise ConfigurationError("at least one of --from or --release need to be set")

    if not config.branch and not config.new_tag:
        raise ConfigurationError("at least one of --branch or --release need to be set")

    if config.from_ref:
        validate_ref(config.from_ref)

    if config.to_ref:
        validate_ref(config.to_ref)


def parse_release_version(tag: str) -> semver.Version:
    """Parse a release tag leniently: surrounding whitespace, a leading "v",
    leading zeros in major, minor and patch, and missing minor or patch
    components are accepted.

    Raises:
        VersionParseError: If the tag is not a semantic version
    """
    text = tag.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    match = VERSION_CORE_RE.match(text)
    if match:
        core = '.'.join(str(int(part)) for part in match.group(0).split('.'))
        text = core + text[match.end():]
    try:
        return semver.Version.parse(text, optional_minor_and_patch=True)
    except (ValueError, TypeError) as e:
        raise VersionParseError(f"invalid --release, is not a semver: {e}") from e


def prerelease_identifiers(version: semver.Version) -> List[Union[str, int]]:
    """Split the pre-release part of a version into its identifiers.

    Numeric identifiers are returned as ints, e.g. "rc.1" -> ["rc", 1].
    """
    if not version.prerelease:
        return []
    return [int(part) if part.isdigit() else part for part in version.prerelease.split(".")]


def release_branch_for_version(version: semver.Version) -> str:
    return f"release-{version.major}.{version.minor}"


def default_branch_for_new_tag(version: semver.Version) -> str:
    """Calculate the branch a release is cut from based on its version.

    Args:
        version: Version of the new release

    Returns:
        Name of the branch to generate the notes from
    """
    if version.patch != 0:
        # patch releases always come from the release branch
        return release_branch_for_version(version)

    pre = prerelease_identifiers(version)
    if not pre:
        # new minor release, the branch was cut with the first RC
        return release_branch_for_version(version)

    if len(pre) == 2 and pre[0] == "rc" and isinstance(pre[1], int) and pre[1] >= 1:
        # second or later RC, the release branch already exists
        return release_branch_for_version(version)

    # betas, the first RC and any other pre release are cut from main
    return MAIN_BRANCH


def compute_config_defaults(config: NotesConfig) -> NotesConfig:
    """Fill in --from, --branch and --to from --release where they are not set.

    Args:
        config: Validated configuration

    Returns:
        The config unchanged when all refs are set, otherwise a resolved copy

    Raises:
        VersionParseError: If --release is not a semver
        ConfigurationError: If --from cannot be derived from --release
    """
    if config.from_ref and config.branch and config.to_ref:
        return config

    version = parse_release_version(config.new_tag)
    updates = {}

    if not config.from_ref:
        if version.patch == 0:
            # new minor release, read commits since the previous minor
            if version.minor == 0:
                raise ConfigurationError(
                    f"cannot compute --from for new major release {config.new_tag}, set --from explicitly"
                )
            updates["from_ref"] = f"{RefKind.TAG.value}/v{version.major}.{version.minor - 1}.0"
        else:
            updates["from_ref"] = f"{RefKind.TAG.value}/v{version.major}.{version.minor}.{version.patch - 1}"

    branch = config.branch or default_branch_for_new_tag(version)
    if not config.branch:
        updates["branch"] = branch

    if not config.to_ref:
        updates["to_ref"] = f"{RefKind.BRANCH.value}/{branch}"

    logger.debug(f"Computed config defaults from release {config.new_tag}: {updates}")
    return config.model_copy(update=updates)


def load_json_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to JSON configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a JSON object")
    return data


def find_config_file() -> Optional[str]:
    """Find configuration file in common locations.

    Returns:
        Path to config file or None if not found
    """
    search_paths = [
        "prnotes.json",
        ".prnotes.json",
        "~/.prnotes.json",
        "~/.config/prnotes/config.json",
    ]

    for path_str in search_paths:
        path = Path(path_str).expanduser()
        if path.exists() and path.is_file():
            return str(path)

    return None


def get_config(config_file: Optional[str] = None, **overrides) -> NotesConfig:
    """Build the configuration from defaults, JSON file, environment and overrides.

    Later sources win: the JSON file is overridden by environment variables
    (PRNOTES_*), which are overridden by explicit overrides such as CLI options.
    Overrides that are None are ignored.

    Args:
        config_file: Optional path to JSON config file
        **overrides: Explicitly given settings

    Returns:
        Configuration object
    """
    config_data = {}

    json_config_path = config_file or find_config_file()
    if json_config_path:
        logger.debug(f"Loading config file {json_config_path}")
        json_config = load_json_config(json_config_path)
        # Environment variables override JSON config
        env_names = {name.upper() for name in os.environ}
        config_data.update({
            k: v for k, v in json_config.items()
            if f"{ENV_PREFIX}{k}".upper() not in env_names
        })

    config_data.update({k: v for k, v in overrides.items() if v is not None})

    unknown = set(config_data) - set(NotesConfig.model_fields)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    try:
        return NotesConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
