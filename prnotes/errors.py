"""Errors raised while generating release notes."""


class NotesError(Exception):
    """Base class for all errors that abort a release notes run."""


class ConfigurationError(NotesError):
    """Required settings are missing or cannot be combined."""


class ReferenceFormatError(NotesError):
    """A ref is not formatted as heads/<branch> or tags/<tag>."""


class VersionParseError(NotesError):
    """The release tag is not a semantic version."""


class DependencyMissingError(NotesError):
    """A required executable is not available in the PATH."""


class CollaboratorError(NotesError):
    """A call to an external tool or service failed."""
