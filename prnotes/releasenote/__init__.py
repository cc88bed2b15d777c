"""Release note generation module."""

from .lister import GithubFromToPRLister, PRLister, pr_numbers_from_commits
from .models import NoteKind, PullRequest, ReleaseNote
from .printer import ReleaseNotesPrinter
from .processor import PREntryProcessor, classify_title, extract_area, trim_title
from .ref import Ref, RefKind, parse_ref, validate_ref

__all__ = [
    "GithubFromToPRLister",
    "NoteKind",
    "PREntryProcessor",
    "PRLister",
    "PullRequest",
    "Ref",
    "RefKind",
    "ReleaseNote",
    "ReleaseNotesPrinter",
    "classify_title",
    "extract_area",
    "parse_ref",
    "pr_numbers_from_commits",
    "trim_title",
    "validate_ref",
]
