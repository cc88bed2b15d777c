"""Records passed between the lister, the entry processor and the printer."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequest(BaseModel):
    """A merged pull request."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    labels: List[str] = Field(default_factory=list)


class NoteKind(str, Enum):
    """Kind of change, derived from the emoji a PR title starts with."""

    BREAKING = ":warning: Breaking Changes"
    FEATURE = ":sparkles: New Features"
    BUG = ":bug: Bug Fixes"
    PROPOSAL = ":memo: Proposals"
    DOCUMENTATION = ":book: Documentation"
    OTHER = ":seedling: Others"
    UNKNOWN = ":question: Sort these by hand"


class ReleaseNote(BaseModel):
    """A single formatted release note."""

    model_config = ConfigDict(frozen=True)

    title: str
    number: int
    kind: NoteKind = NoteKind.UNKNOWN
    area: Optional[str] = None

    @property
    def line(self) -> str:
        if self.area:
            return f"[{self.area}] {self.title} (#{self.number})"
        return f"{self.title} (#{self.number})"
