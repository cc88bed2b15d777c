"""Parsing of heads/<branch> and tags/<tag> refs."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from ..errors import ReferenceFormatError


class RefKind(str, Enum):
    """Kind of git ref, valued by its prefix in the refs namespace."""

    BRANCH = "heads"
    TAG = "tags"


class Ref(BaseModel):
    """A branch head or a tag."""

    model_config = ConfigDict(frozen=True)

    kind: RefKind
    value: str

    def __str__(self) -> str:
        return f"{self.kind.value}/{self.value}"


def parse_ref(text: str) -> Ref:
    """Parse a ref formatted as heads/<branch name> or tags/<tag name>.

    Args:
        text: Ref to parse

    Returns:
        The parsed ref

    Raises:
        ReferenceFormatError: If the ref is not in one of the accepted forms
    """
    prefix, sep, name = text.partition("/")
    if not sep or not name:
        raise ReferenceFormatError(
            f"ref {text!r} is invalid. It must be formatted as heads/<branch name> or tags/<tag name>"
        )

    try:
        kind = RefKind(prefix)
    except ValueError:
        raise ReferenceFormatError(
            f"ref {text!r} has an unknown prefix {prefix!r}. Only heads/ and tags/ are supported"
        ) from None

    return Ref(kind=kind, value=name)


def validate_ref(text: str) -> None:
    """Raise ReferenceFormatError unless text is a valid ref."""
    parse_ref(text)
