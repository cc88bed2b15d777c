"""Rendering of the release notes document."""

from collections import Counter
from typing import List

from .models import NoteKind, ReleaseNote

PRE_RELEASE_TEMPLATE = (
    "🚨 This is a pre-release version. Use it only for testing purposes. "
    "If you find any bugs, file an [issue](https://github.com/{repo}/issues/new).\n"
)

DEPRECATION_TEMPLATE = """\
## :warning: Deprecation Warning

The following features and APIs are deprecated with this release and will be removed in a future release:

- FIXME: list the deprecations from the PRs below or remove this section

Please see the [open issues](https://github.com/{repo}/issues) for the deprecation timelines.
"""

KUBERNETES_SUPPORT_TEMPLATE = """\
## 👌 Kubernetes version support

- Management Cluster: v1.**X**.x -> v1.**X**.x
- Workload Cluster: v1.**X**.x -> v1.**X**.x

[More information about version support can be found here](https://cluster-api.sigs.k8s.io/reference/versions.html)
"""

CLOSING_LINE = "_Thanks to all our contributors!_ 😊"


class ReleaseNotesPrinter:
    """Collects release notes and renders them as a markdown document.

    Notes are rendered in the order they were added.
    """

    def __init__(self, repo: str, from_tag: str, is_pre_release: bool = False,
                 print_deprecation: bool = False, print_kubernetes_support: bool = False):
        self.repo = repo
        self.from_tag = from_tag
        self.is_pre_release = is_pre_release
        self.print_deprecation = print_deprecation
        self.print_kubernetes_support = print_kubernetes_support
        self.notes: List[ReleaseNote] = []

    def add(self, note: ReleaseNote) -> None:
        self.notes.append(note)

    def _overview(self) -> List[str]:
        count = len(self.notes)
        lines = [f"- {count} new {'PR' if count == 1 else 'PRs'} merged"]
        counts = Counter(note.kind for note in self.notes)
        for kind in NoteKind:
            if counts[kind]:
                lines.append(f"- {counts[kind]} {kind.value}")
        return lines

    def render(self) -> str:
        """Render the document.

        Returns:
            Markdown with the enabled header sections followed by the notes
        """
        sections = []

        if self.is_pre_release:
            sections.append(PRE_RELEASE_TEMPLATE.format(repo=self.repo))

        if self.print_deprecation:
            sections.append(DEPRECATION_TEMPLATE.format(repo=self.repo))

        if self.print_kubernetes_support:
            sections.append(KUBERNETES_SUPPORT_TEMPLATE)

        changes = [f"## Changes since {self.from_tag}", ""]
        changes.extend(self._overview())
        changes.append("")
        changes.extend(f"- {note.line}" for note in self.notes)
        sections.append('\n'.join(changes) + '\n')

        sections.append(CLOSING_LINE + '\n')
        return '\n'.join(sections)
