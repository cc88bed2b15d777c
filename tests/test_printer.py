from prnotes.releasenote.models import NoteKind, ReleaseNote
from prnotes.releasenote.printer import ReleaseNotesPrinter


def notes():
    return [
        ReleaseNote(title="🐛 Fix crash", number=2, kind=NoteKind.BUG, area="KCP"),
        ReleaseNote(title="✨ Add feature", number=1, kind=NoteKind.FEATURE),
    ]


def test_render_order():
    printer = ReleaseNotesPrinter(
        "org/repo", "v1.5.0", is_pre_release=True, print_deprecation=True, print_kubernetes_support=False,
    )
    for note in notes():
        printer.add(note)

    document = printer.render()

    pre_release = document.index("This is a pre-release version")
    deprecation = document.index("Deprecation Warning")
    first = document.index("- [KCP] 🐛 Fix crash (#2)")
    second = document.index("- ✨ Add feature (#1)")
    assert pre_release < deprecation < first < second
    assert "Kubernetes version support" not in document
    assert "https://github.com/org/repo/issues/new" in document
    assert "## Changes since v1.5.0" in document
    assert document.count("Fix crash") == 1
    assert document.count("Add feature") == 1


def test_render_kubernetes_support_only():
    printer = ReleaseNotesPrinter("org/repo", "v1.5.0", print_kubernetes_support=True)
    document = printer.render()
    assert "Kubernetes version support" in document
    assert "pre-release" not in document
    assert "Deprecation Warning" not in document
    assert document.index("Kubernetes version support") < document.index("## Changes since v1.5.0")


def test_render_overview():
    printer = ReleaseNotesPrinter("org/repo", "v1.5.0")
    for note in notes():
        printer.add(note)
    document = printer.render()
    assert "- 2 new PRs merged" in document
    assert "- 1 :bug: Bug Fixes" in document
    assert "- 1 :sparkles: New Features" in document
    assert document.rstrip().endswith("_Thanks to all our contributors!_ 😊")


def test_render_keeps_duplicates():
    printer = ReleaseNotesPrinter("org/repo", "v1.5.0")
    note = ReleaseNote(title="🌱 Bump", number=5, kind=NoteKind.OTHER)
    printer.add(note)
    printer.add(note)
    assert printer.render().count("- 🌱 Bump (#5)") == 2
