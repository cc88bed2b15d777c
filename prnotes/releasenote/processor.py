"""Turns merged PRs into release note entries."""

import re
from typing import List, Optional, Tuple

from .models import NoteKind, PullRequest, ReleaseNote

AREA_LABEL_PREFIX = "area/"
MULTIPLE_AREAS_PREFIX = "MULTIPLE_AREAS"

# Title prefixes, as :emoji: code and unicode, mapped to the kind of change
KIND_PREFIXES: List[Tuple[NoteKind, Tuple[str, ...]]] = [
    (NoteKind.FEATURE, (":sparkles:", "✨")),
    (NoteKind.BUG, (":bug:", "🐛")),
    (NoteKind.DOCUMENTATION, (":book:", "📖")),
    (NoteKind.BREAKING, (":warning:", "⚠️", "⚠")),
    (NoteKind.OTHER, (":seedling:", "🌱")),
]

# Documentation PRs about these are listed as proposals
PROPOSAL_RE = re.compile(r'(?i)\b(proposal|CAEP)\b')

# Cherry-picks are titled "[release-1.6] original title"
CHERRY_PICK_RE = re.compile(r'^\[release-[\w.\-]+\]\s*')

USER_FRIENDLY_AREAS = {
    "api": "API",
    "bootstrap": "CABPK",
    "ci": "CI",
    "clustercachetracker": "ClusterCacheTracker",
    "clusterclass": "ClusterClass",
    "clusterctl": "clusterctl",
    "clusterresourceset": "ClusterResourceSet",
    "control-plane": "ControlPlane",
    "dependency": "Dependency",
    "devtools": "Devtools",
    "e2e-testing": "e2e",
    "ipam": "IPAM",
    "machine": "Machine",
    "machinedeployment": "MachineDeployment",
    "machinehealthcheck": "MachineHealthCheck",
    "machinepool": "MachinePool",
    "machineset": "MachineSet",
    "provider/bootstrap-kubeadm": "CABPK",
    "provider/control-plane-kubeadm": "KCP",
    "provider/core": "Core",
    "provider/infrastructure-docker": "CAPD",
    "provider/infrastructure-in-memory": "CAPIM",
    "provider/ipam-in-cluster": "IPAM",
    "runtime-sdk": "Runtime SDK",
    "util": "util",
}


def trim_title(title: str) -> str:
    """Strip whitespace and a leading cherry-pick marker from a PR title."""
    return CHERRY_PICK_RE.sub('', title.strip()).strip()


def classify_title(title: str) -> NoteKind:
    for kind, prefixes in KIND_PREFIXES:
        if title.startswith(prefixes):
            if kind == NoteKind.DOCUMENTATION and PROPOSAL_RE.search(title):
                return NoteKind.PROPOSAL
            return kind
    return NoteKind.UNKNOWN


def area_from_label(label: str) -> Optional[str]:
    """Return the user friendly area for an area/<name> label, None for other labels."""
    if not label.startswith(AREA_LABEL_PREFIX):
        return None
    area = label[len(AREA_LABEL_PREFIX):]
    if not area:
        return None
    if area in USER_FRIENDLY_AREAS:
        return USER_FRIENDLY_AREAS[area]
    return area[0].upper() + area[1:]


def extract_area(pr: PullRequest) -> Optional[str]:
    """Find the area of a PR from its labels.

    Args:
        pr: Pull request to inspect

    Returns:
        The area, MULTIPLE_AREAS[a/b] if the PR has several area labels,
        or None if it has none
    """
    areas: List[str] = []
    for label in pr.labels:
        area = area_from_label(label)
        if area and area not in areas:
            areas.append(area)

    if not areas:
        return None
    if len(areas) == 1:
        return areas[0]
    return f"{MULTIPLE_AREAS_PREFIX}[{'/'.join(areas)}]"


class PREntryProcessor:
    """Formats PRs as release note entries, optionally prefixed with their area."""

    def __init__(self, prefix_area_label: bool = True):
        self.prefix_area_label = prefix_area_label

    def process(self, pr: PullRequest) -> ReleaseNote:
        title = trim_title(pr.title)
        area = extract_area(pr) if self.prefix_area_label else None
        return ReleaseNote(
            title=title,
            number=pr.number,
            kind=classify_title(title),
            area=area,
        )
