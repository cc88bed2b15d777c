"""Listing of the PRs merged between two refs."""

import logging
import re
from typing import TYPE_CHECKING, Dict, Iterable, List, Protocol

from .models import PullRequest
from .ref import Ref

if TYPE_CHECKING:
    from ..github.client import GithubClient

logger = logging.getLogger(__name__)

MAIN_BRANCH = "main"

MERGE_COMMIT_RE = re.compile(r'Merge pull request #(\d+)')
SQUASH_COMMIT_RE = re.compile(r'\(#(\d+)\)\s*$')


class PRLister(Protocol):
    """Produces the merged PRs that go into the release notes."""

    def list_prs(self) -> List[PullRequest]:
        ...


def pr_numbers_from_commits(commits: Iterable[Dict[str, str]]) -> List[int]:
    """Extract PR numbers from merge and squash commit messages.

    Args:
        commits: Commits with a 'message' key

    Returns:
        PR numbers in commit order, without duplicates
    """
    numbers: List[int] = []
    seen = set()
    for commit in commits:
        message = commit.get('message', '')
        match = MERGE_COMMIT_RE.search(message)
        if not match:
            subject = message.split('\n', 1)[0]
            match = SQUASH_COMMIT_RE.search(subject)
        if not match:
            continue

        number = int(match.group(1))
        if number not in seen:
            seen.add(number)
            numbers.append(number)
    return numbers


class GithubFromToPRLister:
    """Lists the PRs merged between two refs.

    The PRs are those referenced by the commits of the git diff between the
    two refs. They are looked up in bulk with a search for PRs merged into the
    branch, and into main for release branches, in the time window between the
    commits of the two refs. PRs missing from the search are fetched one by one.
    """

    def __init__(self, client: "GithubClient", from_ref: Ref, to_ref: Ref, branch: str):
        self.client = client
        self.from_ref = from_ref
        self.to_ref = to_ref
        self.branch = branch

    def _base_branches(self) -> List[str]:
        # a release branch also holds everything merged into main before it was cut
        if self.branch and self.branch != MAIN_BRANCH:
            return [self.branch, MAIN_BRANCH]
        return [self.branch] if self.branch else []

    def list_prs(self) -> List[PullRequest]:
        logger.info(f"Computing diff between {self.from_ref.value} and {self.to_ref.value}")
        diff = self.client.get_diff_all_commits(self.from_ref.value, self.to_ref.value)
        logger.info(f"{len(diff)} commits in diff")

        logger.info(f"Reading ref {self.to_ref} for upper limit")
        to_commit = self.client.get_commit(self.client.get_ref(self.to_ref))

        logger.info(f"Reading ref {self.from_ref} for lower limit")
        from_commit = self.client.get_commit(self.client.get_ref(self.from_ref))

        branches = self._base_branches()
        logger.info(f"Listing PRs from branches {branches} from {from_commit['date']} to {to_commit['date']}")
        prs = self.client.list_merged_prs(from_commit['date'], to_commit['date'], *branches)
        logger.info(f"{len(prs)} PRs found")

        by_number = {pr.number: pr for pr in prs}
        selected: List[PullRequest] = []
        for number in pr_numbers_from_commits(diff):
            pr = by_number.get(number)
            if pr is None:
                # not in the search results, e.g. past the search result limit
                logger.debug(f"PR #{number} not in search results, fetching it")
                pr = self.client.get_pull_request(number)
            if pr is not None:
                selected.append(pr)

        logger.info(f"{len(selected)} PRs match the commits from the git diff")
        return selected
