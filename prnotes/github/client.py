"""GitHub client wrapper using the gh CLI."""

import json
import logging
import subprocess
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

from dateutil import parser as dateparser

from ..errors import CollaboratorError, DependencyMissingError
from ..releasenote.models import PullRequest
from ..releasenote.ref import Ref, RefKind

GH_COMMAND = "gh"

COMPARE_PAGE_SIZE = 250
SEARCH_PAGE_SIZE = 100
# GitHub search only returns the first 1000 results
SEARCH_MAX_PAGES = 10


def pull_request_from_item(item: Dict[str, Any]) -> PullRequest:
    """Build a PullRequest from a search result item or a pulls API response."""
    return PullRequest(
        number=item["number"],
        title=item["title"],
        labels=[label["name"] for label in item.get("labels", [])],
    )


class GithubClient:
    """Read-only access to a GitHub repository through `gh api`."""

    def __init__(self, repo: str, gh_path: str = GH_COMMAND,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
                 logger: Optional[logging.Logger] = None):
        """Initialize GitHub client.

        Args:
            repo: Repository as owner/name
            gh_path: Name or path of the gh executable
            runner: Function used to run gh, same signature as subprocess.run
            logger: Logger instance
        """
        self.repo = repo
        self.gh_path = gh_path
        self.runner = runner
        self.logger = logger or logging.getLogger(__name__)

    def _api(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Run `gh api` against a REST path and decode its JSON output."""
        endpoint = path
        if params:
            endpoint = f"{path}?{urlencode(params)}"

        command = [self.gh_path, "api", "-H", "Accept: application/vnd.github+json", endpoint]
        self.logger.debug(f"Running {' '.join(command)}")

        try:
            result = self.runner(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise DependencyMissingError(f"{self.gh_path} not found in PATH") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise CollaboratorError(f"gh api {endpoint} failed with status {e.returncode}: {stderr}") from e

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"gh api {endpoint} returned invalid JSON: {e}") from e

    def get_ref(self, ref: Ref) -> str:
        """Resolve a ref to the SHA of the commit it points to.

        Annotated tags are dereferenced to their commit.
        """
        data = self._api(f"repos/{self.repo}/git/ref/{ref}")
        obj = data["object"]
        if ref.kind == RefKind.TAG and obj.get("type") == "tag":
            tag = self._api(f"repos/{self.repo}/git/tags/{obj['sha']}")
            obj = tag["object"]
        return obj["sha"]

    def get_commit(self, sha: str) -> Dict[str, Any]:
        """Get a commit by SHA.

        Returns:
            Dictionary with the commit sha, message and committer date
        """
        data = self._api(f"repos/{self.repo}/git/commits/{sha}")
        return {
            'sha': data['sha'],
            'message': data.get('message', ''),
            'date': dateparser.isoparse(data['committer']['date']),
        }

    def get_diff_all_commits(self, base: str, head: str) -> List[Dict[str, Any]]:
        """List all commits reachable from head but not from base.

        Args:
            base: Name of the base branch or tag
            head: Name of the head branch or tag

        Returns:
            Commits as dictionaries with sha and message, oldest first
        """
        commits: List[Dict[str, Any]] = []
        page = 1
        while True:
            data = self._api(
                f"repos/{self.repo}/compare/{base}...{head}",
                {'per_page': COMPARE_PAGE_SIZE, 'page': page},
            )
            page_commits = data.get('commits') or []
            for commit in page_commits:
                commits.append({
                    'sha': commit['sha'],
                    'message': commit['commit']['message'],
                })

            if not page_commits or len(commits) >= data.get('total_commits', 0):
                break
            page += 1

        return commits

    def _search_merged_prs(self, query: str) -> List[PullRequest]:
        prs: List[PullRequest] = []
        for page in range(1, SEARCH_MAX_PAGES + 1):
            data = self._api("search/issues", {'q': query, 'per_page': SEARCH_PAGE_SIZE, 'page': page})
            items = data.get('items') or []
            prs.extend(pull_request_from_item(item) for item in items)

            if len(items) < SEARCH_PAGE_SIZE:
                break
        else:
            self.logger.warning(f"Search for merged PRs hit the limit of {SEARCH_MAX_PAGES * SEARCH_PAGE_SIZE} results")

        return prs

    def list_merged_prs(self, after: datetime, before: datetime, *branches: str) -> List[PullRequest]:
        """List PRs merged in a time window, optionally only into the given branches.

        Args:
            after: Lower bound of the merge date
            before: Upper bound of the merge date
            *branches: Base branches the PRs were merged into, any branch if none

        Returns:
            Merged pull requests as returned by the search API, without duplicates
        """
        query = f"repo:{self.repo} is:pr is:merged merged:{after.isoformat()}..{before.isoformat()}"
        queries = [f"{query} base:{branch}" for branch in branches if branch] or [query]

        prs: List[PullRequest] = []
        seen = set()
        for q in queries:
            for pr in self._search_merged_prs(q):
                if pr.number not in seen:
                    seen.add(pr.number)
                    prs.append(pr)
        return prs

    def get_pull_request(self, number: int) -> Optional[PullRequest]:
        """Get a merged pull request by number.

        Returns:
            The pull request, or None if there is no merged PR with that number
        """
        try:
            data = self._api(f"repos/{self.repo}/pulls/{number}")
        except CollaboratorError as e:
            if "HTTP 404" not in str(e):
                raise
            self.logger.warning(f"PR #{number} not found in {self.repo}")
            return None

        if not data.get('merged_at'):
            return None
        return pull_request_from_item(data)
