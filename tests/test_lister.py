import json
import subprocess
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlparse

from prnotes.github import GithubClient
from prnotes.releasenote.lister import GithubFromToPRLister, pr_numbers_from_commits
from prnotes.releasenote.models import PullRequest
from prnotes.releasenote.ref import parse_ref


def test_pr_numbers_from_commits():
    commits = [
        {"message": "Merge pull request #12 from user/branch\n\nFix things"},
        {"message": "Update docs"},
        {"message": "Add feature (#15)\n\n* squashed commit (#3)"},
        {"message": "Merge pull request #12 from user/branch"},
        {"message": "Merge pull request #7 from user/other"},
    ]
    assert pr_numbers_from_commits(commits) == [12, 15, 7]


class FakeClient:
    """Serves PRs by base branch, like the search API filtered by base."""

    def __init__(self, diff_numbers, prs_by_base, fetchable=()):
        self.diff_numbers = diff_numbers
        self.prs_by_base = prs_by_base
        self.fetchable = {pr.number: pr for pr in fetchable}
        self.searched_branches = None
        self.fetched = []
        self.dates = {
            "heads/release-1.6": datetime(2023, 2, 1, tzinfo=timezone.utc),
            "heads/main": datetime(2023, 2, 1, tzinfo=timezone.utc),
            "tags/v1.5.0": datetime(2023, 1, 1, tzinfo=timezone.utc),
        }

    def get_diff_all_commits(self, base, head):
        return [{"sha": str(n), "message": f"Merge pull request #{n} from x/y"} for n in self.diff_numbers]

    def get_ref(self, ref):
        return str(ref)

    def get_commit(self, sha):
        return {"sha": sha, "message": "", "date": self.dates[sha]}

    def list_merged_prs(self, after, before, *branches):
        self.searched_branches = list(branches)
        prs = []
        for branch in branches:
            prs.extend(self.prs_by_base.get(branch, []))
        return prs

    def get_pull_request(self, number):
        self.fetched.append(number)
        return self.fetchable.get(number)


def lister(client, to="heads/release-1.6", branch="release-1.6"):
    return GithubFromToPRLister(client, parse_ref("tags/v1.5.0"), parse_ref(to), branch)


def test_release_branch_includes_prs_merged_into_main():
    client = FakeClient(
        diff_numbers=[3, 1, 4],
        prs_by_base={
            "main": [PullRequest(number=1, title="one"), PullRequest(number=3, title="three")],
            "release-1.6": [PullRequest(number=4, title="backport")],
        },
    )

    prs = lister(client).list_prs()

    # in diff order
    assert [pr.number for pr in prs] == [3, 1, 4]
    assert client.searched_branches == ["release-1.6", "main"]
    assert client.fetched == []


def test_main_branch_searches_main_only():
    client = FakeClient(diff_numbers=[1], prs_by_base={"main": [PullRequest(number=1, title="one")]})
    prs = lister(client, to="heads/main", branch="main").list_prs()
    assert [pr.number for pr in prs] == [1]
    assert client.searched_branches == ["main"]


def test_prs_beyond_search_results_are_fetched():
    client = FakeClient(
        diff_numbers=[1, 2, 3],
        prs_by_base={"main": [PullRequest(number=1, title="one")]},
        fetchable=[PullRequest(number=2, title="two")],
    )

    prs = lister(client).list_prs()

    assert [pr.number for pr in prs] == [1, 2]
    assert client.fetched == [2, 3]


def test_lister_with_github_client():
    """GA release from a release branch: PRs merged into main before the cut are listed."""
    pulls = {
        1: {"number": 1, "title": "✨ Feature on main", "labels": [], "base": "main"},
        2: {"number": 2, "title": "🐛 Fix on release branch", "labels": [], "base": "release-1.6"},
    }

    def runner(command, capture_output, text, check):
        parsed = urlparse(command[-1])
        params = {k: v[0] for k, v in parse_qs(parsed.query).items()}
        path = parsed.path
        if path.startswith("repos/org/repo/compare/"):
            body = {"total_commits": 2, "commits": [
                {"sha": "a", "commit": {"message": "Merge pull request #1 from x/feature"}},
                {"sha": "b", "commit": {"message": "Merge pull request #2 from x/fix"}},
            ]}
        elif path.startswith("repos/org/repo/git/ref/"):
            body = {"object": {"type": "commit", "sha": path.rsplit("/", 1)[-1]}}
        elif path.startswith("repos/org/repo/git/commits/"):
            date = "2023-01-01T00:00:00Z" if path.endswith("v1.5.0") else "2023-02-01T00:00:00Z"
            body = {"sha": path.rsplit("/", 1)[-1], "committer": {"date": date}}
        elif path == "search/issues":
            base = params["q"].rsplit("base:", 1)[1]
            body = {"items": [pr for pr in pulls.values() if pr["base"] == base]}
        else:
            raise AssertionError(f"unexpected gh api call {command[-1]}")
        return subprocess.CompletedProcess(command, 0, stdout=json.dumps(body), stderr="")

    client = GithubClient("org/repo", runner=runner)

    prs = lister(client).list_prs()

    assert [pr.number for pr in prs] == [1, 2]
