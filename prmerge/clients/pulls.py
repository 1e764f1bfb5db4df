"""Pull requests resource client."""

from typing import TYPE_CHECKING, Any

from prmerge.clients.repos import _parse_commit, _parse_datetime
from prmerge.exceptions import NotFoundError, ValidationError
from prmerge.types.commits import Commit
from prmerge.types.pulls import PullRequest

if TYPE_CHECKING:
    from prmerge.transport import HTTPTransport


def _parse_pull_request(owner: str, name: str, data: dict[str, Any]) -> PullRequest:
    """Parse pull request data from API response."""
    if not isinstance(data, dict) or "number" not in data:
        raise ValidationError("INVALID_PAYLOAD", "pull request payload has no number")
    base = data.get("base") or {}
    head = data.get("head") or {}
    return PullRequest(
        owner=owner,
        repo_name=name,
        number=data["number"],
        merge_commit_sha=data.get("merge_commit_sha"),
        merged=bool(data.get("merged") or data.get("merged_at")),
        title=data.get("title"),
        state=data.get("state"),
        base_branch=base.get("ref"),
        head_sha=head.get("sha"),
        merged_at=_parse_datetime(data.get("merged_at")),
    )


def _parse_commit_list(number: int, items: list[Any]) -> list[Commit]:
    """
    Parse the commit listing of a pull request.

    Every entry must be a commit: dropping one would change which commit is
    the last one of the pull request.
    """
    commits = []
    for position, item in enumerate(items):
        commit = _parse_commit(item)
        if commit is None:
            raise ValidationError(
                "INVALID_PAYLOAD",
                f"commit {position} of pull request #{number} has no sha",
            )
        commits.append(commit)
    return commits


class PullsClient:
    """Client for pull request operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get(self, owner: str, name: str, number: int) -> PullRequest:
        """
        Get pull request information.

        Args:
            owner: Account that owns the repository
            name: Repository name
            number: Pull request number

        Returns:
            PullRequest including merge state and merge commit SHA

        Raises:
            NotFoundError: If pull request not found
        """
        data = self.transport.get(f"/repos/{owner}/{name}/pulls/{number}")
        if not data:
            raise NotFoundError("NOT_FOUND", f"pull request #{number} returned empty")
        return _parse_pull_request(owner, name, data)

    def list_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        """
        List the commits of a pull request, oldest first.

        Every page is fetched; the last element is the most recent commit
        contributed by the pull request.

        Args:
            owner: Account that owns the repository
            name: Repository name
            number: Pull request number

        Returns:
            List of Commit objects in chronological order

        Raises:
            ValidationError: If an entry of the listing is not a usable commit
        """
        items = self.transport.get_paginated(f"/repos/{owner}/{name}/pulls/{number}/commits")
        return _parse_commit_list(number, items)
