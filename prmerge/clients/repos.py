"""Repositories resource client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from prmerge.exceptions import NotFoundError, ValidationError
from prmerge.types.commits import Commit, CommitParent
from prmerge.types.repos import Repository

if TYPE_CHECKING:
    from prmerge.transport import HTTPTransport


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.rstrip("Z"))
    except ValueError:
        raise ValidationError("INVALID_PAYLOAD", f"invalid timestamp: {value}") from None


def _parse_repository(data: dict[str, Any]) -> Repository:
    """Parse repository data from API response."""
    if not isinstance(data, dict) or not data.get("name"):
        raise ValidationError("INVALID_PAYLOAD", "repository payload has no name")
    owner = data.get("owner") or {}
    return Repository(
        owner=owner.get("login", ""),
        name=data["name"],
        full_name=data.get("full_name", f"{owner.get('login', '')}/{data['name']}"),
        default_branch=data.get("default_branch", "main"),
        html_url=data.get("html_url"),
        repo_id=data.get("id"),
    )


def _parse_commit(data: dict[str, Any] | None) -> Commit | None:
    """
    Parse a commit payload as returned by the commits and PR commits endpoints.

    Returns None when the payload carries no commit.

    Raises:
        ValidationError: If the commit has no tree SHA or a parent without a SHA
    """
    if not data:
        return None
    if not isinstance(data, dict):
        raise ValidationError("INVALID_PAYLOAD", f"commit payload is a {type(data).__name__}")
    sha = data.get("sha")
    if not sha:
        return None

    git_commit = data.get("commit") or {}
    tree = git_commit.get("tree") or {}
    if not tree.get("sha"):
        raise ValidationError("INVALID_PAYLOAD", f"commit {sha} has no tree sha")

    parents = []
    for parent in data.get("parents") or []:
        if not isinstance(parent, dict) or not parent.get("sha"):
            raise ValidationError("INVALID_PAYLOAD", f"commit {sha} lists a parent without a sha")
        parents.append(CommitParent(sha=parent["sha"]))
    author = git_commit.get("author") or {}
    committer = git_commit.get("committer") or {}

    return Commit(
        sha=sha,
        tree_sha=tree["sha"],
        parents=tuple(parents),
        message=git_commit.get("message"),
        author_name=author.get("name"),
        committed_at=_parse_datetime(committer.get("date")),
    )


class ReposClient:
    """Client for repository-related operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get(self, owner: str, name: str) -> Repository:
        """
        Get repository information.

        Args:
            owner: Account that owns the repository
            name: Repository name

        Returns:
            Repository object with default branch and URLs

        Raises:
            NotFoundError: If repository not found
        """
        data = self.transport.get(f"/repos/{owner}/{name}")
        if not data:
            raise NotFoundError("NOT_FOUND", f"repository {owner}/{name} returned empty")
        return _parse_repository(data)

    def get_commit(self, owner: str, name: str, sha: str) -> Commit | None:
        """
        Get a single commit.

        Args:
            owner: Account that owns the repository
            name: Repository name
            sha: Commit SHA (or any ref the API accepts)

        Returns:
            Commit with its tree SHA and ordered parents, or None if the API
            answered without a commit payload

        Raises:
            NotFoundError: If the commit does not exist
        """
        data = self.transport.get(f"/repos/{owner}/{name}/commits/{sha}")
        return _parse_commit(data)
