"""Async Repositories resource client."""

from typing import TYPE_CHECKING

from prmerge.clients.repos import _parse_commit, _parse_repository
from prmerge.exceptions import NotFoundError
from prmerge.types.commits import Commit
from prmerge.types.repos import Repository

if TYPE_CHECKING:
    from prmerge.async_transport import AsyncHTTPTransport


class AsyncReposClient:
    """Async client for repository-related operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, name: str) -> Repository:
        """
        Get repository information.

        Args:
            owner: Account that owns the repository
            name: Repository name

        Returns:
            Repository object with default branch and URLs
        """
        data = await self.transport.get(f"/repos/{owner}/{name}")
        if not data:
            raise NotFoundError("NOT_FOUND", f"repository {owner}/{name} returned empty")
        return _parse_repository(data)

    async def get_commit(self, owner: str, name: str, sha: str) -> Commit | None:
        """
        Get a single commit.

        Returns:
            Commit with its tree SHA and ordered parents, or None if the API
            answered without a commit payload
        """
        data = await self.transport.get(f"/repos/{owner}/{name}/commits/{sha}")
        return _parse_commit(data)
