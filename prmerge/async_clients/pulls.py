"""Async Pull requests resource client."""

from typing import TYPE_CHECKING

from prmerge.clients.pulls import _parse_commit_list, _parse_pull_request
from prmerge.exceptions import NotFoundError
from prmerge.types.commits import Commit
from prmerge.types.pulls import PullRequest

if TYPE_CHECKING:
    from prmerge.async_transport import AsyncHTTPTransport


class AsyncPullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, name: str, number: int) -> PullRequest:
        """Get pull request information."""
        data = await self.transport.get(f"/repos/{owner}/{name}/pulls/{number}")
        if not data:
            raise NotFoundError("NOT_FOUND", f"pull request #{number} returned empty")
        return _parse_pull_request(owner, name, data)

    async def list_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        """
        List the commits of a pull request, oldest first, across all pages.
        """
        items = await self.transport.get_paginated(
            f"/repos/{owner}/{name}/pulls/{number}/commits"
        )
        return _parse_commit_list(number, items)
