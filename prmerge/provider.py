"""Hosting provider interface and its GitHub adapters.

The merge analysis only needs four capabilities from a code-hosting
platform. They are expressed as a protocol so tests can hand in fixtures
instead of a live API client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from prmerge.exceptions import CancelledError, EmptyCommitError, FetchFailedError, PRMergeError
from prmerge.types.commits import Commit
from prmerge.types.pulls import PullRequest
from prmerge.types.repos import Repository

if TYPE_CHECKING:
    from prmerge.async_client import AsyncGitHubClient
    from prmerge.client import GitHubClient


class HostingProvider(Protocol):
    def fetch_repository(self, owner: str, name: str) -> Repository:
        ...

    def fetch_commit(self, owner: str, name: str, sha: str) -> Commit:
        ...

    def fetch_pr_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        ...

    def fetch_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        ...


class AsyncHostingProvider(Protocol):
    async def fetch_repository(self, owner: str, name: str) -> Repository:
        ...

    async def fetch_commit(self, owner: str, name: str, sha: str) -> Commit:
        ...

    async def fetch_pr_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        ...

    async def fetch_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        ...


class GitHubProvider(HostingProvider):
    """
    HostingProvider backed by GitHubClient.

    API failures are raised as FetchFailedError with the transport error
    chained as the cause; cancellation is passed through untouched.
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def fetch_repository(self, owner: str, name: str) -> Repository:
        try:
            return self._client.repos.get(owner, name)
        except CancelledError:
            raise
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for repository {owner}/{name}: {exc.message}",
                resource="repository",
            ) from exc

    def fetch_commit(self, owner: str, name: str, sha: str) -> Commit:
        try:
            commit = self._client.repos.get_commit(owner, name, sha)
        except CancelledError:
            raise
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for commit {sha}: {exc.message}",
                resource="commit",
                sha=sha,
            ) from exc
        if commit is None:
            raise EmptyCommitError(sha)
        return commit

    def fetch_pr_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        try:
            return self._client.pulls.list_commits(owner, name, number)
        except CancelledError:
            raise
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for commits in PR {number}: {exc.message}",
                resource="pull_request_commits",
            ) from exc

    def fetch_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        try:
            return self._client.pulls.get(owner, name, number)
        except CancelledError:
            raise
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for PR {number}: {exc.message}",
                resource="pull_request",
            ) from exc


class AsyncGitHubProvider(AsyncHostingProvider):
    """AsyncHostingProvider backed by AsyncGitHubClient."""

    def __init__(self, client: AsyncGitHubClient) -> None:
        self._client = client

    async def fetch_repository(self, owner: str, name: str) -> Repository:
        try:
            return await self._client.repos.get(owner, name)
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for repository {owner}/{name}: {exc.message}",
                resource="repository",
            ) from exc

    async def fetch_commit(self, owner: str, name: str, sha: str) -> Commit:
        try:
            commit = await self._client.repos.get_commit(owner, name, sha)
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for commit {sha}: {exc.message}",
                resource="commit",
                sha=sha,
            ) from exc
        if commit is None:
            raise EmptyCommitError(sha)
        return commit

    async def fetch_pr_commits(self, owner: str, name: str, number: int) -> list[Commit]:
        try:
            return await self._client.pulls.list_commits(owner, name, number)
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for commits in PR {number}: {exc.message}",
                resource="pull_request_commits",
            ) from exc

    async def fetch_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        try:
            return await self._client.pulls.get(owner, name, number)
        except PRMergeError as exc:
            raise FetchFailedError(
                f"querying GitHub for PR {number}: {exc.message}",
                resource="pull_request",
            ) from exc
