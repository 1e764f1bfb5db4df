"""
prmerge async client.

Provides the async interface for reading pull request and commit data from
the GitHub REST API.
"""

import os
from typing import Any

import httpx

from prmerge.async_clients import AsyncPullsClient, AsyncReposClient
from prmerge.async_transport import AsyncHTTPTransport
from prmerge.client import _timeout_from_env, _token_from_env
from prmerge.exceptions import ConfigurationError
from prmerge.transport import RetryConfig


class AsyncGitHubClient:
    """
    Async client for interacting with the GitHub REST API.

    Aggregates the async resource clients and handles authentication.
    Cancelling the task awaiting a call aborts the in-flight request.

    Example:
        ```python
        import asyncio
        from prmerge import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as client:
                commits = await client.pulls.list_commits("octocat", "hello-world", 42)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        per_page: int = 100,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            token: Personal access token or app installation token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            per_page: Page size for list endpoints (default: 100)
            http_transport: httpx transport override, mostly for tests (optional)
        """
        if not token:
            raise ConfigurationError("A GitHub token is required")

        self.base_url = base_url
        self.timeout = timeout

        # Create async transport layer
        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            per_page=per_page,
            http_transport=http_transport,
        )

        # Initialize async resource clients
        self.repos = AsyncReposClient(self._transport)
        self.pulls = AsyncPullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create an async client from environment variables.

        Reads the same variables as GitHubClient.from_env: GITHUB_TOKEN
        (or GH_TOKEN), GITHUB_API_URL and PRMERGE_TIMEOUT.

        Raises:
            ConfigurationError: If required environment variables are missing or invalid
        """
        return cls(
            token=_token_from_env(),
            base_url=os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL),
            timeout=_timeout_from_env(cls.DEFAULT_TIMEOUT),
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
