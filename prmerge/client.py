"""
prmerge main client.

Provides the primary interface for reading pull request and commit data
from the GitHub REST API.
"""

import os
import threading
from typing import Any

import httpx

from prmerge.clients import PullsClient, ReposClient
from prmerge.exceptions import ConfigurationError
from prmerge.transport import HTTPTransport, RetryConfig


def _token_from_env() -> str:
    token = os.environ.get("GITHUB_TOKEN") or os.environ.get("GH_TOKEN")
    if not token:
        raise ConfigurationError(
            "GITHUB_TOKEN environment variable not set (GH_TOKEN is also accepted)"
        )
    return token


def _timeout_from_env(default: float) -> float:
    raw = os.environ.get("PRMERGE_TIMEOUT")
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"Invalid PRMERGE_TIMEOUT: {raw}. Must be a number of seconds"
        ) from None
    if timeout <= 0:
        raise ConfigurationError(f"Invalid PRMERGE_TIMEOUT: {raw}. Must be positive")
    return timeout


class GitHubClient:
    """
    Main client for interacting with the GitHub REST API.

    Aggregates the resource clients and handles authentication.

    Example:
        ```python
        from prmerge import GitHubClient

        # Create client with explicit configuration
        client = GitHubClient(token="ghp_...")

        # Or create from environment variables
        client = GitHubClient.from_env()

        pr = client.pulls.get("octocat", "hello-world", 42)
        commits = client.pulls.list_commits("octocat", "hello-world", 42)
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
        cancel_event: threading.Event | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token or app installation token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            per_page: Page size for list endpoints (default: 100)
            cancel_event: Event that aborts in-flight fetches when set (optional)
            http_transport: httpx transport override, mostly for tests (optional)
        """
        if not token:
            raise ConfigurationError("A GitHub token is required")

        self.base_url = base_url
        self.timeout = timeout

        # Create transport layer
        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            per_page=per_page,
            cancel_event=cancel_event,
            http_transport=http_transport,
        )

        # Initialize resource clients
        self.repos = ReposClient(self._transport)
        self.pulls = PullsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        retry_config: RetryConfig | None = None,
        cancel_event: threading.Event | None = None,
    ) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Access token (required; GH_TOKEN is used as a fallback)
            GITHUB_API_URL: Base URL for API (optional, e.g. a GitHub Enterprise host)
            PRMERGE_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Args:
            retry_config: Configuration for retry behavior (optional)
            cancel_event: Event that aborts in-flight fetches when set (optional)

        Returns:
            Configured GitHubClient instance

        Raises:
            ConfigurationError: If required environment variables are missing or invalid
        """
        return cls(
            token=_token_from_env(),
            base_url=os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL),
            timeout=_timeout_from_env(cls.DEFAULT_TIMEOUT),
            retry_config=retry_config,
            cancel_event=cancel_event,
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
