"""
Async HTTP Transport for prmerge.

Handles async HTTP communication with the GitHub REST API using the httpx
async client. Cancellation follows asyncio: cancelling the calling task
aborts the in-flight request and propagates asyncio.CancelledError.
"""

import asyncio
import time
from collections.abc import Callable, Coroutine
from typing import Any

import httpx

from prmerge.exceptions import PRMergeError, RateLimitedError, ServerError
from prmerge.logging import log_http_request, log_http_response
from prmerge.transport import BaseTransport, RetryConfig


class AsyncHTTPTransport(BaseTransport):
    """
    Async HTTP transport layer for the GitHub REST API.

    Handles:
    - Token authentication and API version headers
    - Exponential backoff with jitter for retries
    - Retry-After / X-RateLimit-Reset respect for rate limiting
    - Following Link headers until every page is read
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        per_page: int = 100,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Personal access token or app installation token
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            per_page: Page size requested from list endpoints
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        super().__init__(base_url, token, timeout, retry_config, per_page)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=self._default_headers(),
            transport=http_transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Make a GET request with automatic retry.

        Args:
            path: API path (e.g., "/repos/octocat/hello-world")
            params: Query parameters

        Returns:
            Parsed JSON response, or None when the body is empty

        Raises:
            PRMergeError: On API errors
        """
        async def make_request() -> httpx.Response:
            log_http_request("GET", path, params=params)
            return await self._client.get(path, params=params)

        return self._decode(await self._execute_with_retry(make_request))

    async def get_paginated(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[Any]:
        """
        GET a list endpoint and concatenate every page.

        Args:
            path: API path of a list endpoint
            params: Query parameters for the first page

        Returns:
            All items of all pages, in the order the API returned them
        """
        first_params = {"per_page": self.per_page, **(params or {})}
        items: list[Any] = []
        url: str | None = path
        page_params: dict[str, Any] | None = first_params

        while url is not None:
            async def make_request(url: str = url, page_params: Any = page_params) -> httpx.Response:
                log_http_request("GET", url, params=page_params)
                return await self._client.get(url, params=page_params)

            response = await self._execute_with_retry(make_request)
            items.extend(self._decode_page(response))

            url = self._next_page_url(response)
            page_params = None

        return items

    async def _execute_with_retry(
        self, request_fn: Callable[[], Coroutine[Any, Any, httpx.Response]]
    ) -> httpx.Response:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Async function that makes the HTTP request

        Returns:
            The successful HTTP response

        Raises:
            PRMergeError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                start = time.monotonic()
                response = await request_fn()
                log_http_response(
                    response.status_code,
                    str(response.request.url),
                    elapsed_ms=(time.monotonic() - start) * 1000,
                    rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
                )

                if response.status_code < 400:
                    return response

                # Parse error response
                error = self._parse_error_response(response)

                # Check if we should retry
                rate_limited = isinstance(error, RateLimitedError)
                if not self._should_retry(response.status_code, attempt, rate_limited):
                    raise error

                last_error = error

                # Calculate backoff time
                wait_time = self._get_backoff_time(attempt, self._retry_after(response))
                await asyncio.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                await asyncio.sleep(wait_time)

        # Should not reach here, but just in case
        if last_error:
            if isinstance(last_error, PRMergeError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")
