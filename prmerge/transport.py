"""
HTTP Transport for prmerge.

Handles HTTP communication with the GitHub REST API: authentication headers,
automatic retry logic, Link-header pagination, cancellation and error
handling.
"""

import random
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from prmerge.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CancelledError,
    NotFoundError,
    PRMergeError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from prmerge.logging import log_http_request, log_http_response

API_VERSION = "2022-11-28"
USER_AGENT = "prmerge"


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503, 504])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class BaseTransport:
    """
    Behaviour shared by the sync and async transports.

    Covers request headers, retry decisions, backoff timing and the mapping
    of error responses onto typed exceptions.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        per_page: int = 100,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self.per_page = per_page

    def _default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": API_VERSION,
        }

    def _should_retry(
        self, status_code: int, attempt: int, rate_limited: bool = False
    ) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)
            rate_limited: True for a 403 caused by an exhausted rate limit

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        if rate_limited:
            return True

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        # If Retry-After header is present and we should respect it
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        # Exponential backoff: backoff_factor ^ attempt
        base_wait = self.retry_config.backoff_factor ** attempt

        # Apply jitter (±jitter%)
        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        # Cap at max_backoff
        return min(wait_time, self.retry_config.max_backoff)

    @staticmethod
    def _is_rate_limited(response: httpx.Response) -> bool:
        """GitHub answers an exhausted primary rate limit with 403 or 429."""
        if response.status_code == 429:
            return True
        return (
            response.status_code == 403
            and response.headers.get("X-RateLimit-Remaining") == "0"
        )

    @staticmethod
    def _retry_after(response: httpx.Response) -> str | None:
        """
        Seconds to wait before retrying, from Retry-After or X-RateLimit-Reset.
        """
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            return retry_after

        reset = response.headers.get("X-RateLimit-Reset")
        if reset:
            try:
                return str(max(0, int(reset) - int(time.time())))
            except ValueError:
                return None
        return None

    def _parse_error_response(self, response: httpx.Response) -> PRMergeError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate PRMergeError subclass
        """
        try:
            data = response.json()
        except Exception:
            data = {}

        if not isinstance(data, dict):
            data = {}

        message = data.get("message") or f"HTTP {response.status_code}"
        request_id = response.headers.get("X-GitHub-Request-Id")

        status_code = response.status_code

        if self._is_rate_limited(response):
            retry_after_str = self._retry_after(response) or "60"
            try:
                retry_after = int(float(retry_after_str))
            except ValueError:
                retry_after = 60
            return RateLimitedError("RATE_LIMITED", message, retry_after, request_id)
        elif status_code == 401:
            return AuthenticationError("UNAUTHORIZED", message, request_id)
        elif status_code == 403:
            return AuthorizationError("FORBIDDEN", message, request_id)
        elif status_code == 404:
            return NotFoundError("NOT_FOUND", message, request_id)
        elif status_code >= 500:
            return ServerError("SERVER_ERROR", message, request_id)
        else:
            return ValidationError(f"HTTP_{status_code}", message, request_id)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """
        Parsed JSON body, or None for an empty body.

        Raises:
            ValidationError: If a non-empty body is not valid JSON
        """
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ValidationError(
                "INVALID_RESPONSE",
                f"response from {response.request.url} is not valid JSON",
                response.headers.get("X-GitHub-Request-Id"),
            ) from None

    @staticmethod
    def _decode_page(response: httpx.Response) -> list[Any]:
        """Items of one list-endpoint page."""
        page = BaseTransport._decode(response)
        if page is None:
            return []
        if not isinstance(page, list):
            raise ValidationError(
                "INVALID_RESPONSE",
                f"expected a list from {response.request.url}, got {type(page).__name__}",
                response.headers.get("X-GitHub-Request-Id"),
            )
        return page

    @staticmethod
    def _next_page_url(response: httpx.Response) -> str | None:
        """URL of the next page from the RFC 5988 Link header, if any."""
        next_link = response.links.get("next")
        if not next_link:
            return None
        return next_link.get("url")


class HTTPTransport(BaseTransport):
    """
    HTTP transport layer for the GitHub REST API.

    Handles:
    - Token authentication and API version headers
    - Exponential backoff with jitter for retries
    - Retry-After / X-RateLimit-Reset respect for rate limiting
    - Following Link headers until every page is read
    - Aborting on an externally supplied cancel event
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        per_page: int = 100,
        cancel_event: threading.Event | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Personal access token or app installation token
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            per_page: Page size requested from list endpoints
            cancel_event: When set, in-flight operations abort with CancelledError
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        super().__init__(base_url, token, timeout, retry_config, per_page)
        self.cancel_event = cancel_event

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=self._default_headers(),
            transport=http_transport,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        Make a GET request with automatic retry.

        Args:
            path: API path (e.g., "/repos/octocat/hello-world")
            params: Query parameters

        Returns:
            Parsed JSON response, or None when the body is empty

        Raises:
            PRMergeError: On API errors
            CancelledError: If the cancel event is set
        """
        def make_request() -> httpx.Response:
            log_http_request("GET", path, params=params)
            return self._client.get(path, params=params)

        return self._decode(self._execute_with_retry(make_request))

    def get_paginated(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[Any]:
        """
        GET a list endpoint and concatenate every page.

        Pages are requested in order and the Link header is followed until
        no "next" relation remains.

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
            def make_request(url: str = url, page_params: Any = page_params) -> httpx.Response:
                log_http_request("GET", url, params=page_params)
                return self._client.get(url, params=page_params)

            response = self._execute_with_retry(make_request)
            items.extend(self._decode_page(response))

            # The next URL already carries the query string
            url = self._next_page_url(response)
            page_params = None

        return items

    def _check_cancelled(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CancelledError("request cancelled before completion")

    def _sleep(self, seconds: float) -> None:
        """Wait between retries; returns early with CancelledError if cancelled."""
        if self.cancel_event is None:
            time.sleep(seconds)
            return
        if self.cancel_event.wait(seconds):
            raise CancelledError("request cancelled while waiting to retry")

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response]
    ) -> httpx.Response:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request

        Returns:
            The successful HTTP response

        Raises:
            PRMergeError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            self._check_cancelled()
            try:
                start = time.monotonic()
                response = request_fn()
                # A response that arrives after cancellation is discarded
                self._check_cancelled()
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
                self._sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                self._sleep(wait_time)

        # Should not reach here, but just in case
        if last_error:
            if isinstance(last_error, PRMergeError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")
