"""
Property-based tests for prmerge logging.

Feature: github-transport
"""

import io
import logging
from collections.abc import Iterator

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from prmerge.logging import (
    configure_logging,
    get_logger,
    log_http_request,
    log_http_response,
    mask_sensitive_data,
    safe_log_dict,
    truncate_token,
)

# Strategies for generating test data
token_body_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"),
    min_size=36,
    max_size=40,
)
classic_token_strategy = st.builds(
    lambda prefix, body: f"{prefix}_{body}",
    st.sampled_from(["ghp", "gho", "ghu", "ghs", "ghr"]),
    token_body_strategy,
)
fine_grained_token_strategy = token_body_strategy.map(lambda body: f"github_pat_11AB_{body}")
token_strategy = st.one_of(classic_token_strategy, fine_grained_token_strategy)

path_strategy = st.text(
    min_size=1,
    max_size=60,
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="/-_"),
)


@pytest.fixture
def http_log() -> Iterator[io.StringIO]:
    """Capture prmerge.http output at DEBUG, restoring the logger afterwards."""
    http_logger = logging.getLogger("prmerge.http")
    saved_level, saved_handlers = http_logger.level, http_logger.handlers
    buffer = io.StringIO()
    http_logger.setLevel(logging.DEBUG)
    http_logger.handlers = [logging.StreamHandler(buffer)]
    yield buffer
    http_logger.setLevel(saved_level)
    http_logger.handlers = saved_handlers


@given(token=token_strategy)
@settings(max_examples=100)
def test_property_no_token_in_masked_output(token: str) -> None:
    """
    Property: No access tokens in logs

    Any GitHub token embedded in a log line is masked.
    """
    for text in (
        f"Authorization: Bearer {token}",
        f"authorization='token {token}'",
        f"retrying with {token} after 403",
        f"https://api.github.com/repos/o/r?access_token={token}",
    ):
        masked = mask_sensitive_data(text)
        assert token not in masked, f"Token leaked in: {masked}"


@given(token=token_strategy)
@settings(max_examples=100)
def test_property_safe_log_dict_masks_secrets(token: str) -> None:
    """
    Property: safe_log_dict masks every credential-like key, nested or not.
    """
    data = {
        "Authorization": f"Bearer {token}",
        "nested": {"github_token": token, "per_page": 100},
        "items": [{"api_key": token}, {"page": 2}],
    }

    safe = safe_log_dict(data)

    assert token not in str(safe)
    assert safe["Authorization"] == "[REDACTED]"
    assert safe["nested"]["per_page"] == 100
    assert safe["items"][1] == {"page": 2}


@given(path=path_strategy, token=token_strategy)
@settings(max_examples=50)
def test_property_log_http_request_no_sensitive_data(path: str, token: str) -> None:
    """
    Property: request logging never prints the Authorization header value.
    """
    http_logger = logging.getLogger("prmerge.http")
    saved_level, saved_handlers = http_logger.level, http_logger.handlers
    buffer = io.StringIO()
    http_logger.setLevel(logging.DEBUG)
    http_logger.handlers = [logging.StreamHandler(buffer)]
    try:
        log_http_request(
            "GET",
            f"/repos/{path}",
            headers={"Authorization": f"Bearer {token}", "Accept": "application/vnd.github+json"},
            params={"per_page": 100},
        )
    finally:
        http_logger.setLevel(saved_level)
        http_logger.handlers = saved_handlers

    output = buffer.getvalue()
    assert token not in output
    assert "application/vnd.github+json" in output
    assert output.startswith("GET /repos/")


def test_log_http_response_includes_rate_limit(http_log: io.StringIO) -> None:
    log_http_response(200, "https://api.github.com/repos/o/r", elapsed_ms=12.345, rate_limit_remaining="4999")

    output = http_log.getvalue()
    assert "Response 200 from https://api.github.com/repos/o/r" in output
    assert "elapsed=12.35ms" in output
    assert "rate_limit_remaining=4999" in output


def test_http_logging_skipped_when_not_debug() -> None:
    http_logger = logging.getLogger("prmerge.http")
    saved_level, saved_handlers = http_logger.level, http_logger.handlers
    buffer = io.StringIO()
    http_logger.setLevel(logging.INFO)
    http_logger.handlers = [logging.StreamHandler(buffer)]
    try:
        log_http_request("GET", "/repos/o/r")
        log_http_response(404, "/repos/o/r")
    finally:
        http_logger.setLevel(saved_level)
        http_logger.handlers = saved_handlers

    assert buffer.getvalue() == ""


@given(token=token_strategy)
@settings(max_examples=100)
def test_truncate_token_shows_prefix_only(token: str) -> None:
    truncated = truncate_token(token)

    assert token not in truncated
    assert truncated == f"{token[:4]}..."


def test_truncate_short_token() -> None:
    assert truncate_token("abc123") == "[TOKEN_REDACTED]"


def test_configure_logging_sets_levels() -> None:
    """Test that configure_logging properly sets log levels."""
    loggers = [get_logger(), get_logger("http"), get_logger("analysis")]
    saved = [(logger.level, list(logger.handlers)) for logger in loggers]
    buffer = io.StringIO()

    try:
        configure_logging(
            level=logging.WARNING,
            http_level=logging.DEBUG,
            analysis_level=logging.ERROR,
            handler=logging.StreamHandler(buffer),
            format_string="%(name)s:%(message)s",
        )

        assert loggers[0].level == logging.WARNING
        assert loggers[1].level == logging.DEBUG
        assert loggers[2].level == logging.ERROR

        get_logger("analysis").error("patch tree missing")
        assert "prmerge.analysis:patch tree missing" in buffer.getvalue()
    finally:
        for logger, (level, handlers) in zip(loggers, saved):
            logger.setLevel(level)
            logger.handlers = handlers


def test_get_logger_returns_correct_loggers() -> None:
    """Test that get_logger returns the correct logger instances."""
    assert get_logger().name == "prmerge"
    assert get_logger("http").name == "prmerge.http"
    assert get_logger("analysis").name == "prmerge.analysis"


def test_mask_sensitive_data_preserves_non_sensitive() -> None:
    """Test that mask_sensitive_data preserves non-sensitive content."""
    text = "Merge tree: 9c1d3f - PR tree: 9c1d3f"
    assert mask_sensitive_data(text) == text
