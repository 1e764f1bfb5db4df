"""
Pytest plugin for prmerge testing fixtures.

This module re-exports all fixtures from fixtures.py so pytest can load
them as a plugin.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["prmerge.testing.conftest"]

Or import the fixtures directly:

    from prmerge.testing.fixtures import mock_provider, sample_pull_request
"""

# Re-export all fixtures for pytest auto-discovery
from prmerge.testing.fixtures import (
    mock_owner,
    mock_pr_number,
    mock_provider,
    mock_provider_with_merge,
    mock_repo_name,
    sample_commit,
    sample_pull_request,
    sample_repository,
)

__all__ = [
    "mock_provider",
    "mock_owner",
    "mock_repo_name",
    "mock_pr_number",
    "sample_repository",
    "sample_commit",
    "sample_pull_request",
    "mock_provider_with_merge",
]
