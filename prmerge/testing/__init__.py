"""prmerge testing utilities.

Provides a mock hosting provider and fixtures for testing code that uses
prmerge without network access.
"""

from prmerge.testing.fixtures import (
    create_mock_commit,
    create_mock_pull_request,
    create_mock_repository,
)
from prmerge.testing.mock import (
    AsyncMockHostingProvider,
    MockCall,
    MockHostingProvider,
    MockResponse,
)

__all__ = [
    # Mock provider
    "MockHostingProvider",
    "AsyncMockHostingProvider",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_commit",
    "create_mock_repository",
    "create_mock_pull_request",
]
