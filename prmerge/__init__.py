"""prmerge - infer how merged pull requests were integrated."""

from prmerge.analyzer import AsyncPullRequestAnalyzer, PullRequestAnalyzer
from prmerge.async_client import AsyncGitHubClient
from prmerge.client import GitHubClient
from prmerge.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CancelledError,
    ConfigurationError,
    EmptyCommitError,
    FetchFailedError,
    InvalidInputError,
    MissingRepositoryError,
    NotFoundError,
    PatchTreeNotFoundError,
    PRMergeError,
    RateLimitedError,
    ServerError,
    ValidationError,
)
from prmerge.logging import configure_logging, get_logger
from prmerge.merge_mode import MergeModeClassifier, classify_merge_mode
from prmerge.patch_tree import AsyncPatchTreeResolver, PatchTreeResolver
from prmerge.provider import (
    AsyncGitHubProvider,
    AsyncHostingProvider,
    GitHubProvider,
    HostingProvider,
)
from prmerge.transport import HTTPTransport, RetryConfig
from prmerge.types import Commit, CommitParent, MergeMode, PullRequest, Repository

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Analysis
    "classify_merge_mode",
    "MergeModeClassifier",
    "PatchTreeResolver",
    "AsyncPatchTreeResolver",
    "PullRequestAnalyzer",
    "AsyncPullRequestAnalyzer",
    # Providers
    "HostingProvider",
    "AsyncHostingProvider",
    "GitHubProvider",
    "AsyncGitHubProvider",
    # Main Clients
    "GitHubClient",
    "AsyncGitHubClient",
    # Types
    "Commit",
    "CommitParent",
    "MergeMode",
    "PullRequest",
    "Repository",
    # Exceptions
    "PRMergeError",
    "InvalidInputError",
    "MissingRepositoryError",
    "FetchFailedError",
    "EmptyCommitError",
    "PatchTreeNotFoundError",
    "CancelledError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "ConfigurationError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
