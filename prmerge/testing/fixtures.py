"""
Pytest fixtures for prmerge testing.

Provides common fixtures and factories for testing code that analyzes
merged pull requests.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Generator

import pytest

from prmerge.testing.mock import MockHostingProvider
from prmerge.types.commits import Commit, CommitParent
from prmerge.types.pulls import PullRequest
from prmerge.types.repos import Repository


# ============================================================================
# Mock Provider Fixtures
# ============================================================================


@pytest.fixture
def mock_provider() -> Generator[MockHostingProvider, None, None]:
    """
    Provide a MockHostingProvider for testing.

    Example:
        ```python
        def test_my_feature(mock_provider):
            mock_provider.add_commit(create_mock_commit(sha="abc"))
            result = my_function(mock_provider)
            assert mock_provider.was_called("fetch_commit")
        ```
    """
    provider = MockHostingProvider()
    yield provider
    provider.reset()


@pytest.fixture
def mock_owner() -> str:
    """Provide a test repository owner."""
    return "octocat"


@pytest.fixture
def mock_repo_name() -> str:
    """Provide a test repository name."""
    return "hello-world"


@pytest.fixture
def mock_pr_number() -> int:
    """Provide a test pull request number."""
    return 42


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_repository() -> Repository:
    """Provide a sample Repository object."""
    return create_mock_repository(repo_id=1296269)


@pytest.fixture
def sample_commit() -> Commit:
    """Provide a sample single-parent Commit object."""
    return create_mock_commit(
        sha="6dcb09b5b57875f334f61aebed695e2e4193db5e",
        tree_sha="6dcb09b5b57875f334f61aebed695e2e4193db5f",
        parents=["7638417db6d59f3c431d3e1f261cc637155684cd"],
        message="Fix all the bugs",
        author_name="Monalisa Octocat",
        committed_at=datetime(2011, 4, 14, 16, 0, 49),
    )


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide a sample merged PullRequest object."""
    return create_mock_pull_request()


@pytest.fixture
def mock_provider_with_merge(
    mock_provider: MockHostingProvider,
    sample_pull_request: PullRequest,
) -> MockHostingProvider:
    """
    Provide a MockHostingProvider holding a pull request merged with a merge commit.

    The merge commit "merge-sha" has parents "base-sha" (tree "base-tree")
    and "c2" (tree "branch-tree"); the pull request commits are "c1" and
    "c2", so the patch parent is index 1.

    Example:
        ```python
        def test_cherry_pick(mock_provider_with_merge, sample_pull_request):
            analyzer = PullRequestAnalyzer(mock_provider_with_merge)
            assert analyzer.find_patch_tree(sample_pull_request) == 1
        ```
    """
    c1 = create_mock_commit(sha="c1", tree_sha="c1-tree", parents=["base-sha"])
    c2 = create_mock_commit(sha="c2", tree_sha="branch-tree", parents=["c1"])
    mock_provider.add_commit(create_mock_commit(sha="base-sha", tree_sha="base-tree"))
    mock_provider.add_commit(c1)
    mock_provider.add_commit(c2)
    mock_provider.add_commit(
        create_mock_commit(
            sha=sample_pull_request.merge_commit_sha,
            tree_sha="merged-tree",
            parents=["base-sha", "c2"],
        )
    )
    mock_provider.configure_pr_commits(sample_pull_request.number, response=[c1, c2])
    mock_provider.configure_pull_request(sample_pull_request.number, response=sample_pull_request)
    return mock_provider


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_commit(
    sha: str = "test-commit-sha",
    tree_sha: str | None = None,
    parents: Sequence[str] = (),
    **kwargs: Any,
) -> Commit:
    """
    Create a Commit with customizable fields.

    Args:
        sha: Commit SHA
        tree_sha: Tree SHA (default: "tree-<sha>")
        parents: Parent commit SHAs, in order
        **kwargs: Additional fields to override

    Returns:
        Commit object
    """
    return Commit(
        sha=sha,
        tree_sha=tree_sha if tree_sha is not None else f"tree-{sha}",
        parents=tuple(CommitParent(sha=parent) for parent in parents),
        **kwargs,
    )


def create_mock_repository(
    owner: str = "octocat",
    name: str = "hello-world",
    **kwargs: Any,
) -> Repository:
    """
    Create a Repository with customizable fields.

    Args:
        owner: Repository owner
        name: Repository name
        **kwargs: Additional fields to override

    Returns:
        Repository object
    """
    defaults = {
        "full_name": f"{owner}/{name}",
        "default_branch": "main",
        "html_url": f"https://github.com/{owner}/{name}",
    }
    defaults.update(kwargs)
    return Repository(owner=owner, name=name, **defaults)


def create_mock_pull_request(
    number: int = 42,
    owner: str = "octocat",
    repo_name: str = "hello-world",
    **kwargs: Any,
) -> PullRequest:
    """
    Create a merged PullRequest with customizable fields.

    Args:
        number: Pull request number
        owner: Repository owner
        repo_name: Repository name
        **kwargs: Additional fields to override

    Returns:
        PullRequest object
    """
    defaults = {
        "merge_commit_sha": "merge-sha",
        "merged": True,
        "title": "Test PR",
        "state": "closed",
        "base_branch": "main",
        "merged_at": datetime(2024, 1, 15, 16, 0, 0),
    }
    defaults.update(kwargs)
    return PullRequest(owner=owner, repo_name=repo_name, number=number, **defaults)


__all__ = [
    # Fixtures (exported for documentation, actual fixtures are auto-discovered)
    "mock_provider",
    "mock_owner",
    "mock_repo_name",
    "mock_pr_number",
    "sample_repository",
    "sample_commit",
    "sample_pull_request",
    "mock_provider_with_merge",
    # Helper functions
    "create_mock_commit",
    "create_mock_repository",
    "create_mock_pull_request",
]
