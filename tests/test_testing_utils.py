"""
Tests for prmerge testing utilities.

Verifies that MockHostingProvider and fixtures work correctly.
"""

import asyncio

import pytest

from prmerge.exceptions import EmptyCommitError, FetchFailedError, NotFoundError
from prmerge.provider import HostingProvider
from prmerge.testing import (
    AsyncMockHostingProvider,
    MockHostingProvider,
    create_mock_commit,
    create_mock_pull_request,
    create_mock_repository,
)
from prmerge.types.commits import Commit
from prmerge.types.pulls import PullRequest


class TestMockHostingProvider:
    """Tests for MockHostingProvider."""

    def test_default_responses(self) -> None:
        """Test that the mock provider returns sensible defaults."""
        mock = MockHostingProvider()

        repo = mock.fetch_repository("octocat", "hello-world")
        assert repo.full_name == "octocat/hello-world"
        assert repo.default_branch == "main"

        pr = mock.fetch_pull_request("octocat", "hello-world", 5)
        assert pr.number == 5
        assert not pr.is_merged

        assert mock.fetch_pr_commits("octocat", "hello-world", 5) == []

    def test_unknown_commit_is_fetch_failure(self) -> None:
        mock = MockHostingProvider()

        with pytest.raises(FetchFailedError) as exc_info:
            mock.fetch_commit("octocat", "hello-world", "deadbeef")

        assert exc_info.value.sha == "deadbeef"
        assert exc_info.value.resource == "commit"

    def test_configured_responses(self) -> None:
        """Test that configured responses are returned."""
        mock = MockHostingProvider()
        commit = create_mock_commit(sha="abc", tree_sha="t1", parents=["p0", "p1"])
        mock.add_commit(commit)
        mock.configure_repository(
            "octocat", "hello-world", response=create_mock_repository(default_branch="trunk")
        )

        assert mock.fetch_commit("octocat", "hello-world", "abc") is commit
        assert mock.fetch_repository("octocat", "hello-world").default_branch == "trunk"

    def test_configured_errors(self) -> None:
        """Test that configured errors are raised."""
        mock = MockHostingProvider()
        mock.configure_pull_request(9, error=NotFoundError("NOT_FOUND", "Not Found"))

        with pytest.raises(NotFoundError) as exc_info:
            mock.fetch_pull_request("octocat", "hello-world", 9)

        assert exc_info.value.code == "NOT_FOUND"

    def test_empty_commit_payload(self) -> None:
        mock = MockHostingProvider()
        mock.configure_commit("abc")

        with pytest.raises(EmptyCommitError):
            mock.fetch_commit("octocat", "hello-world", "abc")

    def test_call_tracking(self) -> None:
        """Test that method calls are tracked."""
        mock = MockHostingProvider()
        mock.add_commit(create_mock_commit(sha="a"))

        mock.fetch_commit("octocat", "hello-world", "a")
        mock.fetch_commit("octocat", "hello-world", "a")
        mock.fetch_repository("octocat", "hello-world")

        assert mock.was_called("fetch_commit")
        assert mock.call_count("fetch_commit") == 2
        assert mock.call_count("fetch_repository") == 1
        assert not mock.was_called("fetch_pr_commits")

    def test_get_calls(self) -> None:
        """Test that call details can be retrieved."""
        mock = MockHostingProvider()

        mock.fetch_pr_commits("octocat", "hello-world", 42)

        calls = mock.get_calls("fetch_pr_commits")
        assert len(calls) == 1
        assert calls[0].args == ("octocat", "hello-world", 42)
        assert len(mock.get_calls()) == 1

    def test_reset(self) -> None:
        """Test that reset clears calls and responses."""
        mock = MockHostingProvider()
        mock.add_commit(create_mock_commit(sha="a"))
        mock.fetch_commit("octocat", "hello-world", "a")

        mock.reset()

        assert not mock.was_called("fetch_commit")
        with pytest.raises(FetchFailedError):
            mock.fetch_commit("octocat", "hello-world", "a")

    def test_satisfies_protocol(self) -> None:
        provider: HostingProvider = MockHostingProvider()

        assert provider.fetch_pr_commits("octocat", "hello-world", 1) == []

    def test_async_view_shares_fixtures(self) -> None:
        mock = MockHostingProvider()
        mock.add_commit(create_mock_commit(sha="a", tree_sha="t"))
        provider = AsyncMockHostingProvider(mock)

        commit = asyncio.run(provider.fetch_commit("octocat", "hello-world", "a"))

        assert commit.tree_sha == "t"
        assert mock.call_count("fetch_commit") == 1


class TestFixtures:
    """Tests for the pytest fixtures shipped with prmerge.testing."""

    def test_sample_commit(self, sample_commit: Commit) -> None:
        assert not sample_commit.is_merge
        assert sample_commit.parent_shas == ["7638417db6d59f3c431d3e1f261cc637155684cd"]

    def test_mock_provider_with_merge(
        self,
        mock_provider_with_merge: MockHostingProvider,
        sample_pull_request: PullRequest,
    ) -> None:
        merge = mock_provider_with_merge.fetch_commit(
            "octocat", "hello-world", sample_pull_request.merge_commit_sha
        )
        commits = mock_provider_with_merge.fetch_pr_commits("octocat", "hello-world", 42)

        assert merge.is_merge
        assert [commit.sha for commit in commits] == ["c1", "c2"]

    def test_fixture_values(self, mock_owner: str, mock_repo_name: str, mock_pr_number: int) -> None:
        assert (mock_owner, mock_repo_name, mock_pr_number) == ("octocat", "hello-world", 42)


class TestHelperFunctions:
    """Tests for helper functions."""

    def test_create_mock_commit(self) -> None:
        """Test create_mock_commit helper."""
        commit = create_mock_commit(sha="abc", parents=["p0", "p1"], message="Merge")

        assert commit.tree_sha == "tree-abc"  # Default
        assert commit.parent_shas == ["p0", "p1"]
        assert commit.is_merge
        assert commit.message == "Merge"

    def test_create_mock_repository(self) -> None:
        """Test create_mock_repository helper."""
        repo = create_mock_repository(owner="me", name="proj", repo_id=7)

        assert repo.slug == "me/proj"
        assert repo.repo_id == 7
        assert repo.default_branch == "main"  # Default

    def test_create_mock_pull_request(self) -> None:
        """Test create_mock_pull_request helper."""
        pr = create_mock_pull_request(number=3, title="My PR")

        assert pr.number == 3
        assert pr.title == "My PR"
        assert pr.is_merged  # Default
        assert pr.merge_commit_sha == "merge-sha"
