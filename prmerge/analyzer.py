"""
Pull request level merge analysis.

PullRequestAnalyzer ties the hosting provider to the merge mode classifier
and the patch tree resolver: it resolves a pull request's repository,
fetches its commits and merge commit, and answers how the pull request was
merged and which merge parent a cherry-pick should diff against.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from prmerge.exceptions import FetchFailedError, InvalidInputError, MissingRepositoryError
from prmerge.logging import get_logger
from prmerge.merge_mode import MergeModeClassifier
from prmerge.patch_tree import AsyncPatchTreeResolver, PatchTreeResolver
from prmerge.types.commits import Commit
from prmerge.types.pulls import MergeMode, PullRequest
from prmerge.types.repos import Repository

if TYPE_CHECKING:
    from prmerge.provider import AsyncHostingProvider, HostingProvider

logger = get_logger("analysis")


def _require_merge_commit_sha(pr: PullRequest) -> str:
    if not pr.merge_commit_sha:
        raise InvalidInputError(f"pull request #{pr.number} has no merge commit")
    return pr.merge_commit_sha


class PullRequestAnalyzer:
    """
    Answers merge questions about pull requests through a HostingProvider.

    Nothing is cached except the repository reference stored on the
    PullRequest itself; repeated calls fetch again.

    Example:
        ```python
        from prmerge import GitHubClient, GitHubProvider, MergeMode, PullRequestAnalyzer

        with GitHubClient.from_env() as client:
            analyzer = PullRequestAnalyzer(GitHubProvider(client))
            pr = analyzer.get_pull_request("octocat", "hello-world", 42)
            mode = analyzer.get_merge_mode(pr)
            if mode is MergeMode.MERGE:
                parent = analyzer.find_patch_tree(pr)
        ```
    """

    def __init__(
        self,
        provider: HostingProvider,
        classifier: MergeModeClassifier | None = None,
    ) -> None:
        self.provider = provider
        self.classifier = classifier or MergeModeClassifier()

    def get_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        return self.provider.fetch_pull_request(owner, name, number)

    def get_repository(self, pr: PullRequest) -> Repository:
        """
        Return the repository the pull request lives in, fetching it once.

        Raises:
            MissingRepositoryError: If the repository cannot be fetched
        """
        if pr.repository is not None:
            return pr.repository

        try:
            pr.repository = self.provider.fetch_repository(pr.owner, pr.repo_name)
        except FetchFailedError as exc:
            logger.error("Unable to load repository of PR #%d: %s", pr.number, exc.message)
            raise MissingRepositoryError(pr.owner, pr.repo_name, pr.number) from exc
        return pr.repository

    def get_commits(self, pr: PullRequest) -> list[Commit]:
        """Return the commits of the pull request, oldest first."""
        commits = self.provider.fetch_pr_commits(pr.owner, pr.repo_name, pr.number)
        logger.info("Read %d commits from PR %d", len(commits), pr.number)
        return commits

    def get_merge_commit(self, pr: PullRequest) -> Commit:
        """
        Fetch the commit recorded as the pull request's merge commit.

        Raises:
            InvalidInputError: If the pull request has no merge commit SHA
            MissingRepositoryError: If the repository cannot be resolved
            FetchFailedError: If the commit cannot be fetched
            EmptyCommitError: If the platform returned an empty commit
        """
        sha = _require_merge_commit_sha(pr)
        self.get_repository(pr)
        return self.provider.fetch_commit(pr.owner, pr.repo_name, sha)

    def get_merge_mode(
        self, pr: PullRequest, commits: Sequence[Commit] | None = None
    ) -> MergeMode:
        """
        Determine how the pull request was merged.

        Args:
            pr: A merged pull request
            commits: The pull request's commits, if already fetched

        Returns:
            MergeMode.MERGE, MergeMode.SQUASH or MergeMode.REBASE. Single
            commit pull requests are always reported as squashed.
        """
        self.get_repository(pr)
        merge_commit = self.get_merge_commit(pr)
        if commits is None:
            commits = self.get_commits(pr)
        return self.classifier.classify(merge_commit, commits, pr_number=pr.number)

    def find_patch_tree(
        self, pr: PullRequest, commits: Sequence[Commit] | None = None
    ) -> int:
        """
        Return the merge commit parent index to diff against for a cherry-pick.

        Only meaningful for pull requests merged with a merge commit.

        Raises:
            InvalidInputError: If the pull request has no commits
            PatchTreeNotFoundError: If no parent carries the branch tree
        """
        if commits is None:
            commits = self.get_commits(pr)
        if not commits:
            raise InvalidInputError("unable to find patch tree, commit list is empty")

        merge_commit = self.get_merge_commit(pr)
        resolver = PatchTreeResolver(self.provider, pr.owner, pr.repo_name)
        return resolver.resolve_patch_parent(merge_commit, commits[-1], commits)


class AsyncPullRequestAnalyzer:
    """Async counterpart of PullRequestAnalyzer."""

    def __init__(
        self,
        provider: AsyncHostingProvider,
        classifier: MergeModeClassifier | None = None,
    ) -> None:
        self.provider = provider
        self.classifier = classifier or MergeModeClassifier()

    async def get_pull_request(self, owner: str, name: str, number: int) -> PullRequest:
        return await self.provider.fetch_pull_request(owner, name, number)

    async def get_repository(self, pr: PullRequest) -> Repository:
        if pr.repository is not None:
            return pr.repository

        try:
            pr.repository = await self.provider.fetch_repository(pr.owner, pr.repo_name)
        except FetchFailedError as exc:
            logger.error("Unable to load repository of PR #%d: %s", pr.number, exc.message)
            raise MissingRepositoryError(pr.owner, pr.repo_name, pr.number) from exc
        return pr.repository

    async def get_commits(self, pr: PullRequest) -> list[Commit]:
        commits = await self.provider.fetch_pr_commits(pr.owner, pr.repo_name, pr.number)
        logger.info("Read %d commits from PR %d", len(commits), pr.number)
        return commits

    async def get_merge_commit(self, pr: PullRequest) -> Commit:
        sha = _require_merge_commit_sha(pr)
        await self.get_repository(pr)
        return await self.provider.fetch_commit(pr.owner, pr.repo_name, sha)

    async def get_merge_mode(
        self, pr: PullRequest, commits: Sequence[Commit] | None = None
    ) -> MergeMode:
        await self.get_repository(pr)
        merge_commit = await self.get_merge_commit(pr)
        if commits is None:
            commits = await self.get_commits(pr)
        return self.classifier.classify(merge_commit, commits, pr_number=pr.number)

    async def find_patch_tree(
        self, pr: PullRequest, commits: Sequence[Commit] | None = None
    ) -> int:
        if commits is None:
            commits = await self.get_commits(pr)
        if not commits:
            raise InvalidInputError("unable to find patch tree, commit list is empty")

        merge_commit = await self.get_merge_commit(pr)
        resolver = AsyncPatchTreeResolver(self.provider, pr.owner, pr.repo_name)
        return await resolver.resolve_patch_parent(merge_commit, commits[-1], commits)
