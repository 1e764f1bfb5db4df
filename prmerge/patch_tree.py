"""
Patch tree resolution for merge commits.

A merge commit joins a base-side tree and the pull request's branch tree.
To cherry-pick the pull request, the merge commit has to be diffed against
the parent that carries the branch's final tree; this module finds that
parent.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from prmerge.exceptions import (
    EmptyCommitError,
    FetchFailedError,
    InvalidInputError,
    PatchTreeNotFoundError,
)
from prmerge.logging import get_logger
from prmerge.types.commits import Commit, CommitParent

if TYPE_CHECKING:
    from prmerge.provider import AsyncHostingProvider, HostingProvider

logger = get_logger("analysis")


def _target_tree(
    merge_commit: Commit | None,
    last_pr_commit: Commit | None,
    pr_commits: Sequence[Commit] | None,
) -> str:
    """Validate the inputs and return the tree the branch side must carry."""
    if (pr_commits is not None and not pr_commits) or last_pr_commit is None:
        raise InvalidInputError("unable to find patch tree, commit list is empty")
    if merge_commit is None:
        raise InvalidInputError("unable to find patch tree, merge commit is missing")
    return last_pr_commit.tree_sha


def _parent_fetch_failed(merge_commit: Commit, parent: CommitParent) -> FetchFailedError:
    return FetchFailedError(
        f"querying parent commit {parent.sha} of merge commit {merge_commit.sha}",
        resource="commit",
        sha=parent.sha,
    )


class PatchTreeResolver:
    """
    Finds which parent of a merge commit the cherry-pick diff is taken against.

    Parents are fetched one at a time in their recorded order and the scan
    stops at the first parent whose tree equals the last pull request
    commit's tree, so ties resolve to the lowest index.
    """

    def __init__(self, provider: HostingProvider, owner: str, name: str) -> None:
        """
        Args:
            provider: Hosting provider used to fetch the parent commits
            owner: Account that owns the repository
            name: Repository name
        """
        self.provider = provider
        self.owner = owner
        self.name = name

    def resolve_patch_parent(
        self,
        merge_commit: Commit | None,
        last_pr_commit: Commit | None,
        pr_commits: Sequence[Commit] | None = None,
    ) -> int:
        """
        Return the zero-based index of the parent carrying the PR's tree.

        Args:
            merge_commit: The pull request's (multi-parent) merge commit
            last_pr_commit: Most recent commit of the pull request
            pr_commits: Full pull request commit list, if the caller has it

        Raises:
            InvalidInputError: If there are no pull request commits
            FetchFailedError: If a parent commit cannot be fetched or is empty
            PatchTreeNotFoundError: If no parent carries the target tree
            CancelledError: If the provider's fetch was cancelled
        """
        pr_tree = _target_tree(merge_commit, last_pr_commit, pr_commits)

        for index, parent in enumerate(merge_commit.parents):
            try:
                parent_commit = self.provider.fetch_commit(self.owner, self.name, parent.sha)
            except (FetchFailedError, EmptyCommitError) as exc:
                raise _parent_fetch_failed(merge_commit, parent) from exc

            logger.info("PR: %s - Parent: %s", pr_tree, parent_commit.tree_sha)
            if parent_commit.tree_sha == pr_tree:
                logger.info("Cherry pick to be performed diffing the parent #%d tree", index)
                return index

        # Never fall back to parent 0
        raise PatchTreeNotFoundError(len(merge_commit.parents), merge_commit.sha)


class AsyncPatchTreeResolver:
    """Async counterpart of PatchTreeResolver."""

    def __init__(self, provider: AsyncHostingProvider, owner: str, name: str) -> None:
        self.provider = provider
        self.owner = owner
        self.name = name

    async def resolve_patch_parent(
        self,
        merge_commit: Commit | None,
        last_pr_commit: Commit | None,
        pr_commits: Sequence[Commit] | None = None,
    ) -> int:
        """See PatchTreeResolver.resolve_patch_parent."""
        pr_tree = _target_tree(merge_commit, last_pr_commit, pr_commits)

        for index, parent in enumerate(merge_commit.parents):
            try:
                parent_commit = await self.provider.fetch_commit(
                    self.owner, self.name, parent.sha
                )
            except (FetchFailedError, EmptyCommitError) as exc:
                raise _parent_fetch_failed(merge_commit, parent) from exc

            logger.info("PR: %s - Parent: %s", pr_tree, parent_commit.tree_sha)
            if parent_commit.tree_sha == pr_tree:
                logger.info("Cherry pick to be performed diffing the parent #%d tree", index)
                return index

        raise PatchTreeNotFoundError(len(merge_commit.parents), merge_commit.sha)
