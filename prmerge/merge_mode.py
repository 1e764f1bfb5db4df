"""
Merge strategy inference.

Works out after the fact whether a pull request was integrated with a merge
commit, a squash or a rebase, using only commit shape and tree hashes that
have already been fetched.
"""

from collections.abc import Sequence

from prmerge.exceptions import InvalidInputError
from prmerge.logging import get_logger
from prmerge.types.commits import Commit
from prmerge.types.pulls import MergeMode

logger = get_logger("analysis")


def _pr_label(pr_number: int | None) -> str:
    return f"PR #{pr_number}" if pr_number is not None else "PR"


def classify_merge_mode(
    merge_commit: Commit | None,
    pr_commits: Sequence[Commit],
    pr_number: int | None = None,
) -> MergeMode:
    """
    Determine how a pull request was merged.

    Args:
        merge_commit: The commit recorded as the pull request's merge commit
        pr_commits: The pull request's own commits, oldest first
        pr_number: Pull request number, used for log lines only

    Returns:
        MergeMode.MERGE when the merge commit has two or more parents.
        MergeMode.SQUASH when the pull request has a single commit: a
        one-commit squash and a one-commit rebase produce identical trees,
        so this case is reported as a squash and never as a rebase.
        Otherwise MergeMode.REBASE if the merge commit's tree equals the
        tree of the last pull request commit, MergeMode.SQUASH if not.

    Raises:
        InvalidInputError: If merge_commit is None or pr_commits is empty
    """
    label = _pr_label(pr_number)

    if merge_commit is None:
        raise InvalidInputError(f"unable to get merge mode of {label}, merge commit is missing")
    if not pr_commits:
        raise InvalidInputError(f"unable to get merge mode of {label}, commit list is empty")

    # More than one parent is only possible for a true merge commit
    if merge_commit.is_merge:
        logger.info("%s merged via a merge commit", label)
        return MergeMode.MERGE

    if len(pr_commits) == 1:
        logger.info("Considering %s as squash as it only has one commit", label)
        return MergeMode.SQUASH

    # Squashed: the merge commit is a new commit with a combined tree.
    # Rebased: the merge commit is the replayed last commit, same tree.
    merge_tree = merge_commit.tree_sha
    pr_tree = pr_commits[-1].tree_sha

    logger.info("Merge tree: %s - PR tree: %s", merge_tree, pr_tree)

    if merge_tree == pr_tree:
        logger.info("%s was merged via rebase", label)
        return MergeMode.REBASE

    logger.info("%s was merged via squash", label)
    return MergeMode.SQUASH


class MergeModeClassifier:
    """
    Stateless wrapper around classify_merge_mode.

    Exists so callers can inject the classifier like the other analysis
    components.
    """

    def classify(
        self,
        merge_commit: Commit | None,
        pr_commits: Sequence[Commit],
        pr_number: int | None = None,
    ) -> MergeMode:
        return classify_merge_mode(merge_commit, pr_commits, pr_number=pr_number)
