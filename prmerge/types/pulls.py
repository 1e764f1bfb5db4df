"""Pull request-related data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from prmerge.types.repos import Repository


class MergeMode(str, Enum):
    """How a pull request was integrated into its base branch."""

    MERGE = "merge"
    SQUASH = "squash"
    REBASE = "rebase"


@dataclass
class PullRequest:
    """
    Pull request information.

    ``merge_commit_sha`` is only meaningful once the pull request is merged.
    ``repository`` starts empty and is filled in by the analyzer the first
    time it is needed.
    """

    owner: str
    repo_name: str
    number: int
    merge_commit_sha: str | None = None
    merged: bool = False
    title: str | None = None
    state: str | None = None  # "open" or "closed"
    base_branch: str | None = None
    head_sha: str | None = None
    merged_at: datetime | None = None
    repository: Repository | None = field(default=None, compare=False, repr=False)

    @property
    def is_merged(self) -> bool:
        return self.merged and self.merge_commit_sha is not None
