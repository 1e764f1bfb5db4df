"""Commit-related data models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CommitParent:
    """Reference to a parent commit, as listed on a commit payload."""

    sha: str


@dataclass(frozen=True)
class Commit:
    """
    Read-only projection of a commit fetched from the hosting platform.

    ``parents`` keeps the order recorded by the platform: parent 0 is the
    base side of a merge, parents 1+ are the incoming side.
    """

    sha: str
    tree_sha: str
    parents: tuple[CommitParent, ...] = field(default_factory=tuple)
    message: str | None = None
    author_name: str | None = None
    committed_at: datetime | None = None

    @property
    def is_merge(self) -> bool:
        """True when the commit has two or more parents."""
        return len(self.parents) > 1

    @property
    def parent_shas(self) -> list[str]:
        return [parent.sha for parent in self.parents]
