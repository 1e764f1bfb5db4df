"""prmerge type definitions.

This module exports all data model types used by the library.
"""

from prmerge.types.commits import Commit, CommitParent
from prmerge.types.pulls import MergeMode, PullRequest
from prmerge.types.repos import Repository

__all__ = [
    # Commit types
    "Commit",
    "CommitParent",
    # Repository types
    "Repository",
    # Pull request types
    "MergeMode",
    "PullRequest",
]
