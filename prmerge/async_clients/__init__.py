"""prmerge async resource clients."""

from prmerge.async_clients.pulls import AsyncPullsClient
from prmerge.async_clients.repos import AsyncReposClient

__all__ = [
    "AsyncReposClient",
    "AsyncPullsClient",
]
