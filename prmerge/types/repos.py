"""Repository-related data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Repository:
    """Repository information."""

    owner: str
    name: str
    full_name: str
    default_branch: str
    html_url: str | None = None
    repo_id: int | None = None

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"
