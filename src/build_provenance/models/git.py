"""Repository state models."""

from pydantic import BaseModel, Field


class RepositoryDescriptor(BaseModel):
    """Human-readable description of a repository's HEAD."""

    model_config = {"frozen": True}

    tag: str = Field(
        description="HEAD's tag, or a commit-id based description if untagged"
    )
    dirty: bool = Field(description="Whether tracked files are modified or staged")


class RepositoryHead(BaseModel):
    """Reference and commit identifiers of HEAD."""

    model_config = {"frozen": True}

    branch: str | None = Field(
        default=None,
        description="Fully qualified ref HEAD points to (e.g. refs/heads/main); None if detached",
    )
    commit: str = Field(description="Full commit hash")
    commit_short: str = Field(description="Unambiguous short commit hash")

    @property
    def is_detached(self) -> bool:
        """Whether HEAD points directly at a commit."""
        return self.branch is None
