"""Common model types shared across modules."""

from typing import Any

from pydantic import BaseModel, Field


class ProvenanceIssue(BaseModel):
    """A degraded condition encountered while collecting provenance."""

    model_config = {"frozen": True}

    code: str = Field(description="Issue code for programmatic handling")
    message: str = Field(description="Human-readable message")
    collector: str | None = Field(
        default=None, description="Collector that reported the issue"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional context",
    )

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
