"""Base collector protocol and types."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from build_provenance.core.ci import detect_ci
from build_provenance.core.compiler import get_version_from_cmd
from build_provenance.core.dependencies import DependencyClassifier
from build_provenance.core.environment import UNSET, EnvironmentSnapshot
from build_provenance.core.git import RepositoryProbe
from build_provenance.models.ci import CIPlatform
from build_provenance.models.common import ProvenanceIssue
from build_provenance.utils.config import ProvenanceConfig


class CollectorResult(BaseModel):
    """Result from a collector."""

    model_config = {"frozen": True}

    collector_name: str = Field(description="Name of the collector that produced this result")
    data: dict[str, Any] = Field(default_factory=dict, description="Collected fields")
    issues: list[ProvenanceIssue] = Field(
        default_factory=list, description="Degraded conditions encountered"
    )

    @classmethod
    def ok(
        cls, name: str, data: dict[str, Any], issues: list[ProvenanceIssue] | None = None
    ) -> "CollectorResult":
        """Create a result."""
        return cls(collector_name=name, data=data, issues=issues or [])


class CollectContext:
    """Everything a collector may read.

    The environment snapshot is shared by all collectors of one run so
    that override usage is tracked across them.
    """

    def __init__(
        self,
        manifest_root: Path,
        env: EnvironmentSnapshot,
        config: ProvenanceConfig | None = None,
        probe: RepositoryProbe | None = None,
        classifier: DependencyClassifier | None = None,
        version_probe: Callable[[str], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.manifest_root = manifest_root
        self.env = env
        self.config = config or ProvenanceConfig()
        self.probe = probe or RepositoryProbe()
        self.classifier = classifier or DependencyClassifier(
            self.config.dependencies.lockfile_names
        )
        self.version_probe = version_probe or get_version_from_cmd
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self._ci_detected = False
        self._ci: CIPlatform | None = None

    @property
    def ci_platform(self) -> CIPlatform | None:
        """CI platform detected from the environment, computed once."""
        if not self._ci_detected:
            self._ci = detect_ci(self.env)
            self._ci_detected = True
        return self._ci

    def ci_platform_name(self) -> str | None:
        """CI platform of the build: the `CI_PLATFORM` override, else the detected one.

        Raises:
            MissingEnvironmentError: If CARGO_PKG_NAME is absent
        """
        platform = self.env.get_override("CI_PLATFORM", Optional[str])
        if platform is UNSET:
            detected = self.ci_platform
            platform = detected.display_name if detected is not None else None
        return platform


@runtime_checkable
class Collector(Protocol):
    """Protocol for provenance collectors.

    A collector contributes a group of fields to the provenance record.
    Fatal conditions are raised; degraded ones are returned as issues.

    Example:
        class HostnameCollector:
            @property
            def name(self) -> str:
                return "hostname"

            @property
            def description(self) -> str:
                return "Records the build host"

            def enabled(self, config: ProvenanceConfig) -> bool:
                return True

            def collect(self, context: CollectContext) -> CollectorResult:
                return CollectorResult.ok(self.name, {"hostname": context.env.get("HOSTNAME")})
    """

    @property
    def name(self) -> str:
        """Unique name for this collector."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what this collector gathers."""
        ...

    def enabled(self, config: ProvenanceConfig) -> bool:
        """Whether the configuration asks for this collector."""
        ...

    def collect(self, context: CollectContext) -> CollectorResult:
        """Collect fields.

        Args:
            context: Shared collection context

        Returns:
            CollectorResult with the collected fields
        """
        ...
