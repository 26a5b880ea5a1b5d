"""The collected build provenance record."""

from __future__ import annotations

from pydantic import BaseModel, Field

from build_provenance.models.common import ProvenanceIssue
from build_provenance.models.dependencies import DependencyReport

SCHEMA_VERSION = 1


class BuildProvenance(BaseModel):
    """Everything known about a build, ready to be rendered.

    Fields belonging to a collector that did not run are None.
    """

    model_config = {"frozen": True}

    schema_version: int = Field(default=SCHEMA_VERSION, description="Field-set version")

    # Package
    pkg_version: str | None = Field(default=None, description="The full version")
    pkg_version_major: str | None = Field(default=None, description="The major version")
    pkg_version_minor: str | None = Field(default=None, description="The minor version")
    pkg_version_patch: str | None = Field(default=None, description="The patch version")
    pkg_version_pre: str | None = Field(default=None, description="The pre-release version")
    pkg_authors: str | None = Field(default=None, description="Colon-separated list of authors")
    pkg_name: str | None = Field(default=None, description="The name of the package")
    pkg_description: str | None = Field(default=None, description="The description")
    pkg_homepage: str | None = Field(default=None, description="The homepage")
    pkg_license: str | None = Field(default=None, description="The license")
    pkg_repository: str | None = Field(default=None, description="The source repository")
    target: str | None = Field(default=None, description="Target triple")
    host: str | None = Field(default=None, description="Host triple of the compiler")
    profile: str | None = Field(default=None, description="`release` or `debug`")
    rustc: str | None = Field(default=None, description="Compiler executable")
    rustdoc: str | None = Field(default=None, description="Documentation generator executable")
    opt_level: str | None = Field(default=None, description="Optimization level")
    num_jobs: int | None = Field(default=None, description="Build parallelism")
    debug: bool | None = Field(default=None, description="Whether debug info was enabled")

    # Features
    features: list[str] | None = Field(default=None, description="Enabled features")
    features_lowercase: list[str] | None = Field(
        default=None, description="Enabled features, lowercase"
    )

    # Target configuration
    cfg_target_arch: str | None = Field(default=None, description="Target architecture")
    cfg_endian: str | None = Field(default=None, description="Endianness")
    cfg_env: str | None = Field(default=None, description="Toolchain environment")
    cfg_family: str | None = Field(default=None, description="OS family")
    cfg_os: str | None = Field(default=None, description="Operating system")
    cfg_pointer_width: str | None = Field(default=None, description="Pointer width")

    # Compiler
    rustc_version: str | None = Field(default=None, description="Output of `rustc -V`")
    rustdoc_version: str | None = Field(
        default=None, description="Output of `rustdoc -V`; empty if it failed"
    )

    # CI
    ci_platform: str | None = Field(default=None, description="Detected CI platform")

    # Git
    git_version: str | None = Field(default=None, description="HEAD's tag or commit description")
    git_dirty: bool | None = Field(default=None, description="Dirty or staged tracked files")
    git_head_ref: str | None = Field(default=None, description="Ref HEAD points to")
    git_commit_hash: str | None = Field(default=None, description="HEAD's full commit hash")
    git_commit_hash_short: str | None = Field(
        default=None, description="HEAD's short commit hash"
    )

    # Dependencies
    dependencies: DependencyReport | None = Field(
        default=None, description="Locked dependencies"
    )

    # Time
    built_time_utc: str | None = Field(default=None, description="Build time, RFC 2822, UTC")

    # Audit
    used_overrides: list[str] = Field(
        default_factory=list, description="Override fields that were honored"
    )
    issues: list[ProvenanceIssue] = Field(
        default_factory=list, description="Degraded conditions encountered"
    )

    @property
    def features_str(self) -> str | None:
        """The features as a comma-separated string."""
        if self.features is None:
            return None
        return ", ".join(self.features)

    @property
    def features_lowercase_str(self) -> str | None:
        """The lowercase features as a comma-separated string."""
        if self.features_lowercase is None:
            return None
        return ", ".join(self.features_lowercase)
