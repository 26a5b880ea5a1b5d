"""Package identity collector."""

from __future__ import annotations

from typing import Any

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.utils.config import ProvenanceConfig
from build_provenance.utils.errors import ConfigurationError

SOURCE_DATE_EPOCH = "SOURCE_DATE_EPOCH"


class PackageCollector:
    """Collects package identity and build profile from the environment.

    Every variable below is set by the build driver; a missing one is a
    fatal `MissingEnvironmentError`.
    """

    # (field, variable)
    FIELDS = (
        ("pkg_version", "CARGO_PKG_VERSION"),
        ("pkg_version_major", "CARGO_PKG_VERSION_MAJOR"),
        ("pkg_version_minor", "CARGO_PKG_VERSION_MINOR"),
        ("pkg_version_patch", "CARGO_PKG_VERSION_PATCH"),
        ("pkg_version_pre", "CARGO_PKG_VERSION_PRE"),
        ("pkg_authors", "CARGO_PKG_AUTHORS"),
        ("pkg_name", "CARGO_PKG_NAME"),
        ("pkg_description", "CARGO_PKG_DESCRIPTION"),
        ("pkg_homepage", "CARGO_PKG_HOMEPAGE"),
        ("pkg_license", "CARGO_PKG_LICENSE"),
        ("pkg_repository", "CARGO_PKG_REPOSITORY"),
        ("target", "TARGET"),
        ("host", "HOST"),
        ("profile", "PROFILE"),
        ("rustc", "RUSTC"),
        ("rustdoc", "RUSTDOC"),
        ("opt_level", "OPT_LEVEL"),
    )

    @property
    def name(self) -> str:
        return "env"

    @property
    def description(self) -> str:
        return "Package identity, target triples and build profile"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.env

    def collect(self, context: CollectContext) -> CollectorResult:
        env = context.env
        data: dict[str, Any] = {field: env.require(key) for field, key in self.FIELDS}

        # Pinned for reproducible builds
        if env.get(SOURCE_DATE_EPOCH) is not None:
            data["num_jobs"] = 1
        else:
            num_jobs = env.require("NUM_JOBS")
            try:
                data["num_jobs"] = int(num_jobs)
            except ValueError:
                raise ConfigurationError(
                    f"NUM_JOBS is not an integer: {num_jobs!r}", config_key="NUM_JOBS"
                ) from None

        data["debug"] = env.require("DEBUG") == "true"
        return CollectorResult.ok(self.name, data)
