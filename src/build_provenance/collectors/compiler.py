"""Compiler version collector."""

from __future__ import annotations

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.core.environment import UNSET
from build_provenance.models.common import ProvenanceIssue
from build_provenance.utils.config import ProvenanceConfig
from build_provenance.utils.errors import CompilerProbeError
from build_provenance.utils.logging import get_logger

logger = get_logger("collectors.compiler")


class CompilerCollector:
    """Records the output of `RUSTC -V` and `RUSTDOC -V`.

    A failing compiler probe is fatal. A failing documentation generator
    probe is recorded as an empty string.
    """

    @property
    def name(self) -> str:
        return "compiler"

    @property
    def description(self) -> str:
        return "Compiler and documentation generator versions"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.compiler

    def collect(self, context: CollectContext) -> CollectorResult:
        env = context.env
        issues: list[ProvenanceIssue] = []

        rustc_version = env.get_override("RUSTC_VERSION", str)
        if rustc_version is UNSET:
            rustc_version = context.version_probe(env.require("RUSTC"))

        rustdoc_version = env.get_override("RUSTDOC_VERSION", str)
        if rustdoc_version is UNSET:
            rustdoc = env.require("RUSTDOC")
            try:
                rustdoc_version = context.version_probe(rustdoc)
            except CompilerProbeError as e:
                logger.warning("%s; recording an empty RUSTDOC_VERSION", e.message)
                issues.append(e.to_issue(self.name))
                rustdoc_version = ""

        return CollectorResult.ok(
            self.name,
            {"rustc_version": rustc_version, "rustdoc_version": rustdoc_version},
            issues,
        )
