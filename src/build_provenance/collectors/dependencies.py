"""Lockfile dependency collector."""

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.utils.config import ProvenanceConfig


class DependenciesCollector:
    """Records the locked dependencies, split into direct and indirect.

    Only the top-level project of a build has a lockfile, so this
    collector is off unless enabled in the configuration.
    """

    @property
    def name(self) -> str:
        return "dependencies"

    @property
    def description(self) -> str:
        return "Locked dependencies and their direct/indirect classification"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.dependencies

    def collect(self, context: CollectContext) -> CollectorResult:
        report = context.classifier.classify_manifest(
            context.manifest_root, tree=context.config.collect.dependency_tree
        )
        return CollectorResult.ok(self.name, {"dependencies": report})
