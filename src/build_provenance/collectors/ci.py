"""CI platform collector."""

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.utils.config import ProvenanceConfig


class CICollector:
    """Records the CI platform the build ran on, if any."""

    @property
    def name(self) -> str:
        return "ci"

    @property
    def description(self) -> str:
        return "Continuous Integration platform"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.ci

    def collect(self, context: CollectContext) -> CollectorResult:
        return CollectorResult.ok(self.name, {"ci_platform": context.ci_platform_name()})
