"""Enabled-features collector."""

from __future__ import annotations

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.core.environment import UNSET
from build_provenance.utils.config import ProvenanceConfig

FEATURE_PREFIX = "CARGO_FEATURE_"


class FeaturesCollector:
    """Collects the features enabled for the build.

    Features are read from `CARGO_FEATURE_<NAME>` variables unless the
    `FEATURES` override lists them explicitly.
    """

    @property
    def name(self) -> str:
        return "features"

    @property
    def description(self) -> str:
        return "Enabled features, as given and lowercased"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.features

    def collect(self, context: CollectContext) -> CollectorResult:
        features = context.env.get_override("FEATURES", list[str])
        if features is UNSET:
            features = [
                key[len(FEATURE_PREFIX):]
                for key in context.env.with_prefix(FEATURE_PREFIX)
            ]
        features = sorted(features)
        return CollectorResult.ok(
            self.name,
            {
                "features": features,
                "features_lowercase": sorted(f.lower() for f in features),
            },
        )
