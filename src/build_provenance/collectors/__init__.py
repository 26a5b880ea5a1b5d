"""Provenance collectors."""

from build_provenance.collectors.base import CollectContext, Collector, CollectorResult
from build_provenance.collectors.registry import CollectorRegistry
from build_provenance.collectors.package import PackageCollector
from build_provenance.collectors.features import FeaturesCollector
from build_provenance.collectors.cfg import CfgCollector
from build_provenance.collectors.compiler import CompilerCollector
from build_provenance.collectors.ci import CICollector
from build_provenance.collectors.git import GitCollector
from build_provenance.collectors.dependencies import DependenciesCollector
from build_provenance.collectors.time import TimeCollector

__all__ = [
    "CollectContext",
    "Collector",
    "CollectorResult",
    "CollectorRegistry",
    "PackageCollector",
    "FeaturesCollector",
    "CfgCollector",
    "CompilerCollector",
    "CICollector",
    "GitCollector",
    "DependenciesCollector",
    "TimeCollector",
    "default_registry",
]


def default_registry() -> CollectorRegistry:
    """Create a registry holding every built-in collector, in run order."""
    registry = CollectorRegistry()
    for collector in (
        CICollector(),
        PackageCollector(),
        FeaturesCollector(),
        CompilerCollector(),
        GitCollector(),
        DependenciesCollector(),
        TimeCollector(),
        CfgCollector(),
    ):
        registry.register(collector)
    return registry
