"""Collector registry."""

from typing import Iterator

from build_provenance.collectors.base import Collector
from build_provenance.utils.config import ProvenanceConfig


class CollectorRegistry:
    """Ordered registry of provenance collectors.

    Collectors run in registration order.

    Example:
        registry = CollectorRegistry()
        registry.register(PackageCollector())
        registry.register(GitCollector())

        for collector in registry.enabled(config):
            result = collector.collect(context)
    """

    def __init__(self) -> None:
        self._collectors: dict[str, Collector] = {}

    def register(self, collector: Collector) -> None:
        """Register a collector.

        Raises:
            ValueError: If a collector with the same name is already registered
        """
        if collector.name in self._collectors:
            raise ValueError(f"Collector '{collector.name}' is already registered")
        self._collectors[collector.name] = collector

    def unregister(self, name: str) -> None:
        """Unregister a collector by name.

        Raises:
            KeyError: If no collector with that name is registered
        """
        if name not in self._collectors:
            raise KeyError(f"No collector named '{name}' is registered")
        del self._collectors[name]

    def get(self, name: str) -> Collector | None:
        return self._collectors.get(name)

    def __getitem__(self, name: str) -> Collector:
        if name not in self._collectors:
            raise KeyError(f"No collector named '{name}' is registered")
        return self._collectors[name]

    def __contains__(self, name: str) -> bool:
        return name in self._collectors

    def __iter__(self) -> Iterator[Collector]:
        return iter(self._collectors.values())

    def __len__(self) -> int:
        return len(self._collectors)

    @property
    def names(self) -> list[str]:
        """Names of all registered collectors, in run order."""
        return list(self._collectors.keys())

    def enabled(self, config: ProvenanceConfig) -> Iterator[Collector]:
        """Collectors the configuration asks for, in run order."""
        for collector in self._collectors.values():
            if collector.enabled(config):
                yield collector
