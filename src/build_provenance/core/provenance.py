"""ProvenanceCollector: runs the collectors and assembles the record."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from build_provenance.core.dependencies import DependencyClassifier
from build_provenance.core.environment import PACKAGE_NAME_KEY, EnvironmentSnapshot
from build_provenance.core.git import RepositoryProbe
from build_provenance.models.common import ProvenanceIssue
from build_provenance.models.provenance import BuildProvenance
from build_provenance.utils.config import ProvenanceConfig, get_config
from build_provenance.utils.logging import configure_logging, get_logger

if TYPE_CHECKING:
    from build_provenance.collectors.registry import CollectorRegistry

logger = get_logger("core.provenance")


class ProvenanceCollector:
    """Collects build provenance for a manifest root.

    Example:
        collector = ProvenanceCollector()
        provenance = collector.collect(Path(os.environ["CARGO_MANIFEST_DIR"]))
        print(provenance.pkg_version, provenance.git_version)
    """

    def __init__(
        self,
        config: ProvenanceConfig | None = None,
        registry: CollectorRegistry | None = None,
        probe: RepositoryProbe | None = None,
        classifier: DependencyClassifier | None = None,
        version_probe: Callable[[str], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            config: Configuration, defaults to the global configuration
            registry: Collectors to run, defaults to all built-in collectors
            probe: Repository probe, defaults to GitPython
            classifier: Lockfile classifier, defaults to the configured lockfile names
            version_probe: Runs `<executable> -V`
            clock: Current time, used when SOURCE_DATE_EPOCH is not set
        """
        # Imported here, collectors depend on core modules
        from build_provenance.collectors import default_registry

        self.config = config or get_config()
        self.registry = default_registry() if registry is None else registry
        self._probe = probe
        self._classifier = classifier
        self._version_probe = version_probe
        self._clock = clock

    def collect(
        self, manifest_root: Path | str, env: EnvironmentSnapshot | None = None
    ) -> BuildProvenance:
        """Run every enabled collector.

        Args:
            manifest_root: Directory of the project being built
            env: Environment snapshot, captured from the process if None

        Returns:
            The provenance record

        Raises:
            BuildProvenanceError: On any fatal condition (malformed override,
                missing variable, unreadable repository outside CI, broken
                lockfile, failing compiler probe)
        """
        from build_provenance.collectors.base import CollectContext

        if env is None:
            env = EnvironmentSnapshot.capture(override_marker=self.config.overrides.marker)

        context = CollectContext(
            manifest_root=Path(manifest_root),
            env=env,
            config=self.config,
            probe=self._probe,
            classifier=self._classifier,
            version_probe=self._version_probe,
            clock=self._clock,
        )

        data: dict[str, Any] = {}
        issues: list[ProvenanceIssue] = []
        for collector in self.registry.enabled(self.config):
            logger.debug("Running collector %s", collector.name)
            result = collector.collect(context)
            data.update(result.data)
            issues.extend(result.issues)

        used: list[str] = []
        if PACKAGE_NAME_KEY in env:
            used = env.used_overrides()
            for field in used:
                logger.info("Honored override for %s", field)
            for key in env.unused_overrides():
                logger.warning("%s is set but was not used", key)

        return BuildProvenance(**data, used_overrides=used, issues=issues)


def collect_provenance(
    manifest_root: Path | str,
    config: ProvenanceConfig | None = None,
    env: EnvironmentSnapshot | None = None,
) -> BuildProvenance:
    """Collect provenance with the built-in collectors.

    Entry point for build scripts: also sets up logging from the
    configuration's `logging` section.
    """
    config = config or get_config()
    configure_logging(config.logging.level, structured=config.logging.structured)
    return ProvenanceCollector(config=config).collect(manifest_root, env=env)
