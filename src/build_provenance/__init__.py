"""build-provenance: build-time provenance metadata for compiled artifacts.

Collects, from inside a build, the information a compiled artifact may
want to carry about how it was built:

- **Package identity**: version components, authors, license, target and host
- **Toolchain**: compiler and documentation generator versions
- **CI context**: which Continuous Integration platform ran the build
- **Repository state**: tag or commit description, dirty flag, HEAD ref and hashes
- **Dependencies**: locked packages, split into direct and indirect

Any field can be forced by setting `BUILT_OVERRIDE_<package>_<FIELD>` in
the environment.

Usage:
    from build_provenance import ProvenanceCollector, load_config

    config = load_config()
    config.collect.dependencies = True
    provenance = ProvenanceCollector(config=config).collect(manifest_root)
    print(provenance.git_version, provenance.dependencies.direct_str)

    # Individual components
    from build_provenance import EnvironmentSnapshot, RepositoryProbe, classify, detect_ci

    platform = detect_ci()
    head = RepositoryProbe().head(manifest_root)
    report = classify(manifest_root / "Cargo.lock")
"""

__version__ = "0.1.0"

from build_provenance.core.environment import EnvironmentSnapshot, UsageState
from build_provenance.core.ci import detect_ci as detect_ci_in
from build_provenance.core.git import RepositoryProbe
from build_provenance.core.dependencies import DependencyClassifier, DependencyGraph, classify
from build_provenance.core.provenance import ProvenanceCollector, collect_provenance

from build_provenance.models.ci import CIPlatform
from build_provenance.models.common import ProvenanceIssue
from build_provenance.models.dependencies import DependencyReport, PackageRef
from build_provenance.models.git import RepositoryDescriptor, RepositoryHead
from build_provenance.models.provenance import BuildProvenance

from build_provenance.utils.config import ProvenanceConfig, load_config
from build_provenance.utils.errors import BuildProvenanceError
from build_provenance.utils.versions import parse_versions, strptime


def detect_ci() -> CIPlatform | None:
    """Detect the CI platform from the live process environment.

    Some platforms set generic variables (e.g. `TASK_ID`), so false
    positives are possible.
    """
    return detect_ci_in(EnvironmentSnapshot.capture())


__all__ = [
    # Version
    "__version__",
    # Core
    "EnvironmentSnapshot",
    "UsageState",
    "RepositoryProbe",
    "DependencyClassifier",
    "DependencyGraph",
    "classify",
    "ProvenanceCollector",
    "collect_provenance",
    "detect_ci",
    "detect_ci_in",
    # Models
    "CIPlatform",
    "ProvenanceIssue",
    "DependencyReport",
    "PackageRef",
    "RepositoryDescriptor",
    "RepositoryHead",
    "BuildProvenance",
    # Utils
    "ProvenanceConfig",
    "load_config",
    "BuildProvenanceError",
    "parse_versions",
    "strptime",
]
