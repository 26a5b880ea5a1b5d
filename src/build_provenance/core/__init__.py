"""Core acquisition and classification logic for build-provenance.

The leaf components (environment, CI detection, repository probing and
dependency classification) do not depend on each other beyond the shared
environment snapshot; `ProvenanceCollector` wires them together.
"""

from build_provenance.core.environment import (
    NONE_SENTINEL,
    UNSET,
    EnvironmentSnapshot,
    UsageState,
    parse_override,
)
from build_provenance.core.ci import detect_ci
from build_provenance.core.git import (
    GitPythonBackend,
    Repository,
    RepositoryBackend,
    RepositoryProbe,
    has_git_dir,
    short_hash,
)
from build_provenance.core.dependencies import (
    DependencyClassifier,
    DependencyGraph,
    classify,
    find_lockfile,
    package_names,
    parse_lockfile,
)
from build_provenance.core.compiler import get_version_from_cmd
from build_provenance.core.provenance import ProvenanceCollector, collect_provenance

__all__ = [
    # Environment
    "NONE_SENTINEL",
    "UNSET",
    "EnvironmentSnapshot",
    "UsageState",
    "parse_override",
    # CI
    "detect_ci",
    # Git
    "GitPythonBackend",
    "Repository",
    "RepositoryBackend",
    "RepositoryProbe",
    "has_git_dir",
    "short_hash",
    # Dependencies
    "DependencyClassifier",
    "DependencyGraph",
    "classify",
    "find_lockfile",
    "package_names",
    "parse_lockfile",
    # Compiler
    "get_version_from_cmd",
    # Driver
    "ProvenanceCollector",
    "collect_provenance",
]
