"""Utility functions for build-provenance."""

from build_provenance.utils.logging import configure_logging, get_logger, get_logger_with_context
from build_provenance.utils.errors import (
    BuildProvenanceError,
    CompilerProbeError,
    ConfigurationError,
    LockfileError,
    LockfileNotFoundError,
    LockfileParseError,
    MissingEnvironmentError,
    OverrideParseError,
    RepositoryError,
)
from build_provenance.utils.config import (
    CollectConfig,
    DependencyConfig,
    GitConfig,
    LoggingConfig,
    OverrideConfig,
    ProvenanceConfig,
    get_config,
    load_config,
    set_config,
)
from build_provenance.utils.versions import format_build_time, parse_versions, strptime

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "BuildProvenanceError",
    "CompilerProbeError",
    "ConfigurationError",
    "LockfileError",
    "LockfileNotFoundError",
    "LockfileParseError",
    "MissingEnvironmentError",
    "OverrideParseError",
    "RepositoryError",
    # Config
    "CollectConfig",
    "DependencyConfig",
    "GitConfig",
    "LoggingConfig",
    "OverrideConfig",
    "ProvenanceConfig",
    "get_config",
    "load_config",
    "set_config",
    # Versions
    "format_build_time",
    "parse_versions",
    "strptime",
]
