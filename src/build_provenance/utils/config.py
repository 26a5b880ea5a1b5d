"""Configuration file support for build-provenance."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from build_provenance.utils.errors import ConfigurationError

CONFIG_FILENAMES = (".build-provenance.yaml", ".build-provenance.yml", "build-provenance.yaml")


class CollectConfig(BaseModel):
    """Which collectors run.

    Dependencies are off by default: only the top-level project of a build
    has a lockfile.
    """

    compiler: bool = Field(default=True, description="Probe compiler versions")
    git: bool = Field(default=True, description="Probe the git repository")
    ci: bool = Field(default=True, description="Detect the CI platform")
    env: bool = Field(default=True, description="Collect package identity from the environment")
    dependencies: bool = Field(default=False, description="Parse the lockfile")
    dependency_tree: bool = Field(
        default=True, description="Classify direct and indirect dependencies"
    )
    features: bool = Field(default=True, description="Collect enabled features")
    time: bool = Field(default=True, description="Record the build time")
    cfg: bool = Field(default=True, description="Collect target configuration")


class GitConfig(BaseModel):
    """Git collection settings."""

    dirty_suffix: str | None = Field(
        default=None, description="Appended to GIT_VERSION when the tree is dirty"
    )


class DependencyConfig(BaseModel):
    """Lockfile settings."""

    lockfile_names: list[str] = Field(
        default_factory=lambda: ["Cargo.lock"],
        description="Lockfile names searched for at and above the manifest root",
    )


class OverrideConfig(BaseModel):
    """Override variable settings."""

    marker: str = Field(default="BUILT_OVERRIDE_", description="Override key prefix")


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="WARNING", description="Log level")
    structured: bool = Field(default=False, description="Structured log format")


class ProvenanceConfig(BaseModel):
    """Main configuration for build-provenance."""

    collect: CollectConfig = Field(default_factory=CollectConfig)
    git: GitConfig = Field(default_factory=GitConfig)
    dependencies: DependencyConfig = Field(default_factory=DependencyConfig)
    overrides: OverrideConfig = Field(default_factory=OverrideConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_paths(base: Path | None = None) -> list[Path]:
    """Get possible configuration file paths.

    Args:
        base: Directory searched first, defaults to the working directory

    Returns:
        List of paths to check for configuration files
    """
    base = base or Path.cwd()
    paths = [base / name for name in CONFIG_FILENAMES]

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "build-provenance" / "config.yaml")
    paths.append(Path.home() / ".config" / "build-provenance" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None, base: Path | None = None) -> ProvenanceConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.
        base: Directory searched first when no explicit path is given

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit file is missing or any file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths(base):
        if path.exists():
            return _load_config_file(path)

    return ProvenanceConfig()


def _load_config_file(path: Path) -> ProvenanceConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return ProvenanceConfig()
    try:
        return ProvenanceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


# Global config instance
_config: ProvenanceConfig | None = None


def get_config() -> ProvenanceConfig:
    """Get the global configuration instance.

    Loads from file on first call.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: ProvenanceConfig | None) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
