"""Error handling utilities for build-provenance."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from build_provenance.models.common import ProvenanceIssue


class BuildProvenanceError(Exception):
    """Base exception for build-provenance."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_issue(self, collector: str | None = None) -> ProvenanceIssue:
        """Convert to ProvenanceIssue model."""
        return ProvenanceIssue(
            code=self.code, message=self.message, collector=collector, details=self.details
        )


class ConfigurationError(BuildProvenanceError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class OverrideParseError(ConfigurationError):
    """An override variable is present but its value has the wrong shape."""

    def __init__(self, key: str, value: str, expected: str):
        super().__init__(
            f"Failed to parse override {key}={value!r}: expected {expected}",
            config_key=key,
        )
        self.code = "OVERRIDE_PARSE_ERROR"
        self.details.update({"value": value, "expected": expected})
        self.key = key
        self.value = value


class MissingEnvironmentError(BuildProvenanceError):
    """A required environment variable is not set."""

    def __init__(self, key: str):
        super().__init__(
            f"Missing expected environment variable {key}",
            code="MISSING_ENV",
            details={"key": key},
        )
        self.key = key


class RepositoryError(BuildProvenanceError):
    """A repository exists but could not be read."""

    def __init__(self, message: str, path: Path | str | None = None):
        details = {"path": str(path)} if path is not None else {}
        super().__init__(message, code="REPOSITORY_ERROR", details=details)


class LockfileError(BuildProvenanceError):
    """Base class for lockfile problems."""

    def __init__(self, message: str, code: str = "LOCKFILE_ERROR", path: Path | str | None = None):
        details = {"path": str(path)} if path is not None else {}
        super().__init__(message, code=code, details=details)


class LockfileNotFoundError(LockfileError):
    """No lockfile was found at or above the manifest root."""

    def __init__(self, base: Path | str, names: list[str]):
        super().__init__(
            f"No lockfile ({', '.join(names)}) found at or above {base}",
            code="LOCKFILE_NOT_FOUND",
            path=base,
        )


class LockfileParseError(LockfileError):
    """A lockfile is present but malformed."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message, code="LOCKFILE_PARSE_ERROR", path=path)


class CompilerProbeError(BuildProvenanceError):
    """Running `<executable> -V` failed."""

    def __init__(self, executable: str, reason: str):
        super().__init__(
            f"Failed to get version from `{executable} -V`: {reason}",
            code="COMPILER_PROBE_ERROR",
            details={"executable": executable},
        )
