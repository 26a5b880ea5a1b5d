"""Data models for build-provenance."""

from build_provenance.models.common import ProvenanceIssue
from build_provenance.models.ci import CIPlatform
from build_provenance.models.git import RepositoryDescriptor, RepositoryHead
from build_provenance.models.dependencies import (
    DependencyReference,
    DependencyReport,
    LockedPackage,
    PackageRef,
    join_refs,
)
from build_provenance.models.provenance import SCHEMA_VERSION, BuildProvenance

__all__ = [
    # Common
    "ProvenanceIssue",
    # CI
    "CIPlatform",
    # Git
    "RepositoryDescriptor",
    "RepositoryHead",
    # Dependencies
    "DependencyReference",
    "DependencyReport",
    "LockedPackage",
    "PackageRef",
    "join_refs",
    # Provenance
    "SCHEMA_VERSION",
    "BuildProvenance",
]
