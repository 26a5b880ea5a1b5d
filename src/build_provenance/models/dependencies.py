"""Dependency data models."""

from __future__ import annotations

import functools

from pydantic import BaseModel, Field


@functools.total_ordering
class PackageRef(BaseModel):
    """A locked package, identified by name and exact version.

    Ordering is lexicographic on name, then version.
    """

    model_config = {"frozen": True}

    name: str = Field(description="Package name")
    version: str = Field(description="Exact locked version")

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PackageRef):
            return NotImplemented
        return (self.name, self.version) < (other.name, other.version)

    def __str__(self) -> str:
        return f"{self.name} {self.version}"

    def as_tuple(self) -> tuple[str, str]:
        """Get the (name, version) pair."""
        return (self.name, self.version)


class DependencyReference(BaseModel):
    """A dependency as declared by a locked package."""

    model_config = {"frozen": True}

    name: str = Field(description="Name of the dependency")
    version: str | None = Field(
        default=None, description="Version, if the reference pins one"
    )


class LockedPackage(BaseModel):
    """A `[[package]]` entry of a lockfile."""

    model_config = {"frozen": True}

    name: str = Field(description="Package name")
    version: str = Field(description="Locked version")
    source: str | None = Field(default=None, description="Package source")
    dependencies: list[DependencyReference] = Field(
        default_factory=list, description="Declared dependencies"
    )

    @property
    def ref(self) -> PackageRef:
        """Identity of this package in the dependency graph."""
        return PackageRef(name=self.name, version=self.version)


def join_refs(refs: list[PackageRef]) -> str:
    """Render refs as a comma-separated `name version` string."""
    return ", ".join(str(ref) for ref in refs)


class DependencyReport(BaseModel):
    """Classification of the locked packages.

    `all` lists every locked package. `roots`, `direct` and `indirect`
    partition it and are only populated when the dependency tree was
    analyzed.
    """

    model_config = {"frozen": True}

    all: list[PackageRef] = Field(default_factory=list, description="All locked packages")
    roots: list[PackageRef] = Field(
        default_factory=list, description="Packages nothing else depends on"
    )
    direct: list[PackageRef] = Field(
        default_factory=list, description="Immediate dependencies of the roots"
    )
    indirect: list[PackageRef] = Field(
        default_factory=list, description="All other non-root packages"
    )
    tree: bool = Field(default=True, description="Whether the graph was classified")

    @property
    def all_str(self) -> str:
        return join_refs(self.all)

    @property
    def direct_str(self) -> str:
        return join_refs(self.direct)

    @property
    def indirect_str(self) -> str:
        return join_refs(self.indirect)
