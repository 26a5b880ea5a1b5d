"""Lockfile parsing and dependency graph classification."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Iterable, Sequence

from build_provenance.models.dependencies import (
    DependencyReference,
    DependencyReport,
    LockedPackage,
    PackageRef,
)
from build_provenance.utils.errors import LockfileNotFoundError, LockfileParseError
from build_provenance.utils.logging import get_logger

logger = get_logger("core.dependencies")

DEFAULT_LOCKFILE_NAMES = ("Cargo.lock",)


def _require_str(table: dict[str, Any], key: str, where: str, path: Path | None) -> str:
    value = table.get(key)
    if not isinstance(value, str):
        raise LockfileParseError(f"{where}: missing or non-string '{key}'", path=path)
    return value


def _parse_reference(raw: Any, where: str, path: Path | None) -> DependencyReference:
    """Parse `"name"`, `"name version"`, `"name version (source)"` or `{name, version}`."""
    if isinstance(raw, str):
        parts = raw.split()
        if not parts or len(parts) > 3:
            raise LockfileParseError(f"{where}: malformed dependency {raw!r}", path=path)
        if len(parts) == 3 and not (parts[2].startswith("(") and parts[2].endswith(")")):
            raise LockfileParseError(f"{where}: malformed dependency {raw!r}", path=path)
        version = parts[1] if len(parts) > 1 else None
        return DependencyReference(name=parts[0], version=version)
    if isinstance(raw, dict):
        name = _require_str(raw, "name", where, path)
        version = raw.get("version")
        if version is not None and not isinstance(version, str):
            raise LockfileParseError(f"{where}: non-string version for {name!r}", path=path)
        return DependencyReference(name=name, version=version)
    raise LockfileParseError(f"{where}: unsupported dependency entry {raw!r}", path=path)


def _parse_package(table: Any, where: str, path: Path | None) -> LockedPackage:
    if not isinstance(table, dict):
        raise LockfileParseError(f"{where}: expected a table", path=path)
    name = _require_str(table, "name", where, path)
    version = _require_str(table, "version", where, path)
    where = f"package {name} {version}"

    source = table.get("source")
    if source is not None and not isinstance(source, str):
        raise LockfileParseError(f"{where}: non-string 'source'", path=path)

    raw_deps = table.get("dependencies", [])
    if not isinstance(raw_deps, list):
        raise LockfileParseError(f"{where}: 'dependencies' must be an array", path=path)

    return LockedPackage(
        name=name,
        version=version,
        source=source,
        dependencies=[_parse_reference(raw, where, path) for raw in raw_deps],
    )


def parse_lockfile(text: str, path: Path | None = None) -> list[LockedPackage]:
    """Parse lockfile text into its package entries.

    Both `Cargo.lock` (string dependency references) and lockfiles with
    inline-table references are understood. A legacy `[root]` table is
    treated as one more package.

    Args:
        text: TOML lockfile content
        path: Lockfile path, for error messages

    Returns:
        Package entries in file order

    Raises:
        LockfileParseError: On invalid TOML or missing required fields
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise LockfileParseError(f"Invalid TOML: {e}", path=path) from e

    tables = data.get("package", [])
    if not isinstance(tables, list):
        raise LockfileParseError("'package' must be an array of tables", path=path)

    packages = [_parse_package(t, f"package #{i + 1}", path) for i, t in enumerate(tables)]
    if "root" in data:
        packages.append(_parse_package(data["root"], "[root]", path))
    return packages


def package_names(packages: Iterable[LockedPackage | PackageRef]) -> list[PackageRef]:
    """Deduplicate and sort packages by (name, version)."""
    refs = {p.ref if isinstance(p, LockedPackage) else p for p in packages}
    return sorted(refs)


class DependencyGraph:
    """Directed graph of locked packages; an edge points from dependent to dependency."""

    def __init__(self) -> None:
        self._edges: dict[PackageRef, set[PackageRef]] = {}
        self._in_degree: dict[PackageRef, int] = {}

    def add_node(self, ref: PackageRef) -> None:
        if ref not in self._edges:
            self._edges[ref] = set()
            self._in_degree[ref] = 0

    def add_edge(self, source: PackageRef, target: PackageRef) -> None:
        self.add_node(source)
        self.add_node(target)
        if target not in self._edges[source]:
            self._edges[source].add(target)
            self._in_degree[target] += 1

    @classmethod
    def from_packages(
        cls, packages: Sequence[LockedPackage], path: Path | None = None
    ) -> "DependencyGraph":
        """Build the graph, resolving each dependency reference to a locked package.

        Raises:
            LockfileParseError: If a reference matches no package, or a
                name-only reference matches several versions
        """
        graph = cls()
        by_name: dict[str, set[PackageRef]] = {}
        for package in packages:
            graph.add_node(package.ref)
            by_name.setdefault(package.name, set()).add(package.ref)

        for package in packages:
            for dep in package.dependencies:
                candidates = by_name.get(dep.name, set())
                if dep.version is not None:
                    candidates = {c for c in candidates if c.version == dep.version}
                if len(candidates) != 1:
                    problem = "unknown" if not candidates else "ambiguous"
                    wanted = dep.name if dep.version is None else f"{dep.name} {dep.version}"
                    raise LockfileParseError(
                        f"package {package.name} {package.version}: {problem} dependency {wanted!r}",
                        path=path,
                    )
                graph.add_edge(package.ref, next(iter(candidates)))
        return graph

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, ref: object) -> bool:
        return ref in self._edges

    def nodes(self) -> list[PackageRef]:
        return sorted(self._edges)

    def neighbors(self, ref: PackageRef) -> list[PackageRef]:
        """Direct dependencies of `ref`."""
        return sorted(self._edges[ref])

    def roots(self) -> list[PackageRef]:
        """Packages nothing in the graph depends on."""
        return sorted(ref for ref, degree in self._in_degree.items() if degree == 0)

    def direct(self) -> list[PackageRef]:
        """Packages one edge away from any root."""
        roots = set(self.roots())
        direct = set().union(*(self._edges[r] for r in roots)) - roots
        return sorted(direct)

    def indirect(self) -> list[PackageRef]:
        """Packages that are neither roots nor direct dependencies."""
        excluded = set(self.roots()) | set(self.direct())
        return sorted(ref for ref in self._edges if ref not in excluded)


def find_lockfile(base: Path | str, names: Sequence[str] = DEFAULT_LOCKFILE_NAMES) -> Path:
    """Find the first lockfile at or above `base`.

    Raises:
        LockfileNotFoundError: If no directory up to the filesystem root has one
    """
    base = Path(base).resolve()
    for directory in (base, *base.parents):
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    raise LockfileNotFoundError(base, list(names))


class DependencyClassifier:
    """Classifies locked packages into roots, direct and indirect dependencies.

    Example:
        classifier = DependencyClassifier()
        report = classifier.classify_manifest(Path("."))
        print(report.direct_str)
    """

    def __init__(self, lockfile_names: Sequence[str] = DEFAULT_LOCKFILE_NAMES) -> None:
        self.lockfile_names = tuple(lockfile_names)

    def locate(self, manifest_root: Path | str) -> Path:
        return find_lockfile(manifest_root, self.lockfile_names)

    def classify(self, lockfile: Path | str, tree: bool = True) -> DependencyReport:
        """Classify the packages of a lockfile.

        Args:
            lockfile: Path to the lockfile
            tree: Build the dependency graph; if False only `all` is filled

        Returns:
            DependencyReport with every list deduplicated and sorted

        Raises:
            LockfileParseError: If the lockfile is malformed or not UTF-8
            OSError: If the lockfile cannot be read
        """
        path = Path(lockfile)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise LockfileParseError(f"Lockfile is not valid UTF-8: {e}", path=path) from e
        packages = parse_lockfile(text, path=path)
        logger.debug("Parsed %d packages from %s", len(packages), path)

        if not tree:
            return DependencyReport(all=package_names(packages), tree=False)

        graph = DependencyGraph.from_packages(packages, path=path)
        return DependencyReport(
            all=graph.nodes(),
            roots=graph.roots(),
            direct=graph.direct(),
            indirect=graph.indirect(),
            tree=True,
        )

    def classify_manifest(self, manifest_root: Path | str, tree: bool = True) -> DependencyReport:
        """Locate the lockfile for a manifest root and classify it."""
        return self.classify(self.locate(manifest_root), tree=tree)


def classify(lockfile: Path | str, tree: bool = True) -> DependencyReport:
    """Classify a lockfile with the default classifier."""
    return DependencyClassifier().classify(lockfile, tree=tree)
