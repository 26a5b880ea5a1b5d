"""Runtime helpers for consumers of collected provenance."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime, parsedate_to_datetime
from typing import Iterable, Iterator

import semantic_version

from build_provenance.models.dependencies import PackageRef


def parse_versions(
    packages: Iterable[PackageRef | tuple[str, str]],
) -> Iterator[tuple[str, semantic_version.Version]]:
    """Parse the versions of dependency pairs.

    Example:
        deps = [("built", "0.7.4")]
        assert any(
            name == "built" and version >= semantic_version.Version("0.1.0")
            for name, version in parse_versions(deps)
        )

    Args:
        packages: PackageRefs or (name, version) pairs

    Yields:
        (name, parsed version) pairs, in input order

    Raises:
        ValueError: If a version is not valid semver
    """
    for package in packages:
        name, version = package.as_tuple() if isinstance(package, PackageRef) else package
        yield name, semantic_version.Version(version)


def format_build_time(moment: datetime) -> str:
    """Format a timestamp the way BUILT_TIME_UTC stores it (RFC 2822, GMT)."""
    return format_datetime(moment.astimezone(timezone.utc), usegmt=True)


def strptime(text: str) -> datetime:
    """Parse a BUILT_TIME_UTC string back into an aware UTC datetime.

    Raises:
        ValueError: If the text is not an RFC 2822 date
    """
    parsed = parsedate_to_datetime(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
