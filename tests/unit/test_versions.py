"""Unit tests for the runtime helpers."""

from datetime import datetime, timedelta, timezone

import pytest
import semantic_version

from build_provenance.models.dependencies import PackageRef
from build_provenance.utils.versions import format_build_time, parse_versions, strptime


class TestParseVersions:
    """Tests for parse_versions."""

    def test_pairs(self):
        """Test parsing (name, version) pairs."""
        deps = [("built", "0.7.4"), ("nom", "7.1.1")]
        parsed = list(parse_versions(deps))
        assert parsed == [
            ("built", semantic_version.Version("0.7.4")),
            ("nom", semantic_version.Version("7.1.1")),
        ]
        assert parsed[0][1] >= semantic_version.Version("0.1.0")

    def test_refs(self):
        """Test parsing PackageRefs."""
        refs = [PackageRef(name="memchr", version="2.5.0-rc.1")]
        ((name, version),) = parse_versions(refs)
        assert name == "memchr"
        assert version.prerelease == ("rc", "1")

    def test_invalid_version(self):
        """Test that an invalid version raises."""
        with pytest.raises(ValueError):
            list(parse_versions([("bad", "not-a-version")]))


class TestBuildTime:
    """Tests for build time formatting and parsing."""

    def test_format(self):
        """Test RFC 2822 formatting in GMT."""
        moment = datetime(2024, 1, 15, 13, 0, 0, tzinfo=timezone(timedelta(hours=1)))
        assert format_build_time(moment) == "Mon, 15 Jan 2024 12:00:00 GMT"

    def test_strptime(self):
        """Test parsing back into an aware UTC datetime."""
        parsed = strptime("Mon, 15 Jan 2024 12:00:00 GMT")
        assert parsed == datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_strptime_offset(self):
        """Test that offsets are normalized to UTC."""
        parsed = strptime("Mon, 15 Jan 2024 14:00:00 +0200")
        assert parsed.hour == 12
        assert parsed.tzinfo == timezone.utc

    def test_strptime_invalid(self):
        """Test that garbage raises."""
        with pytest.raises((ValueError, TypeError)):
            strptime("yesterday")
