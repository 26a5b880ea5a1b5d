"""Unit tests for the errors module."""

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


class TestBuildProvenanceError:
    """Tests for base BuildProvenanceError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = BuildProvenanceError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_to_issue(self):
        """Test conversion to ProvenanceIssue model."""
        error = BuildProvenanceError("Test error", code="TEST_ERROR", details={"key": "value"})
        issue = error.to_issue("git")

        assert issue.code == "TEST_ERROR"
        assert issue.message == "Test error"
        assert issue.collector == "git"
        assert issue.details == {"key": "value"}
        assert str(issue) == "[TEST_ERROR] Test error"


class TestOverrideParseError:
    """Tests for OverrideParseError."""

    def test_message(self):
        """Test that the message names the variable and the bad value."""
        error = OverrideParseError("BUILT_OVERRIDE_dummy_GIT_DIRTY", "maybe", "bool")
        assert str(error) == (
            "Failed to parse override BUILT_OVERRIDE_dummy_GIT_DIRTY='maybe': expected bool"
        )
        assert error.code == "OVERRIDE_PARSE_ERROR"
        assert error.details["config_key"] == "BUILT_OVERRIDE_dummy_GIT_DIRTY"
        assert error.details["value"] == "maybe"

    def test_is_configuration_error(self):
        """Test the error hierarchy."""
        assert isinstance(OverrideParseError("K", "v", "int"), ConfigurationError)


class TestOtherErrors:
    """Tests for the remaining error types."""

    def test_missing_environment(self):
        """Test MissingEnvironmentError."""
        error = MissingEnvironmentError("TARGET")
        assert str(error) == "Missing expected environment variable TARGET"
        assert error.details == {"key": "TARGET"}

    def test_repository_error(self):
        """Test RepositoryError with and without a path."""
        assert RepositoryError("broken").details == {}
        assert RepositoryError("broken", path="/src").details == {"path": "/src"}

    def test_lockfile_errors(self):
        """Test the lockfile error hierarchy."""
        not_found = LockfileNotFoundError("/src", ["Cargo.lock"])
        parse = LockfileParseError("bad", path="/src/Cargo.lock")
        assert isinstance(not_found, LockfileError)
        assert isinstance(parse, LockfileError)
        assert "Cargo.lock" in not_found.message
        assert parse.details == {"path": "/src/Cargo.lock"}

    def test_compiler_probe_error(self):
        """Test CompilerProbeError."""
        error = CompilerProbeError("rustdoc", "exit status 1")
        assert error.message == "Failed to get version from `rustdoc -V`: exit status 1"
        assert error.details == {"executable": "rustdoc"}
