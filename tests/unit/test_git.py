"""Unit tests for repository probing."""

import sys

import pytest

from build_provenance.core.git import GitPythonBackend, RepositoryProbe, has_git_dir, short_hash
from build_provenance.models.git import RepositoryDescriptor, RepositoryHead
from build_provenance.utils.errors import RepositoryError


class TestRepositoryProbe:
    """Tests for RepositoryProbe over a fake backend."""

    def test_describe(self, make_probe, tmp_path):
        """Test describing a clean repository."""
        probe = make_probe(tag="v1.2.3", dirty=False)
        assert probe.describe(tmp_path) == RepositoryDescriptor(tag="v1.2.3", dirty=False)

    def test_describe_dirty(self, make_probe, tmp_path):
        """Test describing a dirty repository."""
        descriptor = make_probe(dirty=True).describe(tmp_path)
        assert descriptor.dirty is True

    def test_head(self, probe, fake_backend, tmp_path):
        """Test resolving HEAD on a branch."""
        head = probe.head(str(tmp_path))
        assert head.branch == "refs/heads/main"
        assert not head.is_detached
        assert head.commit.startswith(head.commit_short)
        assert fake_backend.calls == [tmp_path]

    def test_detached_head(self, make_probe, tmp_path):
        """Test resolving a detached HEAD."""
        head = make_probe(branch=None).head(tmp_path)
        assert head.branch is None
        assert head.is_detached

    def test_no_repository(self, make_probe, tmp_path):
        """Test that a missing repository is absence, not an error."""
        probe = make_probe(absent=True)
        assert probe.describe(tmp_path) is None
        assert probe.head(tmp_path) is None

    def test_errors_propagate(self, make_probe, tmp_path):
        """Test that a broken repository raises."""
        probe = make_probe(error=RepositoryError("object database corrupt", path=tmp_path))
        with pytest.raises(RepositoryError) as exc_info:
            probe.describe(tmp_path)
        assert exc_info.value.code == "REPOSITORY_ERROR"
        assert exc_info.value.details == {"path": str(tmp_path)}
        with pytest.raises(RepositoryError):
            probe.head(tmp_path)

    def test_closes_repository(self, probe, fake_repo, tmp_path):
        """Test that every call closes the repository it opened."""
        probe.describe(tmp_path)
        probe.head(tmp_path)
        assert fake_repo.close_count == 2

    def test_closes_repository_on_error(self, probe, fake_repo, tmp_path):
        """Test that a failing read still closes the repository."""
        fake_repo.error = RepositoryError("broken")
        with pytest.raises(RepositoryError):
            probe.head(tmp_path)
        with pytest.raises(RepositoryError):
            probe.describe(tmp_path)
        assert fake_repo.close_count == 2

    def test_default_backend(self):
        """Test that the GitPython backend is the default."""
        assert isinstance(RepositoryProbe().backend, GitPythonBackend)


class TestGitPythonUnavailable:
    """Tests for discovery when GitPython cannot be imported."""

    @pytest.fixture(autouse=True)
    def no_gitpython(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "git", None)

    def test_no_repository_is_absence(self, tmp_path):
        """Test that a plain directory still has no repository."""
        plain = tmp_path / "plain"
        plain.mkdir()
        if has_git_dir(plain):
            pytest.skip("temporary directory is inside a git repository")
        assert GitPythonBackend().discover(plain) is None
        assert RepositoryProbe().describe(plain) is None

    def test_repository_is_an_error(self, tmp_path):
        """Test that an existing repository that cannot be read raises."""
        (tmp_path / ".git").mkdir()
        member = tmp_path / "crates" / "member"
        member.mkdir(parents=True)
        with pytest.raises(RepositoryError, match="GitPython is unavailable"):
            GitPythonBackend().discover(member)

    def test_git_file_counts(self, tmp_path):
        """Test that a worktree's `.git` file marks a repository."""
        (tmp_path / ".git").write_text("gitdir: /elsewhere/.git/worktrees/wt\n")
        assert has_git_dir(tmp_path)


class TestShortHash:
    """Tests for short_hash."""

    def test_truncates(self):
        """Test truncation to eight characters."""
        assert short_hash("0123456789abcdef") == "01234567"

    def test_custom_length(self):
        """Test a custom length."""
        assert short_hash("0123456789abcdef", length=4) == "0123"

    def test_head_model(self):
        """Test the head model defaults."""
        head = RepositoryHead(commit="abc", commit_short="ab")
        assert head.is_detached
