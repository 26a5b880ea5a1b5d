"""Repository probing.

A repository that cannot be found at or above the probed path is not an
error: `RepositoryProbe` returns None, so builds from source tarballs and
other non-repository checkouts proceed with absent git data. Every other
failure of the repository layer raises `RepositoryError`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from build_provenance.models.git import RepositoryDescriptor, RepositoryHead
from build_provenance.utils.errors import RepositoryError
from build_provenance.utils.logging import get_logger

if TYPE_CHECKING:
    import git

logger = get_logger("core.git")

SHORT_HASH_LENGTH = 8


def short_hash(commit: str, length: int = SHORT_HASH_LENGTH) -> str:
    """Abbreviate a full commit hash by truncation."""
    return commit[:length]


class Repository(ABC):
    """An opened repository."""

    @abstractmethod
    def describe(self) -> str:
        """HEAD's tag if it has one, else a description based on the commit id."""
        ...

    @abstractmethod
    def is_dirty(self) -> bool:
        """Whether tracked files are modified or staged. Untracked and ignored files do not count."""
        ...

    @abstractmethod
    def head(self) -> RepositoryHead:
        """Ref name and commit identifiers of HEAD."""
        ...

    def close(self) -> None:
        """Release handles and helper processes held by the repository."""


class RepositoryBackend(ABC):
    """Discovers repositories on disk."""

    @abstractmethod
    def discover(self, root: Path) -> Repository | None:
        """Open the repository at or above `root`.

        Returns:
            The repository, or None if there is none

        Raises:
            RepositoryError: If a repository exists but cannot be opened
        """
        ...


class GitPythonRepository(Repository):
    """Repository backed by GitPython."""

    def __init__(self, repo: "git.Repo") -> None:
        self._repo = repo

    @property
    def path(self) -> str:
        return self._repo.working_tree_dir or self._repo.git_dir

    def describe(self) -> str:
        from git.exc import GitError

        try:
            return self._repo.git.describe("--tags", "--always").strip()
        except (GitError, ValueError, OSError) as e:
            raise RepositoryError(f"git describe failed: {e}", path=self.path) from e

    def is_dirty(self) -> bool:
        from git.exc import GitError

        try:
            return self._repo.is_dirty(index=True, working_tree=True, untracked_files=False)
        except (GitError, ValueError, OSError) as e:
            raise RepositoryError(f"git status failed: {e}", path=self.path) from e

    def head(self) -> RepositoryHead:
        from git.exc import GitError

        try:
            head = self._repo.head
            branch = None if head.is_detached else head.ref.path
            commit = head.commit.hexsha
            commit_short = self._repo.git.rev_parse("--short", commit).strip()
        except (GitError, ValueError, TypeError, OSError) as e:
            raise RepositoryError(f"Failed to resolve HEAD: {e}", path=self.path) from e
        return RepositoryHead(branch=branch, commit=commit, commit_short=commit_short)

    def close(self) -> None:
        self._repo.close()


def has_git_dir(root: Path) -> bool:
    """Whether `root` or one of its parents has a `.git` entry."""
    root = root.resolve()
    return any((directory / ".git").exists() for directory in (root, *root.parents))


class GitPythonBackend(RepositoryBackend):
    """Discovers git repositories with GitPython.

    GitPython is imported on first use; importing it fails when no `git`
    executable is installed. That only matters if there is a repository to
    read, so a path without a `.git` entry at or above it is still absence.
    """

    def discover(self, root: Path) -> Repository | None:
        try:
            import git
        except ImportError as e:
            if not has_git_dir(root):
                logger.debug("No git repository at or above %s", root)
                return None
            raise RepositoryError(f"GitPython is unavailable: {e}", path=root) from e

        try:
            repo = git.Repo(root, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError):
            logger.debug("No git repository at or above %s", root)
            return None
        except (git.exc.GitError, OSError) as e:
            raise RepositoryError(f"Failed to open repository: {e}", path=root) from e
        return GitPythonRepository(repo)


class RepositoryProbe:
    """Extracts descriptor and HEAD information from a repository.

    Each call opens the repository and closes it before returning.

    Example:
        probe = RepositoryProbe()
        descriptor = probe.describe(Path("."))
        if descriptor is not None:
            print(descriptor.tag, "(dirty)" if descriptor.dirty else "")
    """

    def __init__(self, backend: RepositoryBackend | None = None) -> None:
        self.backend = backend or GitPythonBackend()

    def describe(self, root: Path | str) -> RepositoryDescriptor | None:
        """Describe HEAD and check the working tree for modifications.

        Args:
            root: Path at or below the repository's working tree

        Returns:
            Descriptor, or None if no repository was found

        Raises:
            RepositoryError: If the repository exists but cannot be read
        """
        repo = self.backend.discover(Path(root))
        if repo is None:
            return None
        try:
            return RepositoryDescriptor(tag=repo.describe(), dirty=repo.is_dirty())
        finally:
            repo.close()

    def head(self, root: Path | str) -> RepositoryHead | None:
        """Resolve HEAD's ref and commit.

        Args:
            root: Path at or below the repository's working tree

        Returns:
            HEAD information, or None if no repository was found

        Raises:
            RepositoryError: If the repository exists but cannot be read
        """
        repo = self.backend.discover(Path(root))
        if repo is None:
            return None
        try:
            return repo.head()
        finally:
            repo.close()
