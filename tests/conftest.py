"""Shared test fixtures for build-provenance tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from build_provenance.core.environment import EnvironmentSnapshot
from build_provenance.core.git import Repository, RepositoryBackend, RepositoryProbe
from build_provenance.models.git import RepositoryHead
from build_provenance.utils.config import ProvenanceConfig, set_config
from build_provenance.utils.errors import CompilerProbeError, RepositoryError

COMMIT = "c3f2d9a6b1e04f7a8d5c6b3a2e1f0d9c8b7a6f5e"

LOCKFILE = """\
[[package]]
name = "dummy"
version = "0.1.0"
dependencies = [
 "foo",
 "foobar",
 "nom",
]

[[package]]
name = "foo"
version = "0.1.0"

[[package]]
name = "foobar"
version = "0.1.0"

[[package]]
name = "memchr"
version = "2.5.0"
source = "registry+https://github.com/rust-lang/crates.io-index"
checksum = "2dffe52ecf27772e601905b7522cb4ef790d2cc203488bbd0e2fe85fcb74566d"

[[package]]
name = "minimal-lexical"
version = "0.2.1"
source = "registry+https://github.com/rust-lang/crates.io-index"
checksum = "68354c5c6bd36d73ff3feceb05efa59b6acb7626617f4962be322a825e61f79a"

[[package]]
name = "nom"
version = "7.1.1"
source = "registry+https://github.com/rust-lang/crates.io-index"
checksum = "a8903e5a29a317527874d0402f867152a3d21c908bb0b933e416c65e301d4c36"
dependencies = [
 "memchr",
 "minimal-lexical",
]
"""


def cargo_environ(**extra: str) -> dict[str, str]:
    """Variables a build driver sets for a build script."""
    environ = {
        "CARGO_PKG_VERSION": "0.1.0-alpha",
        "CARGO_PKG_VERSION_MAJOR": "0",
        "CARGO_PKG_VERSION_MINOR": "1",
        "CARGO_PKG_VERSION_PATCH": "0",
        "CARGO_PKG_VERSION_PRE": "alpha",
        "CARGO_PKG_AUTHORS": "Jane Doe <jane@example.com>:John Roe",
        "CARGO_PKG_NAME": "dummy",
        "CARGO_PKG_DESCRIPTION": "A dummy package",
        "CARGO_PKG_HOMEPAGE": "https://example.com/dummy",
        "CARGO_PKG_LICENSE": "MIT",
        "CARGO_PKG_REPOSITORY": "https://example.com/dummy.git",
        "TARGET": "x86_64-unknown-linux-gnu",
        "HOST": "x86_64-unknown-linux-gnu",
        "PROFILE": "release",
        "RUSTC": "rustc",
        "RUSTDOC": "rustdoc",
        "OPT_LEVEL": "3",
        "NUM_JOBS": "8",
        "DEBUG": "false",
        "CARGO_FEATURE_DEFAULT": "1",
        "CARGO_FEATURE_SERDE": "1",
        "CARGO_CFG_TARGET_ARCH": "x86_64",
        "CARGO_CFG_TARGET_ENDIAN": "little",
        "CARGO_CFG_TARGET_ENV": "gnu",
        "CARGO_CFG_TARGET_FAMILY": "unix",
        "CARGO_CFG_TARGET_OS": "linux",
        "CARGO_CFG_TARGET_POINTER_WIDTH": "64",
    }
    environ.update(extra)
    return environ


class FakeRepository(Repository):
    """In-memory repository."""

    def __init__(
        self,
        tag: str = "v0.1.0",
        dirty: bool = False,
        branch: str | None = "refs/heads/main",
        commit: str = COMMIT,
        error: RepositoryError | None = None,
    ):
        self.tag = tag
        self.dirty = dirty
        self.branch = branch
        self.commit = commit
        self.error = error
        self.close_count = 0

    def _check(self) -> None:
        if self.error is not None:
            raise self.error

    def describe(self) -> str:
        self._check()
        return self.tag

    def is_dirty(self) -> bool:
        self._check()
        return self.dirty

    def head(self) -> RepositoryHead:
        self._check()
        return RepositoryHead(branch=self.branch, commit=self.commit, commit_short=self.commit[:7])

    def close(self) -> None:
        self.close_count += 1


class FakeBackend(RepositoryBackend):
    """Backend that hands out a fixed repository and counts lookups."""

    def __init__(self, repo: Repository | None = None):
        self.repo = repo
        self.calls: list[Path] = []

    def discover(self, root: Path) -> Repository | None:
        self.calls.append(root)
        return self.repo


class FakeVersionProbe:
    """Stands in for running `<executable> -V`."""

    def __init__(self, versions: dict[str, str] | None = None):
        self.versions = versions if versions is not None else {
            "rustc": "rustc 1.70.0 (90c541806 2023-05-31)",
            "rustdoc": "rustdoc 1.70.0 (90c541806 2023-05-31)",
        }
        self.calls: list[str] = []

    def __call__(self, executable: str) -> str:
        self.calls.append(executable)
        if executable not in self.versions:
            raise CompilerProbeError(executable, "No such file or directory")
        return self.versions[executable]


@pytest.fixture(autouse=True)
def default_config():
    """Isolate tests from any configuration file on the machine."""
    set_config(ProvenanceConfig())
    yield
    set_config(None)


@pytest.fixture
def environ() -> dict[str, str]:
    """A build script environment."""
    return cargo_environ()


@pytest.fixture
def env(environ) -> EnvironmentSnapshot:
    """Snapshot of the build script environment."""
    return EnvironmentSnapshot(environ)


@pytest.fixture
def fake_repo() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def fake_backend(fake_repo) -> FakeBackend:
    return FakeBackend(fake_repo)


@pytest.fixture
def probe(fake_backend) -> RepositoryProbe:
    return RepositoryProbe(backend=fake_backend)


@pytest.fixture
def version_probe() -> FakeVersionProbe:
    return FakeVersionProbe()


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-15 12:00:00 UTC."""
    moment = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
    return lambda: moment


@pytest.fixture
def lockfile(tmp_path) -> Path:
    """A project directory's lockfile."""
    path = tmp_path / "Cargo.lock"
    path.write_text(LOCKFILE)
    return path


@pytest.fixture
def make_env():
    """Factory for snapshots of the build script environment plus extra variables."""

    def _make(drop: tuple[str, ...] = (), **extra: str) -> EnvironmentSnapshot:
        environ = cargo_environ(**extra)
        for key in drop:
            environ.pop(key, None)
        return EnvironmentSnapshot(environ)

    return _make


@pytest.fixture
def make_probe():
    """Factory for probes over a fake repository; `absent=True` means no repository."""

    def _make(absent: bool = False, **repo_kwargs) -> RepositoryProbe:
        repo = None if absent else FakeRepository(**repo_kwargs)
        return RepositoryProbe(backend=FakeBackend(repo))

    return _make
