"""Git repository collector."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

from build_provenance.collectors.base import CollectContext, CollectorResult
from build_provenance.core.environment import UNSET
from build_provenance.core.git import short_hash
from build_provenance.models.common import ProvenanceIssue
from build_provenance.utils.config import ProvenanceConfig
from build_provenance.utils.errors import RepositoryError
from build_provenance.utils.logging import get_logger_with_context

T = TypeVar("T")


def _unset_to_none(value: Any) -> Any:
    return None if value is UNSET else value


class GitCollector:
    """Records the tag, dirty flag, HEAD ref and commit hashes.

    Each field can be overridden; the repository is only probed for the
    fields no override supplied. CI systems often make shallow clones that
    the repository layer cannot describe, so a repository failure is
    recorded as absent data when the build runs on CI and raised otherwise.
    The CI platform is the one the `ci` collector records, so the
    `CI_PLATFORM` override applies here too.
    """

    @property
    def name(self) -> str:
        return "git"

    @property
    def description(self) -> str:
        return "Git tag or commit description, dirty flag, HEAD ref and commit hashes"

    def enabled(self, config: ProvenanceConfig) -> bool:
        return config.collect.git

    def _probe(
        self,
        context: CollectContext,
        probe: Callable[[Path], T],
        issues: list[ProvenanceIssue],
    ) -> T | None:
        log = get_logger_with_context("collectors.git", root=context.manifest_root)
        try:
            return probe(context.manifest_root)
        except RepositoryError as e:
            platform = context.ci_platform_name()
            if platform is None:
                raise
            log.warning("Ignoring repository error on %s: %s", platform, e.message)
            issues.append(e.to_issue(self.name))
            return None

    def collect(self, context: CollectContext) -> CollectorResult:
        env = context.env
        issues: list[ProvenanceIssue] = []

        tag = env.get_override("GIT_VERSION", Optional[str])
        dirty = env.get_override("GIT_DIRTY", Optional[bool])
        if tag is UNSET or dirty is UNSET:
            descriptor = self._probe(context, context.probe.describe, issues)
            if descriptor is not None:
                if tag is UNSET:
                    tag = descriptor.tag
                    suffix = context.config.git.dirty_suffix
                    if descriptor.dirty and suffix:
                        tag += suffix
                if dirty is UNSET:
                    dirty = descriptor.dirty

        branch = env.get_override("GIT_HEAD_REF", Optional[str])
        commit = env.get_override("GIT_COMMIT_HASH", str)
        commit_short = env.get_override("GIT_COMMIT_HASH_SHORT", str)
        if branch is UNSET or commit is UNSET or commit_short is UNSET:
            head = self._probe(context, context.probe.head, issues)
            if head is not None:
                if branch is UNSET:
                    branch = head.branch
                if commit is UNSET:
                    commit = head.commit
                if commit_short is UNSET:
                    commit_short = head.commit_short

        commit = _unset_to_none(commit)
        commit_short = _unset_to_none(commit_short)
        if commit is not None and commit_short is None:
            commit_short = short_hash(commit)

        return CollectorResult.ok(
            self.name,
            {
                "git_version": _unset_to_none(tag),
                "git_dirty": _unset_to_none(dirty),
                "git_head_ref": _unset_to_none(branch),
                "git_commit_hash": commit,
                "git_commit_hash_short": commit_short,
            },
            issues,
        )
