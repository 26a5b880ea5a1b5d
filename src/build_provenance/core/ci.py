"""Continuous Integration platform detection.

Platforms are recognised by environment variables they are known to set
(names collected by watson/ci-info). Some of these are generic enough
(e.g. `TASK_ID`) to give false positives.
"""

from __future__ import annotations

from build_provenance.core.environment import EnvironmentSnapshot
from build_provenance.models.ci import CIPlatform

# (variable, exact value, platform)
VALUE_MARKERS: tuple[tuple[str, str, CIPlatform], ...] = (
    ("CI_NAME", "codeship", CIPlatform.CODESHIP),
)

# (variable, platform); presence alone identifies the platform
PRESENCE_MARKERS: tuple[tuple[str, CIPlatform], ...] = (
    ("TRAVIS", CIPlatform.TRAVIS),
    ("CIRCLECI", CIPlatform.CIRCLE),
    ("GITLAB_CI", CIPlatform.GITLAB),
    ("APPVEYOR", CIPlatform.APPVEYOR),
    ("DRONE", CIPlatform.DRONE),
    ("MAGNUM", CIPlatform.MAGNUM),
    ("SEMAPHORE", CIPlatform.SEMAPHORE),
    ("JENKINS_URL", CIPlatform.JENKINS),
    ("bamboo_planKey", CIPlatform.BAMBOO),
    ("TF_BUILD", CIPlatform.TFS),
    ("TEAMCITY_VERSION", CIPlatform.TEAMCITY),
    ("BUILDKITE", CIPlatform.BUILDKITE),
    ("HUDSON_URL", CIPlatform.HUDSON),
    ("GO_PIPELINE_LABEL", CIPlatform.GOCD),
    ("BITBUCKET_COMMIT", CIPlatform.BITBUCKET),
    ("GITHUB_ACTIONS", CIPlatform.GITHUB_ACTIONS),
)

# Both must be present
TASKCLUSTER_MARKERS = ("TASK_ID", "RUN_ID")

GENERIC_MARKERS = (
    "CI",  # Travis, Circle, GitLab, AppVeyor, CodeShip, ...
    "CONTINUOUS_INTEGRATION",  # Travis
    "BUILD_NUMBER",  # Jenkins, TeamCity
)


def detect_ci(env: EnvironmentSnapshot) -> CIPlatform | None:
    """Detect the CI platform the build runs on.

    Specific platforms are checked before the generic markers, since many
    platforms also set e.g. `CI`. Lookups do not change usage state.

    Args:
        env: Environment snapshot

    Returns:
        The detected platform, `CIPlatform.GENERIC` if only a generic marker
        is set, or None
    """
    for key, expected, platform in VALUE_MARKERS:
        if env.peek(key) == expected:
            return platform

    for key, platform in PRESENCE_MARKERS:
        if key in env:
            return platform

    if all(key in env for key in TASKCLUSTER_MARKERS):
        return CIPlatform.TASKCLUSTER

    if any(key in env for key in GENERIC_MARKERS):
        return CIPlatform.GENERIC

    return None
