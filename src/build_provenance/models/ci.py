"""Continuous Integration platform model."""

from enum import Enum


class CIPlatform(str, Enum):
    """Continuous Integration platforms whose presence can be detected.

    The value of each member is its display name.
    """

    TRAVIS = "Travis CI"  # https://travis-ci.org
    CIRCLE = "CircleCI"  # https://circleci.com
    GITLAB = "GitLab"  # https://about.gitlab.com/gitlab-ci
    APPVEYOR = "AppVeyor"  # https://www.appveyor.com
    CODESHIP = "CodeShip"  # https://codeship.com
    DRONE = "Drone"  # https://github.com/drone/drone
    MAGNUM = "Magnum"  # https://magnum-ci.com
    SEMAPHORE = "Semaphore"  # https://semaphoreci.com
    JENKINS = "Jenkins"  # https://jenkins.io
    BAMBOO = "Bamboo"  # https://www.atlassian.com/software/bamboo
    TFS = "Team Foundation Server"  # https://www.visualstudio.com/de/tfs
    TEAMCITY = "TeamCity"  # https://www.jetbrains.com/teamcity
    BUILDKITE = "Buildkite"  # https://buildkite.com
    HUDSON = "Hudson"  # http://hudson-ci.org
    TASKCLUSTER = "TaskCluster"  # https://github.com/taskcluster
    GOCD = "GoCD"  # https://www.gocd.io
    BITBUCKET = "BitBucket"  # https://bitbucket.org
    GITHUB_ACTIONS = "GitHub Actions"  # https://github.com/features/actions
    GENERIC = "Generic CI"

    @property
    def display_name(self) -> str:
        """Human-readable platform name."""
        return self.value

    def __str__(self) -> str:
        return self.value
