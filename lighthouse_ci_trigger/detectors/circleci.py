"""CircleCI detector."""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from lighthouse_ci_trigger.detectors.base import (
    CIContext,
    CIDetector,
    parse_pr_number,
    parse_repo_slug,
)
from lighthouse_ci_trigger.models.config import PullRequest, Repository

PULL_REQUEST_URL = re.compile(r"([^/:]+)/([^/]+)/pull/(\d+)/?$")


@dataclass(frozen=True, kw_only=True)
class CircleCIDetector(CIDetector):
    """Detects CircleCI builds.

    CIRCLE_PULL_REQUEST holds the pull request URL, e.g.
    https://github.com/owner/name/pull/12, and is only set on PR builds.
    """

    key: str = "circleci"
    priority: int = 20

    def matches(self, env: Mapping[str, str]) -> bool:
        """CircleCI sets CIRCLECI on every build."""
        return bool(env.get("CIRCLECI"))

    def context(self, env: Mapping[str, str]) -> CIContext:
        """Read pull request details from CIRCLE_* variables."""
        pr_url = env.get("CIRCLE_PULL_REQUEST")
        pr_match = PULL_REQUEST_URL.search(pr_url) if pr_url else None

        number = parse_pr_number(env.get("CIRCLE_PR_NUMBER"))
        if number is None and pr_match:
            number = int(pr_match.group(3))

        return CIContext(
            provider=self.key,
            is_pull_request=bool(pr_url),
            pull_request=PullRequest(
                number=number,
                commit_sha=env.get("CIRCLE_SHA1") or None,
            ),
            repository=self._repository(env, pr_match),
        )

    def _repository(
        self, env: Mapping[str, str], pr_match: re.Match[str] | None
    ) -> Repository:
        owner = env.get("CIRCLE_PROJECT_USERNAME")
        name = env.get("CIRCLE_PROJECT_REPONAME")
        if owner and name:
            return Repository(owner=owner, name=name)
        if pr_match:
            return Repository(owner=pr_match.group(1), name=pr_match.group(2))
        return parse_repo_slug(env.get("CIRCLE_REPOSITORY_URL"))


circleci_detector = CircleCIDetector()
