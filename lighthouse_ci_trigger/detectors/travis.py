"""Travis CI detector."""

from collections.abc import Mapping
from dataclasses import dataclass

from lighthouse_ci_trigger.detectors.base import (
    CIContext,
    CIDetector,
    parse_pr_number,
    parse_repo_slug,
)
from lighthouse_ci_trigger.models.config import PullRequest


@dataclass(frozen=True, kw_only=True)
class TravisDetector(CIDetector):
    """Detects Travis CI builds."""

    key: str = "travis"
    priority: int = 10

    def matches(self, env: Mapping[str, str]) -> bool:
        """Travis sets TRAVIS on every build."""
        return bool(env.get("TRAVIS"))

    def context(self, env: Mapping[str, str]) -> CIContext:
        """Read pull request details from TRAVIS_* variables."""
        slug = env.get("TRAVIS_PULL_REQUEST_SLUG") or env.get("TRAVIS_REPO_SLUG")
        return CIContext(
            provider=self.key,
            is_pull_request=env.get("TRAVIS_EVENT_TYPE") == "pull_request",
            pull_request=PullRequest(
                number=parse_pr_number(env.get("TRAVIS_PULL_REQUEST")),
                commit_sha=env.get("TRAVIS_PULL_REQUEST_SHA") or None,
            ),
            repository=parse_repo_slug(slug),
        )


travis_detector = TravisDetector()
