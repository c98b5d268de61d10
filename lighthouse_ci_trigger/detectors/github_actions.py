"""GitHub Actions detector."""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from lighthouse_ci_trigger.detectors.base import (
    CIContext,
    CIDetector,
    parse_repo_slug,
)
from lighthouse_ci_trigger.models.config import PullRequest

PULL_REQUEST_EVENTS = frozenset({"pull_request", "pull_request_target"})
PULL_REQUEST_REF = re.compile(r"^refs/pull/(\d+)/")


@dataclass(frozen=True, kw_only=True)
class GitHubActionsDetector(CIDetector):
    """Detects GitHub Actions workflow runs."""

    key: str = "github-actions"
    priority: int = 30

    def matches(self, env: Mapping[str, str]) -> bool:
        """GitHub sets GITHUB_ACTIONS=true on every workflow run."""
        return env.get("GITHUB_ACTIONS") == "true"

    def context(self, env: Mapping[str, str]) -> CIContext:
        """Read pull request details from GITHUB_* variables."""
        ref_match = PULL_REQUEST_REF.match(env.get("GITHUB_REF", ""))
        return CIContext(
            provider=self.key,
            is_pull_request=env.get("GITHUB_EVENT_NAME") in PULL_REQUEST_EVENTS,
            pull_request=PullRequest(
                number=int(ref_match.group(1)) if ref_match else None,
                commit_sha=env.get("GITHUB_SHA") or None,
            ),
            repository=parse_repo_slug(env.get("GITHUB_REPOSITORY")),
        )


github_actions_detector = GitHubActionsDetector()
