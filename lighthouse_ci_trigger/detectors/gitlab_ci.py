"""GitLab CI detector."""

from collections.abc import Mapping
from dataclasses import dataclass

from lighthouse_ci_trigger.detectors.base import (
    CIContext,
    CIDetector,
    parse_pr_number,
    parse_repo_slug,
)
from lighthouse_ci_trigger.models.config import PullRequest, Repository


@dataclass(frozen=True, kw_only=True)
class GitLabCIDetector(CIDetector):
    """Detects GitLab CI pipelines.

    Merge request pipelines expose CI_MERGE_REQUEST_IID; branch pipelines
    do not.
    """

    key: str = "gitlab-ci"
    priority: int = 40

    def matches(self, env: Mapping[str, str]) -> bool:
        """GitLab sets GITLAB_CI on every job."""
        return bool(env.get("GITLAB_CI"))

    def context(self, env: Mapping[str, str]) -> CIContext:
        """Read merge request details from CI_* variables."""
        iid = env.get("CI_MERGE_REQUEST_IID")
        namespace = env.get("CI_PROJECT_NAMESPACE")
        name = env.get("CI_PROJECT_NAME")
        if namespace and name:
            repository = Repository(owner=namespace, name=name)
        else:
            repository = parse_repo_slug(env.get("CI_PROJECT_PATH"))

        return CIContext(
            provider=self.key,
            is_pull_request=bool(iid),
            pull_request=PullRequest(
                number=parse_pr_number(iid),
                commit_sha=env.get("CI_COMMIT_SHA") or None,
            ),
            repository=repository,
        )


gitlab_ci_detector = GitLabCIDetector()
