"""Abstract base class for CI provider detectors."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from lighthouse_ci_trigger.models.config import PullRequest, Repository


@dataclass(frozen=True, kw_only=True)
class CIContext:
    """Build context reported by a CI provider detector."""

    provider: str
    is_pull_request: bool
    pull_request: PullRequest
    repository: Repository


@dataclass(frozen=True, kw_only=True)
class CIDetector(ABC):
    """Abstract base for CI provider detectors.

    Each detector recognizes a single CI vendor from its environment
    variables. Detectors are queried in ascending priority order and the
    first one that matches supplies the build context.
    """

    key: str
    priority: int

    @abstractmethod
    def matches(self, env: Mapping[str, str]) -> bool:
        """Return True if the environment belongs to this CI provider."""

    @abstractmethod
    def context(self, env: Mapping[str, str]) -> CIContext:
        """Extract the build context from the environment.

        Only called when matches() returned True for the same environment.
        """

    def detect(self, env: Mapping[str, str]) -> CIContext | None:
        """Return the build context, or None if the provider does not match."""
        if not self.matches(env):
            return None
        return self.context(env)


def parse_pr_number(value: str | None) -> int | None:
    """Parse a pull request number, returning None for non-numeric values.

    Travis for instance sets TRAVIS_PULL_REQUEST to "false" on push builds.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def parse_repo_slug(slug: str | None) -> Repository:
    """Parse an "owner/name" slug or a git remote URL into a Repository.

    Accepts plain slugs as well as https and scp-style remotes, e.g.
    "https://github.com/owner/name" or "git@github.com:owner/name.git".
    """
    if not slug:
        return Repository()

    parts = [
        part
        for part in slug.removesuffix(".git").replace(":", "/").split("/")
        if part
    ]
    if len(parts) < 2:
        return Repository()
    return Repository(owner=parts[-2], name=parts[-1])
