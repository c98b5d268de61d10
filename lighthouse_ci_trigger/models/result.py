"""Models for audit submission results."""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, kw_only=True)
class ScoreResult:
    """Immediate score returned by the chrome runner."""

    score: float


@dataclass(frozen=True, kw_only=True)
class TrackingResult:
    """Tracking reference returned by the WebPageTest runner.

    WebPageTest audits are scheduled asynchronously, so the score only becomes
    available later on the tracked page.
    """

    target_url: str


AuditResult: TypeAlias = ScoreResult | TrackingResult
