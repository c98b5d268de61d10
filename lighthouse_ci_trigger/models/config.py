"""Models for the resolved run configuration."""

from enum import StrEnum
from typing import Any, Self

from pydantic import Field, model_validator

from lighthouse_ci_trigger.models.base import Model


class Runner(StrEnum):
    """Backend that executes the Lighthouse audit."""

    CHROME = "chrome"
    WPT = "wpt"


class PullRequest(Model):
    """Pull request identity as reported by the CI provider."""

    number: int | None = None
    commit_sha: str | None = Field(default=None, serialization_alias="sha")


class Repository(Model):
    """Repository slug as reported by the CI provider."""

    owner: str | None = None
    name: str | None = None


class RunConfiguration(Model):
    """Settings for a single Lighthouse CI run.

    Field names are Pythonic; the serialization aliases are the names the
    Lighthouse CI service expects in the request body.
    """

    test_url: str = Field(..., min_length=1, serialization_alias="testUrl")
    should_run: bool = Field(..., serialization_alias="runLighthouse")
    post_comment: bool = Field(default=True, serialization_alias="addComment")
    min_pass_score: float | None = Field(
        default=None, serialization_alias="minPassScore"
    )
    runner: Runner = Runner.CHROME
    pull_request: PullRequest = Field(
        default_factory=PullRequest, serialization_alias="pr"
    )
    repository: Repository = Field(
        default_factory=Repository, serialization_alias="repo"
    )

    @model_validator(mode="after")
    def _require_score_without_comment(self) -> Self:
        if not self.post_comment and not self.min_pass_score:
            raise ValueError("min_pass_score is required when post_comment is false")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize the configuration using the service's wire names."""
        return self.model_dump(mode="json", by_alias=True)
