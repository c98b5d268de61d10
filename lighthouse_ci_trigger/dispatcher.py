"""Submission of a run configuration to the Lighthouse CI service."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import ValidationError

from lighthouse_ci_trigger.errors import DispatchError
from lighthouse_ci_trigger.models.config import Runner, RunConfiguration
from lighthouse_ci_trigger.models.responses import ChromeRunResponse, WptRunResponse
from lighthouse_ci_trigger.models.result import (
    AuditResult,
    ScoreResult,
    TrackingResult,
)
from lighthouse_ci_trigger.settings import ServiceSettings

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class AuditDispatcher:
    """Submits Lighthouse runs to the Lighthouse CI service.

    Each submission is a single POST; failures are not retried.
    """

    settings: ServiceSettings
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_settings(
        cls, settings: ServiceSettings
    ) -> AsyncGenerator["AuditDispatcher", None]:
        """Create dispatcher with managed session lifecycle."""
        headers = {"Content-Type": "application/json"}
        if settings.api_key is not None:
            headers["X-API-KEY"] = settings.api_key.get_secret_value()

        async with aiohttp.ClientSession(headers=headers) as session:
            yield cls(settings=settings, session=session)

    async def submit(self, config: RunConfiguration) -> AuditResult:
        """Submit the run and return the service's result.

        Args:
            config: Resolved run configuration, sent as the request body

        Returns:
            ScoreResult for the chrome runner, TrackingResult for WebPageTest

        Raises:
            DispatchError: On transport errors, error statuses or malformed
                responses

        """
        url = self.settings.endpoint_url(config.runner)
        payload = config.to_payload()
        if config.runner is Runner.CHROME:
            payload = {"format": "json", **payload}

        log.info(
            "Submitting Lighthouse run: url=%s, runner=%s, test_url=%s",
            url,
            config.runner.value,
            config.test_url,
        )

        try:
            async with self.session.post(url, json=payload) as response:
                if not response.ok:
                    text = await response.text()
                    raise DispatchError(
                        f"Lighthouse CI request failed: {response.status} {text}"
                    )
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise DispatchError(f"Lighthouse CI request failed: {exc!r}") from exc
        except ValueError as exc:
            raise DispatchError(f"Lighthouse CI returned invalid JSON: {exc}") from exc

        return parse_result(config.runner, data)


def parse_result(runner: Runner, data: Any) -> AuditResult:
    """Interpret a service response according to the runner that produced it."""
    try:
        if runner is Runner.WPT:
            wpt = WptRunResponse.model_validate(data)
            return TrackingResult(target_url=wpt.data.target_url)

        chrome = ChromeRunResponse.model_validate(data)
        return ScoreResult(score=chrome.score)
    except ValidationError as exc:
        raise DispatchError(
            f"Malformed response from Lighthouse CI for runner {runner.value}: {exc}"
        ) from exc
