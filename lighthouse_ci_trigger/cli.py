"""CLI entry point for triggering Lighthouse CI runs."""

import asyncio
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from lighthouse_ci_trigger.detectors.base import CIDetector
from lighthouse_ci_trigger.dispatcher import AuditDispatcher
from lighthouse_ci_trigger.errors import DispatchError, UsageError
from lighthouse_ci_trigger.models.config import RunConfiguration
from lighthouse_ci_trigger.models.result import (
    AuditResult,
    ScoreResult,
    TrackingResult,
)
from lighthouse_ci_trigger.resolver import USAGE, resolve
from lighthouse_ci_trigger.settings import ServiceSettings


def log_result(log: logging.Logger, result: AuditResult) -> None:
    """Log a human-readable summary of the submission result."""
    match result:
        case ScoreResult(score=score):
            log.info("Lighthouse CI score: %s", score)
        case TrackingResult(target_url=target_url):
            log.info("Started Lighthouse run on WebPageTest: %s", target_url)


def format_output(config: RunConfiguration, result: AuditResult) -> dict[str, Any]:
    """Format the submission result for JSON output."""
    output: dict[str, Any] = {
        "test_url": config.test_url,
        "runner": config.runner.value,
    }
    match result:
        case ScoreResult(score=score):
            output["score"] = score
        case TrackingResult(target_url=target_url):
            output["target_url"] = target_url
    return output


def print_usage(error: UsageError) -> None:
    """Print the usage error message, if any, followed by the usage text.

    Requested help goes to stdout; usage after an error goes to stderr.
    """
    if not error.message:
        print(USAGE)
        return
    print(error.message, file=sys.stderr)
    print(USAGE, file=sys.stderr)


async def dispatch(config: RunConfiguration, settings: ServiceSettings) -> int:
    """Submit the run if it is due and return exit code."""
    log = logging.getLogger("lighthouse_ci_trigger")

    if not config.should_run:
        log.info(
            "Lighthouse is not run for non-PR commits by default. "
            "Run with --pr=false to enable for all builds."
        )
        return 0

    async with AuditDispatcher.from_settings(settings) as dispatcher:
        try:
            result = await dispatcher.submit(config)
        except DispatchError as exc:
            log.error("Lighthouse CI failed: %s", exc)
            return 1

    log_result(log, result)
    print(json.dumps(format_output(config, result), indent=2))
    return 0


async def run(
    argv: Sequence[str],
    env: Mapping[str, str],
    detectors: Sequence[CIDetector] | None = None,
) -> int:
    """Resolve the configuration, trigger the run and return exit code."""
    log = logging.getLogger("lighthouse_ci_trigger")

    settings = ServiceSettings.from_env(env)
    if settings.uses_deprecated_api_key:
        log.warning(
            "The environment variable API_KEY is deprecated. "
            "Please use LIGHTHOUSE_API_KEY instead."
        )

    try:
        config = resolve(argv, env, detectors)
    except UsageError as exc:
        print_usage(exc)
        return 1

    if settings.api_key is None:
        log.warning("No API key set. Set LIGHTHOUSE_API_KEY to authenticate.")

    return await dispatch(config, settings)


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(run(sys.argv[1:], os.environ))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
