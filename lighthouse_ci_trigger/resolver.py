"""Resolve the run configuration from command-line flags and CI environment."""

import argparse
import logging
import math
from collections.abc import Iterator, Mapping, Sequence
from typing import NoReturn

from lighthouse_ci_trigger.detectors.base import CIDetector
from lighthouse_ci_trigger.detectors.loading import detect_ci, load_detectors
from lighthouse_ci_trigger.errors import UsageError
from lighthouse_ci_trigger.models.config import (
    PullRequest,
    Repository,
    Runner,
    RunConfiguration,
)

log = logging.getLogger(__name__)

RUNNER_OPTIONS = ", ".join(runner.value for runner in Runner)

USAGE = f"""Usage:
lighthouse-ci [--score=<score>] [--no-comment] [--pr=<boolean>] [--runner={RUNNER_OPTIONS}] <url>

Options:
  --score      Minimum score for the pull request to be considered "passing".
               If omitted, merging the PR will be allowed no matter what the score. [Number]

  --no-comment Doesn't post a comment to the PR issue summarizing the Lighthouse results. [Boolean]

  --pr         By default Lighthouse will only run on PR's. To enable Lighthouse on all event
               types set to false to run Lighthouse on all activity [Boolean]

  --runner     Selects Lighthouse running on Chrome or WebPageTest. [--runner={RUNNER_OPTIONS}]

  --help       Prints help.

Examples:

  Runs Lighthouse and posts a summary of the results.
    lighthouse-ci https://example.com

  Runs Lighthouse and posts a summary of the results on every test run.
    lighthouse-ci --pr=false https://example.com

  Fails the PR if the score drops below 93. Posts the summary comment.
    lighthouse-ci --score=93 https://example.com

  Runs Lighthouse on WebPageTest. Fails the PR if the score drops below 93.
    lighthouse-ci --score=93 --runner=wpt --no-comment https://example.com"""

HELP_FLAGS = frozenset({"-h", "--help"})
BOOLEAN_FLAGS = frozenset({"comment", "pr"})
TRUE_VALUES = frozenset({"true", "1", "yes"})
FALSE_VALUES = frozenset({"false", "0", "no"})
SEPARATE_VALUES = frozenset({"true", "false"})


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def parse_bool(value: str) -> bool:
    """Parse a boolean flag value such as "false" or "1"."""
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise UsageError(f'Invalid boolean value "{value}". Use true or false.')


def parse_score(value: str) -> float:
    """Parse the --score value, rejecting anything that is not a finite number."""
    try:
        score = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f'invalid score "{value}"') from None
    if not math.isfinite(score):
        raise argparse.ArgumentTypeError(f'invalid score "{value}"')
    return score


def expand_boolean_flags(argv: Sequence[str]) -> Iterator[str]:
    """Rewrite boolean flag values into "--flag" or "--no-flag".

    Both "--flag=<bool>" and "--flag true|false" are accepted. Only the exact
    words "true" and "false" are taken as a separate value, so "--pr <url>"
    leaves the URL alone. Everything after a "--" separator is passed through
    untouched.
    """
    args = list(argv)
    while args:
        arg = args.pop(0)
        if arg == "--":
            yield arg
            yield from args
            return

        name, sep, value = arg.partition("=")
        flag = name.removeprefix("--")
        if not name.startswith("--") or flag not in BOOLEAN_FLAGS:
            yield arg
            continue

        if sep:
            enabled = parse_bool(value)
        elif args and args[0] in SEPARATE_VALUES:
            enabled = args.pop(0) == "true"
        else:
            enabled = True
        yield f"--{flag}" if enabled else f"--no-{flag}"


def leading_options(argv: Sequence[str]) -> list[str]:
    """Return the arguments that precede a "--" separator."""
    args = list(argv)
    if "--" in args:
        del args[args.index("--") :]
    return args


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = _ArgumentParser(
        prog="lighthouse-ci", add_help=False, allow_abbrev=False
    )
    parser.add_argument("url", nargs="?")
    parser.add_argument("--score", type=parse_score)
    parser.add_argument(
        "--comment", action=argparse.BooleanOptionalAction, default=True
    )
    parser.add_argument("--pr", action=argparse.BooleanOptionalAction, default=True)
    parser.add_argument("--runner", default=Runner.CHROME.value)
    return parser


def parse_runner(value: str) -> Runner:
    """Return the runner for a --runner value."""
    try:
        return Runner(value)
    except ValueError:
        raise UsageError(
            f'Unknown runner "{value}". Options: {RUNNER_OPTIONS}'
        ) from None


def resolve(
    argv: Sequence[str],
    env: Mapping[str, str],
    detectors: Sequence[CIDetector] | None = None,
) -> RunConfiguration:
    """Resolve the run configuration.

    Args:
        argv: Command-line arguments, without the program name
        env: Environment variables
        detectors: CI detectors to query, in order (default: all registered)

    Returns:
        The resolved, immutable run configuration

    Raises:
        UsageError: If help was requested or the arguments are invalid

    """
    if HELP_FLAGS.intersection(leading_options(argv)):
        raise UsageError()

    args = build_parser().parse_args(list(expand_boolean_flags(argv)))

    if not args.url:
        raise UsageError("Please provide a url to test.")

    if not args.comment and not args.score:
        raise UsageError("Please provide a --score when using --no-comment.")

    runner = parse_runner(args.runner)
    log.info("Using runner: %s", runner.value)

    if detectors is None:
        detectors = load_detectors()
    ci = detect_ci(env, detectors)

    pull_request = ci.pull_request if ci else PullRequest()
    repository = ci.repository if ci else Repository()
    log.info("Slug: %s %s", repository.owner, repository.name)

    # --pr=false runs on every build, otherwise only on pull request builds
    should_run = not args.pr or (ci is not None and ci.is_pull_request)

    return RunConfiguration(
        test_url=args.url,
        should_run=should_run,
        post_comment=args.comment,
        min_pass_score=args.score,
        runner=runner,
        pull_request=pull_request,
        repository=repository,
    )
