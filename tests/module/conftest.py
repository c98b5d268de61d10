"""Fixtures for module tests running the CLI against a fake service."""

import asyncio
import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

import pytest

from lighthouse_ci_trigger.testing.server import FakeLighthouseCI

PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()


@dataclass(frozen=True, kw_only=True)
class CLIResult:
    """Outcome of a CLI subprocess run."""

    returncode: int
    stdout: str
    stderr: str


@pytest.fixture
def lighthouse_ci() -> FakeLighthouseCI:
    """Create the fake Lighthouse CI service."""
    return FakeLighthouseCI()


@pytest.fixture
async def ci_host(lighthouse_ci: FakeLighthouseCI) -> AsyncGenerator[str, None]:
    """Serve the fake service and return its base URL."""
    async with lighthouse_ci.serve() as url:
        yield url


@pytest.fixture
def run_cli() -> Callable[[list[str], Mapping[str, str]], Awaitable[CLIResult]]:
    """Return a function running the CLI in a subprocess with a clean env.

    The subprocess is awaited so the fake service keeps serving meanwhile.
    """

    async def _run(args: list[str], env: Mapping[str, str]) -> CLIResult:
        process = await asyncio.create_subprocess_exec(
            sys.executable,
            "-m",
            "lighthouse_ci_trigger",
            *args,
            env={
                "PATH": os.environ.get("PATH", ""),
                "PYTHONPATH": str(PROJECT_ROOT),
                **env,
            },
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=60)
        assert process.returncode is not None
        return CLIResult(
            returncode=process.returncode,
            stdout=stdout.decode(),
            stderr=stderr.decode(),
        )

    return _run
