"""Fake Lighthouse CI service for end-to-end tests."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from aiohttp import web
from aiohttp.test_utils import TestServer

from lighthouse_ci_trigger.testing.payloads import (
    chrome_run_response,
    wpt_run_response,
)


@dataclass(frozen=True, kw_only=True)
class RecordedRequest:
    """A request received by the fake service."""

    path: str
    headers: dict[str, str]
    body: Any


@dataclass(kw_only=True)
class FakeLighthouseCI:
    """In-process stand-in for the Lighthouse CI service.

    Responds to run_on_chrome and run_on_wpt with configurable status and
    payload, and records every request it receives.
    """

    status: int = 200
    chrome_payload: Any = field(default_factory=chrome_run_response)
    wpt_payload: Any = field(default_factory=wpt_run_response)
    requests: list[RecordedRequest] = field(default_factory=list)

    def build_app(self) -> web.Application:
        """Build the aiohttp application serving the fake endpoints."""
        app = web.Application()
        app.router.add_post("/run_on_chrome", self._run_on_chrome)
        app.router.add_post("/run_on_wpt", self._run_on_wpt)
        return app

    @asynccontextmanager
    async def serve(self) -> AsyncGenerator[str, None]:
        """Serve the fake service and yield its base URL."""
        async with TestServer(self.build_app()) as server:
            yield str(server.make_url("")).rstrip("/")

    async def _run_on_chrome(self, request: web.Request) -> web.Response:
        return await self._respond(request, self.chrome_payload)

    async def _run_on_wpt(self, request: web.Request) -> web.Response:
        return await self._respond(request, self.wpt_payload)

    async def _respond(self, request: web.Request, payload: Any) -> web.Response:
        self.requests.append(
            RecordedRequest(
                path=request.path,
                headers=dict(request.headers),
                body=await request.json(),
            )
        )
        if self.status >= 400:
            return web.Response(status=self.status, text="Internal Server Error")
        return web.json_response(payload, status=self.status)
