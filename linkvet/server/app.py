"""HTTP server exposing the link check pipeline."""

from __future__ import annotations

import logging

from aiohttp import web

from ..errors import InputError, ResolutionError
from ..pipeline.check import LinkChecker

logger = logging.getLogger(__name__)


class CheckServer:
    """Serves ``/api/check`` and ``/healthz``."""

    def __init__(self, checker: LinkChecker, host: str = "127.0.0.1", port: int = 3000):
        self.checker = checker
        self.host = host
        self.port = port
        self._runner: web.AppRunner | None = None
        self._site: web.TCPSite | None = None

        self._app = web.Application()
        self._register_routes()

    @property
    def app(self) -> web.Application:
        return self._app

    def _register_routes(self) -> None:
        self._app.router.add_get("/healthz", self._healthz)
        self._app.router.add_get("/api/check", self._check_status)
        self._app.router.add_post("/api/check", self._check)

    async def start(self) -> None:
        if self._runner:
            return
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, host=self.host, port=int(self.port))
        await self._site.start()
        logger.info("Check server listening on %s:%s", self.host, self.port)

    async def stop(self) -> None:
        if self._runner:
            await self._runner.cleanup()
        self._runner = None
        self._site = None

    async def _healthz(self, request: web.Request) -> web.Response:
        return web.json_response({"ok": True})

    async def _check_status(self, request: web.Request) -> web.Response:
        return web.json_response({"ok": True})

    async def _check(self, request: web.Request) -> web.Response:
        """Score a submitted URL. Body: ``{"url": str, "context": str?}``."""
        try:
            data = await request.json()
        except Exception:
            return web.json_response({"error": "Invalid JSON payload"}, status=400)
        if not isinstance(data, dict):
            return web.json_response({"error": "Invalid JSON payload"}, status=400)

        try:
            result = await self.checker.check(data.get("url"), data.get("context"))
        except InputError as exc:
            return web.json_response({"error": exc.message}, status=400)
        except ResolutionError as exc:
            return web.json_response(
                {"error": "Could not resolve the link behind the gateway", "gateway": exc.gateway},
                status=422,
            )
        except Exception:
            logger.exception("Unhandled error while checking link")
            return web.json_response({"error": "Internal server error"}, status=500)

        return web.json_response(result.to_dict())


def create_app(checker: LinkChecker) -> web.Application:
    return CheckServer(checker).app
