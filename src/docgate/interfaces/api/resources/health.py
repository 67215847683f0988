"""Health check endpoints."""

from collections.abc import Awaitable, Callable

import falcon.asgi

from docgate.domain.exceptions import StoreError


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, readiness_probe: Callable[[], Awaitable[None]] | None = None) -> None:
        self._readiness_probe = readiness_probe

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness (database reachable)."""
        if self._readiness_probe is not None:
            try:
                await self._readiness_probe()
            except StoreError as e:
                resp.media = {"status": "unavailable", "message": str(e)}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
