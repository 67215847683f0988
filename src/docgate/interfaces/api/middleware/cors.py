"""CORS middleware - adds Access-Control-* headers for configured origins."""

import falcon
import falcon.asgi

_ALLOW_METHODS = "GET, POST, PATCH, DELETE, OPTIONS"
_ALLOW_HEADERS = "Content-Type"


class CORSMiddleware:
    """Echoes allowed origins and answers OPTIONS preflight requests.

    ``"*"`` in ``origins`` allows any origin. With no origins configured no
    CORS headers are sent.
    """

    def __init__(self, origins: list[str]) -> None:
        self._origins = origins
        self._allow_any = "*" in origins

    def _set_cors_headers(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        origin = req.get_header("Origin")
        if not origin or not (self._allow_any or origin in self._origins):
            return
        resp.set_header("Access-Control-Allow-Origin", "*" if self._allow_any else origin)
        resp.set_header("Access-Control-Allow-Methods", _ALLOW_METHODS)
        resp.set_header("Access-Control-Allow-Headers", _ALLOW_HEADERS)
        resp.set_header("Access-Control-Max-Age", "86400")
        if not self._allow_any:
            resp.set_header("Vary", "Origin")

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Short-circuit OPTIONS preflight."""
        if req.method == "OPTIONS":
            self._set_cors_headers(req, resp)
            resp.status = falcon.HTTP_204
            resp.complete = True

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        self._set_cors_headers(req, resp)
