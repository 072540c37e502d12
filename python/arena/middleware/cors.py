"""Pure ASGI CORS middleware for /api/* endpoints.

- Not starlette's CORSMiddleware: this one is path-scoped.
- Not BaseHTTPMiddleware: SSE responses must reach the browser fragment by
  fragment, so only the http.response.start message is touched.
- Requests without an Origin header (curl, tests) pass through untouched.
- Unknown origins get 403; OPTIONS preflight is answered with 204.
- Credentials are allowed so the session cookie travels with requests.
"""

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

CORS_PATH_PREFIX = "/api/"


class ApiCORSMiddleware:
    """Path-scoped CORS for the browser-facing API."""

    def __init__(self, app: ASGIApp, allowed_origins: list[str]):
        self.app = app
        self.allowed_origins = set(allowed_origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope["path"].startswith(CORS_PATH_PREFIX):
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")

        if origin is None:
            await self.app(scope, receive, send)
            return

        if origin not in self.allowed_origins:
            response = Response(status_code=403, content="origin not allowed")
            await response(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            response = Response(
                status_code=204,
                headers={
                    "access-control-allow-origin": origin,
                    "access-control-allow-credentials": "true",
                    "access-control-allow-methods": "GET, POST, OPTIONS",
                    "access-control-allow-headers": "Content-Type, X-Request-ID",
                    "access-control-max-age": "600",
                    "vary": "Origin",
                },
            )
            await response(scope, receive, send)
            return

        async def send_with_cors(message: dict) -> None:
            if message["type"] == "http.response.start":
                resp_headers = MutableHeaders(scope=message)
                resp_headers.append("access-control-allow-origin", origin)
                resp_headers.append("access-control-allow-credentials", "true")
                resp_headers.append("access-control-expose-headers", "X-Request-ID")
                resp_headers.append("vary", "Origin")
            await send(message)

        await self.app(scope, receive, send_with_cors)
