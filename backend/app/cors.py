"""CORS handling for the Launchpad API.

Same allow-list semantics as Starlette's CORSMiddleware, with one change:
every OPTIONS request gets ``200`` and an empty body. The origin is echoed
in ``Access-Control-Allow-Origin`` only when it is on the allow-list; other
origins simply get no CORS headers and the browser blocks the call.
"""

from __future__ import annotations

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

ALLOWED_METHODS = ["GET", "POST", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type"]


class LaunchpadCORSMiddleware(CORSMiddleware):
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "OPTIONS":
            await super().__call__(scope, receive, send)
            return

        headers = Headers(scope=scope)
        if "origin" in headers and "access-control-request-method" in headers:
            response = self.preflight_response(request_headers=headers)
        else:
            response = Response(status_code=200)
        await response(scope, receive, send)

    def preflight_response(self, request_headers: Headers) -> Response:
        upstream = super().preflight_response(request_headers=request_headers)
        headers = {
            name: value
            for name, value in upstream.headers.items()
            if name not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)
