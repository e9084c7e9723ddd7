"""CORS configuration.

Regular requests get headers from Starlette's CORSMiddleware. Unhandled
500s are produced outside that middleware, so their handler adds the
origin header itself via ``allow_origin_headers``. Every
``OPTIONS`` request is answered with 204 before routing, whether or not
it is a well-formed preflight.
"""

from collections.abc import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOW_HEADERS: list[str] = ["Content-Type", "Authorization"]


def allow_origin_headers(origin: str | None, origins: Iterable[str]) -> dict[str, str]:
    """``Access-Control-Allow-Origin`` (and ``Vary``) for ``origin``, if allowed."""
    allowed = list(origins)
    if "*" in allowed:
        return {"Access-Control-Allow-Origin": "*"}
    if origin and origin in allowed:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


class PreflightMiddleware:
    """Short-circuits OPTIONS requests with 204 and the CORS headers."""

    def __init__(self, app: ASGIApp, origins: Iterable[str] = ("*",)):
        self.app = app
        self.origins = list(origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] != "OPTIONS":
            await self.app(scope, receive, send)
            return

        headers = {
            "Access-Control-Allow-Methods": ",".join(ALLOW_METHODS),
            "Access-Control-Allow-Headers": ",".join(ALLOW_HEADERS),
        }
        headers.update(allow_origin_headers(Headers(scope=scope).get("origin"), self.origins))

        response = Response(status_code=204, headers=headers)
        await response(scope, receive, send)


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    allowed = list(origins or ["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed,
        allow_methods=ALLOW_METHODS,
        allow_headers=ALLOW_HEADERS,
    )
    # added last so it wraps CORSMiddleware
    app.add_middleware(PreflightMiddleware, origins=allowed)


__all__ = ["apply_cors", "allow_origin_headers", "PreflightMiddleware", "ALLOW_METHODS", "ALLOW_HEADERS"]
