"""
Weak ETag validators, so repeat GETs can be answered with 304.
"""

import hashlib

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


CONDITIONAL_METHODS = ("GET", "HEAD")


def weak_etag(body: bytes) -> str:
    return f'W/"{hashlib.sha1(body).hexdigest()}"'


def _opaque(tag: str) -> str:
    tag = tag.strip()
    return tag[2:] if tag.startswith("W/") else tag


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """Weak comparison against an If-None-Match header."""
    if not if_none_match:
        return False
    if if_none_match.strip() == "*":
        return True
    wanted = _opaque(etag)
    return any(_opaque(tag) == wanted for tag in if_none_match.split(","))


class WeakETagMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        if not 200 <= response.status_code < 300:
            return response

        etag = response.headers.get("etag")
        if etag:
            if not etag.startswith("W/"):
                etag = f"W/{etag}"
            response.headers["etag"] = etag
        else:
            body = b"".join([chunk async for chunk in response.body_iterator])
            etag = weak_etag(body)
            response = Response(
                content=body,
                status_code=response.status_code,
                headers=dict(response.headers),
            )
            response.headers["etag"] = etag

        if request.method in CONDITIONAL_METHODS and etag_matches(request.headers.get("if-none-match"), etag):
            return Response(status_code=304, headers={"etag": etag})
        return response
