"""Error handling pipeline for smolblog requests.

Every failure becomes a plain-text response carrying the error text,
and is logged. Nothing is retried.
"""

import logging

from smolblog.errors import HTTPError, SmolblogError
from smolblog.http.request import Request
from smolblog.http.response import Response

logger = logging.getLogger("smolblog.server")

TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map a 404/405 to a Response, copying the error's headers."""
    logger.info("%d %s %s: %s", exc.status, request.method, request.url, exc.detail)

    resp = Response(body=exc.detail or f"Error {exc.status}", content_type=TEXT_CONTENT_TYPE)
    resp = resp.with_status(exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_render_error(exc: SmolblogError, request: Request) -> Response:
    """Manifest, layout, asset, Markdown, and template failures are 500s.

    The error text goes into the body so the author sees what broke.
    """
    logger.error("500 %s %s: %s", request.method, request.url, exc)
    return Response(body=str(exc), status=500, content_type=TEXT_CONTENT_TYPE)


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as opaque 500 errors."""
    logger.exception("500 %s %s", request.method, request.url)
    return Response(body="Internal Server Error", status=500, content_type=TEXT_CONTENT_TYPE)
