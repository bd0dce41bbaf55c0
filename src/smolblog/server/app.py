"""ASGI application for the serving front-end.

Every GET re-runs the whole pipeline (manifest, layouts, render) from
disk, so edits show up on the next request. There is no state shared
between requests and therefore nothing to lock or invalidate.
"""

from __future__ import annotations

import asyncio
import mimetypes
from pathlib import Path

from smolblog._internal.asgi import Receive, Scope, Send
from smolblog.config import SiteConfig
from smolblog.errors import HTTPError, MethodNotAllowedError, SmolblogError
from smolblog.http.request import Request
from smolblog.http.response import Response
from smolblog.render import RenderedOutput, render_request
from smolblog.server.errors import handle_http_error, handle_internal_error, handle_render_error
from smolblog.server.sender import send_response

ALLOWED_METHODS = frozenset({"GET"})


class SiteApp:
    """The smolblog site as an ASGI 3.0 callable.

    Usage::

        app = SiteApp(SiteConfig(manifest="site/smolmanifest.json"))

        # Serve it
        from smolblog.server.dev import run_server
        run_server(app)

        # Or drive it in-process
        async with TestClient(app) as client:
            response = await client.get("/")
    """

    __slots__ = ("config",)

    def __init__(self, config: SiteConfig | None = None) -> None:
        self.config: SiteConfig = config or SiteConfig()

    @property
    def manifest_path(self) -> Path:
        return self.config.manifest_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        request = Request.from_asgi(dict(scope))
        response = await self.handle(request)
        await send_response(response, send)

    async def handle(self, request: Request) -> Response:
        """Process a single request through the full pipeline."""
        try:
            if request.method not in ALLOWED_METHODS:
                raise MethodNotAllowedError(request.method, ALLOWED_METHODS)

            # File I/O and template rendering stay off the event loop
            output = await asyncio.to_thread(
                render_request, self.manifest_path, request.path, self.config
            )
            return _to_response(output, request.path)
        except HTTPError as exc:
            return handle_http_error(exc, request)
        except SmolblogError as exc:
            return handle_render_error(exc, request)
        except Exception as exc:
            return handle_internal_error(exc, request)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return


def _to_response(output: RenderedOutput, path: str) -> Response:
    if output.static and not output.content_type:
        # Undeclared static content type: guess from the URL like a file server would
        content_type, _ = mimetypes.guess_type(path)
        return Response(body=output.body, content_type=content_type or "application/octet-stream")
    return Response(body=output.body, content_type=output.content_type)
