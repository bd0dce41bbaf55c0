"""HTTP listener for the serving front-end.

Starts a single-worker pounce ASGI server around a live ``SiteApp``.
No file watcher is needed: the app re-reads the manifest and layouts
on every request anyway.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from smolblog.errors import ConfigurationError

if TYPE_CHECKING:
    from smolblog.server.app import SiteApp

logger = logging.getLogger("smolblog.server")


def run_server(
    app: SiteApp,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve *app* until interrupted.

    Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``),
    but smolblog has a live app object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Every connection gets the same fixed deadline,
    ``app.config.io_timeout``, for reading the request and writing the
    response. Interrupting stops the listener; in-flight requests are
    not drained.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "smolblog serve requires 'pounce' for the HTTP listener. "
            "Install with: pip install smolblog[server]"
        )
        raise ConfigurationError(msg) from None

    config = app.config
    server_config = ServerConfig(
        host=host or config.host,
        port=port or config.port,
        workers=1,
        reload=False,
        log_level=config.log_level,
        keep_alive_timeout=config.io_timeout,
        request_timeout=config.io_timeout,
    )
    logger.info(
        "serving %s on http://%s:%d",
        config.manifest_path,
        server_config.host,
        server_config.port,
    )
    server = Server(server_config, app)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("interrupted, listener closed")
