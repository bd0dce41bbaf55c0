"""``smolblog serve``: live server, or a one-shot mirror with ``--output``."""

import argparse
import asyncio
import logging
from dataclasses import replace

from smolblog.config import SiteConfig
from smolblog.errors import SmolblogError

logger = logging.getLogger("smolblog.cli")


def run_serve(args: argparse.Namespace) -> None:
    """Serve until interrupted, or mirror every route and return.

    With ``--output`` the site is crawled into that directory through
    the same app that would serve it; once the crawl finishes the
    command returns without opening a listener.
    """
    from smolblog.server.app import SiteApp

    config = SiteConfig(manifest=args.manifest, log_level=args.log_level)
    if args.host:
        config = replace(config, host=args.host)
    if args.port is not None:
        config = replace(config, port=args.port)
    if args.output:
        config = replace(config, output_dir=args.output)

    app = SiteApp(config)

    try:
        if config.output_dir is not None:
            from smolblog.mirror import mirror_site

            written = asyncio.run(mirror_site(app, config.manifest_path, config.output_dir))
            logger.info("mirrored %d route(s) to %s", len(written), config.output_dir)
            return

        from smolblog.server.dev import run_server

        run_server(app)
    except SmolblogError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc
