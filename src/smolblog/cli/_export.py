"""``smolblog export``: render every manifest page to a directory."""

import argparse
import logging
from pathlib import Path

from smolblog.config import DEFAULT_MANIFEST, DEFAULT_OUTPUT, SiteConfig
from smolblog.errors import SmolblogError

logger = logging.getLogger("smolblog.cli")


def run_export(args: argparse.Namespace) -> None:
    """Render all pages once; exit 1 on the first failure.

    The manifest defaults to ``./smolmanifest.json`` and the output to
    ``./dist``.
    """
    from smolblog.export import export_site

    cwd = Path.cwd()
    config = SiteConfig(
        manifest=args.manifest or cwd / DEFAULT_MANIFEST,
        output_dir=args.output or cwd / DEFAULT_OUTPUT,
        log_level=args.log_level,
    )

    try:
        written = export_site(config.manifest_path, config.output_dir, config)
    except SmolblogError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    logger.info("exported %d page(s) to %s", len(written), config.output_dir)
