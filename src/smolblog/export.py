"""Static export front-end.

Renders every manifest page once into ``<output>/<page.path>/index.html``.
The manifest and layouts are loaded a single time for the whole run.
The first failing page aborts the run; files already written by
earlier pages are left in place but the run as a whole has failed.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO

from smolblog.config import SiteConfig
from smolblog.errors import OutputWriteError
from smolblog.manifest import load_manifest
from smolblog.markdown.renderer import MarkdownRenderer
from smolblog.render import render_page
from smolblog.templating.integration import build_template_set

logger = logging.getLogger("smolblog.export")

INDEX_FILE = "index.html"
DIR_MODE = 0o770


def output_file(output_dir: str | Path, page_path: str) -> Path:
    """Where a page with ``path`` *page_path* is written.

    A leading ``/`` is ignored so page paths always stay inside
    *output_dir*.
    """
    return Path(output_dir) / page_path.lstrip("/") / INDEX_FILE


def create_index(path: Path) -> IO[str]:
    """Create parent directories and open *path* for writing.

    Raises:
        OutputWriteError: A directory or the file could not be created.
    """
    try:
        os.makedirs(path.parent, mode=DIR_MODE, exist_ok=True)
        return path.open("w", encoding="utf-8")
    except OSError as exc:
        msg = f"error creating {str(path)!r}: {exc}"
        raise OutputWriteError(msg, path) from exc


def export_site(
    manifest_path: str | Path,
    output_dir: str | Path,
    config: SiteConfig | None = None,
) -> list[Path]:
    """Render every page of the manifest into *output_dir*.

    Page iteration order is not part of the contract.

    Returns:
        The files written, one per page.
    """
    config = config or SiteConfig()
    manifest = load_manifest(manifest_path)
    renderer = MarkdownRenderer(
        plugins=config.markdown_plugins or None,
        highlight=config.markdown_highlight,
    )
    templates = build_template_set(manifest, config, renderer=renderer)

    written: list[Path] = []
    for name, page in manifest.pages.items():
        target = output_file(output_dir, page.path)
        try:
            with create_index(target) as sink:
                render_page(
                    manifest,
                    templates,
                    page,
                    sink,
                    renderer=renderer,
                    default_template=config.default_template,
                )
        except OSError as exc:
            msg = f"error writing page {name!r} to {str(target)!r}: {exc}"
            raise OutputWriteError(msg, target) from exc
        logger.info("rendered page %r -> %s", name, target)
        written.append(target)

    return written
