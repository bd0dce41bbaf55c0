"""Mirror a served site into static files.

GETs every route of the manifest through the serving front-end and
writes each response body under an output directory, the way
``wget -r -E`` would mirror the live server. Requests go through
``httpx.ASGITransport`` straight into the app, so no socket is opened
and the crawl finishes before ``mirror_site()`` returns.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

import httpx

from smolblog._internal.asgi import ASGIApp
from smolblog.errors import OutputWriteError
from smolblog.export import DIR_MODE, INDEX_FILE
from smolblog.manifest import load_manifest

logger = logging.getLogger("smolblog.mirror")

BASE_URL = "http://smolblog.local"


def mirror_target(output_dir: str | Path, url_path: str) -> Path:
    """Map a route path to the file that mirrors it.

    ``/`` and paths ending in ``/`` become ``index.html`` inside that
    directory; a last segment without an extension becomes
    ``<segment>/index.html``; anything else keeps its name.

    Raises:
        OutputWriteError: *url_path* has a ``..`` segment and would land
            outside *output_dir*.
    """
    relative = url_path.lstrip("/")
    if ".." in PurePosixPath(relative).parts:
        msg = f"error mirroring {url_path!r}: path escapes the output directory"
        raise OutputWriteError(msg, Path(output_dir))
    if not relative or url_path.endswith("/"):
        return Path(output_dir) / relative / INDEX_FILE
    if not PurePosixPath(relative).suffix:
        return Path(output_dir) / relative / INDEX_FILE
    return Path(output_dir) / relative


async def mirror_site(
    app: ASGIApp,
    manifest_path: str | Path,
    output_dir: str | Path,
) -> list[Path]:
    """Crawl every route of *manifest_path* through *app* into *output_dir*.

    Any non-200 response aborts the crawl.

    Raises:
        OutputWriteError: A route failed to render, or a file could not
            be written.
    """
    manifest = load_manifest(manifest_path)
    written: list[Path] = []

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        for url_path in sorted(manifest.routes):
            target = mirror_target(output_dir, url_path)
            response = await client.get(url_path)
            if response.status_code != 200:
                msg = (
                    f"error mirroring {url_path!r}: server answered "
                    f"{response.status_code}: {response.text}"
                )
                raise OutputWriteError(msg, target)

            _write(target, response.content)
            logger.info("mirrored %s -> %s", url_path, target)
            written.append(target)

    return written


def _write(target: Path, body: bytes) -> None:
    try:
        os.makedirs(target.parent, mode=DIR_MODE, exist_ok=True)
        target.write_bytes(body)
    except OSError as exc:
        msg = f"error creating {str(target)!r}: {exc}"
        raise OutputWriteError(msg, target) from exc
