"""Manifest-relative path resolution.

Every path inside a manifest (layouts, static files, Markdown sources)
is resolved against the manifest's own directory, never the cwd.
"""

from pathlib import Path


def manifest_dir(manifest_path: str | Path) -> Path:
    """Return the absolute directory containing the manifest."""
    return Path(manifest_path).absolute().parent


def resolve_path(base_dir: str | Path, path: str | Path) -> Path:
    """Resolve *path* against *base_dir* unless it is already absolute.

    Absolute paths pass through verbatim::

        >>> resolve_path("/site", "layouts/post.html")
        PosixPath('/site/layouts/post.html')
        >>> resolve_path("/site", "/srv/shared/base.html")
        PosixPath('/srv/shared/base.html')
    """
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return Path(base_dir) / candidate
