"""Shared fixtures: build throwaway sites on disk under ``tmp_path``."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

type SiteFactory = Callable[..., Path]


def write_site(root: Path, manifest: dict[str, Any], files: dict[str, str | bytes] | None = None) -> Path:
    """Write *files* and ``smolmanifest.json`` under *root*; return the manifest path."""
    root.mkdir(parents=True, exist_ok=True)
    for name, content in (files or {}).items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    manifest_path = root / "smolmanifest.json"
    manifest_path.write_text(json.dumps(manifest), encoding="utf-8")
    return manifest_path


@pytest.fixture
def make_site(tmp_path: Path) -> SiteFactory:
    """Factory fixture: ``make_site(manifest, files)`` -> manifest path."""

    def factory(manifest: dict[str, Any], files: dict[str, str | bytes] | None = None) -> Path:
        return write_site(tmp_path / "site", manifest, files)

    return factory


@pytest.fixture
def blog_site(make_site: SiteFactory) -> Path:
    """A small site with routes, pages, a static asset, and Markdown."""
    return make_site(
        {
            "layouts": ["layouts/index.html", "layouts/post.html"],
            "routes": {
                "/": {"template": "index", "args": {"title": "Hi"}},
                "/style.css": {"static_path": "style.css", "content_type": "text/css"},
            },
            "pages": {
                "about": {
                    "layout": "post",
                    "path": "about",
                    "args": {"title": "About"},
                    "markdown": {"path": "about.md"},
                },
            },
        },
        {
            "layouts/index.html": "<h1>{{ args.title }}</h1>",
            "layouts/post.html": "<main>{{ rendered_markdown }}</main>",
            "style.css": "body { color: red; }",
            "about.md": "# Hi",
        },
    )
