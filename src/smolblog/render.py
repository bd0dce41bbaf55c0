"""Render pipeline: one manifest entry in, rendered bytes out.

Shared by the serving front-end (routes) and the static export
front-end (pages). Templates see a flat context:

- ``path``: the request path (routes only)
- ``args``: the entry's single-level argument map
- ``rendered_markdown``: the page's converted Markdown as ``Markup``,
  or ``""`` when the page has none

Usage::

    from smolblog.render import render_request

    output = render_request("site/smolmanifest.json", "/about")
    output.body  # bytes, ready to send
"""

from __future__ import annotations

import io
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any

from kida.template import Markup

from smolblog.config import SiteConfig
from smolblog.errors import AssetReadError, RouteNotFoundError
from smolblog.manifest import Manifest, Page, Route, load_manifest
from smolblog.markdown.renderer import MarkdownRenderer, convert_file
from smolblog.templating.integration import TemplateSet, build_template_set

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class RenderArgs:
    """The structure passed into one template execution."""

    args: Mapping[str, Any] = field(default_factory=dict)
    path: str = ""
    rendered_markdown: Markup | str = ""

    def as_context(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "args": dict(self.args),
            "rendered_markdown": self.rendered_markdown,
        }


@dataclass(frozen=True, slots=True)
class RenderedOutput:
    """Bytes produced for one route, plus the content type to announce.

    ``content_type`` is empty for a static route that did not declare one.
    """

    body: bytes
    content_type: str = HTML_CONTENT_TYPE
    static: bool = False


def read_static(manifest: Manifest, route: Route) -> RenderedOutput:
    """Return a static route's file bytes, untouched.

    A read failure is an ``AssetReadError`` (served as 500, not 404:
    the route is registered, the file behind it is broken).
    """
    path = manifest.resolve(route.static_path)
    try:
        body = path.read_bytes()
    except OSError as exc:
        msg = f"error reading static file {str(path)!r}: {exc}"
        raise AssetReadError(msg, path) from exc
    return RenderedOutput(body=body, content_type=route.content_type, static=True)


def render_route(
    manifest: Manifest,
    templates: TemplateSet | None,
    request_path: str,
    route: Route,
) -> RenderedOutput:
    """Render one route.

    Static routes never touch *templates* (which may be ``None``).
    Template routes execute ``route.template`` with ``{path, args}``.
    The whole body is buffered before it is returned.
    """
    if route.is_static:
        return read_static(manifest, route)

    if templates is None:
        templates = build_template_set(manifest)

    render_args = RenderArgs(args=route.args, path=request_path)
    buffer = io.StringIO()
    templates.execute(route.template, render_args.as_context(), buffer)
    return RenderedOutput(body=buffer.getvalue().encode("utf-8"))


def page_args(
    manifest: Manifest,
    page: Page,
    renderer: MarkdownRenderer,
) -> RenderArgs:
    """Assemble a page's ``RenderArgs``, converting its Markdown if any."""
    rendered: Markup | str = ""
    if page.markdown is not None and page.markdown.path:
        rendered = Markup(convert_file(manifest.resolve(page.markdown.path), renderer))
    return RenderArgs(args=page.args, rendered_markdown=rendered)


def render_page(
    manifest: Manifest,
    templates: TemplateSet,
    page: Page,
    sink: IO[str],
    *,
    renderer: MarkdownRenderer,
    default_template: str = "post",
) -> None:
    """Render one page into *sink*.

    The page's ``layout`` names the template; pages without one use
    *default_template*. Output is streamed: on failure, whatever was
    already written to *sink* stays there.
    """
    render_args = page_args(manifest, page, renderer)
    templates.execute(page.layout or default_template, render_args.as_context(), sink)


def render_request(
    manifest_path: str | Path,
    request_path: str,
    config: SiteConfig | None = None,
) -> RenderedOutput:
    """Load everything fresh and render the route for *request_path*.

    Nothing is cached: the manifest and layouts are re-read on every
    call, so edits show up on the next request. A broken manifest or
    layout therefore breaks every path, static routes included.

    Raises:
        RouteNotFoundError: *request_path* is not a key of ``routes``.
            No template is looked up or executed.
    """
    config = config or SiteConfig()
    manifest = load_manifest(manifest_path)
    templates = build_template_set(manifest, config)

    route = manifest.routes.get(request_path)
    if route is None:
        raise RouteNotFoundError(request_path)

    return render_route(manifest, templates, request_path, route)
