"""The one template helper smolblog installs: ``renderMarkdown``.

Available in every layout as ``renderMarkdown(path)`` (and the
snake-case alias ``render_markdown``)::

    <article>{{ renderMarkdown("content/about.md") }}</article>

The path is resolved against the manifest directory. The result is
``Markup`` so autoescape does not re-escape the HTML.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida.template import Markup

from smolblog.markdown.renderer import MarkdownRenderer, convert_file
from smolblog.paths import resolve_path

HELPER_NAMES = ("renderMarkdown", "render_markdown")


def markdown_helper(base_dir: str | Path, renderer: MarkdownRenderer) -> Callable[[str], Markup]:
    """Build a ``renderMarkdown`` bound to one manifest directory.

    Read and conversion failures raise ``AssetReadError`` /
    ``MarkdownConversionError`` out of template execution; the
    template set recovers them at the render boundary.
    """

    def render_markdown(path: str) -> Markup:
        return Markup(convert_file(resolve_path(base_dir, str(path)), renderer))

    return render_markdown


def builtin_globals(base_dir: str | Path, renderer: MarkdownRenderer) -> dict[str, Any]:
    """All globals registered on a template set's environment."""
    helper = markdown_helper(base_dir, renderer)
    return dict.fromkeys(HELPER_NAMES, helper)
