"""Kida environment setup and the named template set.

Every layout listed in the manifest is read into a kida ``DictLoader``
under its file name (and its stem as an alias), compiled eagerly so
syntax errors surface at build time, and indexed by block so a single
layout file can contribute several named templates.

A template set is built fresh for every render cycle and discarded
right after; nothing here is cached across requests.
"""

from __future__ import annotations

import io
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any

from kida import DictLoader, Environment
from kida.environment.exceptions import TemplateSyntaxError
from kida.lexer import LexerError

from smolblog.config import SiteConfig
from smolblog.errors import LayoutParseError, SmolblogError, TemplateExecutionError
from smolblog.manifest import Manifest
from smolblog.markdown.renderer import MarkdownRenderer
from smolblog.templating.helpers import builtin_globals


def create_environment(
    config: SiteConfig,
    sources: Mapping[str, str],
    globals_: Mapping[str, Any],
) -> Environment:
    """Create a kida Environment over in-memory layout *sources*."""
    env = Environment(
        loader=DictLoader(dict(sources)),
        autoescape=config.autoescape,
    )
    for name, value in globals_.items():
        env.add_global(name, value)
    return env


@dataclass(frozen=True, slots=True)
class TemplateSet:
    """All named templates parsed from one manifest's layouts.

    ``files`` maps a template name to its loader key; ``blocks`` maps a
    block name to ``(loader key, block name)``. Whole files win over
    blocks of the same name.
    """

    env: Environment
    files: Mapping[str, str]
    blocks: Mapping[str, tuple[str, str]]

    def names(self) -> tuple[str, ...]:
        """Every name ``execute()`` accepts, sorted."""
        return tuple(sorted({*self.files, *self.blocks}))

    def __contains__(self, name: object) -> bool:
        return name in self.files or name in self.blocks

    def execute(self, name: str, context: Mapping[str, Any], sink: IO[str]) -> None:
        """Execute template *name* against *context*, writing into *sink*.

        Whole-file templates are streamed chunk by chunk; anything
        already written stays written if a later chunk fails.

        Raises:
            TemplateExecutionError: *name* is not defined, or rendering failed.
            AssetReadError: ``renderMarkdown`` could not read its file.
            MarkdownConversionError: ``renderMarkdown`` could not convert it.
        """
        # Errors from sink.write() are the caller's; only rendering is guarded
        for chunk in self._guarded(name, self._render_chunks(name, dict(context))):
            sink.write(chunk)

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        """Execute template *name* and return the full output."""
        buffer = io.StringIO()
        self.execute(name, context, buffer)
        return buffer.getvalue()

    @staticmethod
    def _guarded(name: str, chunks: Iterator[str]) -> Iterator[str]:
        try:
            yield from chunks
        except SmolblogError:
            raise
        except Exception as exc:
            original = _unwrap(exc)
            if original is not None:
                raise original
            msg = f'error executing template "{name}": {exc}'
            raise TemplateExecutionError(msg, template=name) from exc

    def _render_chunks(self, name: str, context: dict[str, Any]) -> Iterator[str]:
        if name in self.files:
            template = self.env.get_template(self.files[name])
            yield from template.render_stream(context)
            return

        if name in self.blocks:
            key, block = self.blocks[name]
            template = self.env.get_template(key)
            yield template.render_block(block, context)
            return

        msg = f'template "{name}" is not defined'
        raise TemplateExecutionError(msg, template=name)


def build_template_set(
    manifest: Manifest,
    config: SiteConfig | None = None,
    *,
    renderer: MarkdownRenderer | None = None,
) -> TemplateSet:
    """Parse every layout in *manifest* into one ``TemplateSet``.

    Raises:
        LayoutParseError: A layout is missing, unreadable, or has a
            template syntax error. The message names the file.
    """
    config = config or SiteConfig()
    if renderer is None:
        renderer = MarkdownRenderer(
            plugins=config.markdown_plugins or None,
            highlight=config.markdown_highlight,
        )

    sources: dict[str, str] = {}
    origins: dict[str, Path] = {}
    for layout in manifest.layouts:
        key = layout.name
        sources[key] = _read_layout(layout)
        origins[key] = layout

    env = create_environment(config, sources, builtin_globals(manifest.directory, renderer))

    files: dict[str, str] = {}
    blocks: dict[str, tuple[str, str]] = {}
    for key, layout in origins.items():
        try:
            template = env.get_template(key)
        except (TemplateSyntaxError, LexerError) as exc:
            msg = f"error parsing layout {str(layout)!r}: {exc}"
            raise LayoutParseError(msg, layout) from exc

        for block in template.list_blocks():
            blocks[block] = (key, block)

        files[key] = key
        stem = Path(key).stem
        if stem and stem != key:
            files.setdefault(stem, key)

    # Whole files win over blocks of the same name
    for name in files:
        blocks.pop(name, None)

    return TemplateSet(env=env, files=files, blocks=blocks)


def _read_layout(layout: Path) -> str:
    try:
        return layout.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"error parsing layouts: layout {str(layout)!r} does not exist"
        raise LayoutParseError(msg, layout) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"error parsing layouts: cannot read layout {str(layout)!r}: {exc}"
        raise LayoutParseError(msg, layout) from exc


def _unwrap(exc: BaseException) -> SmolblogError | None:
    """Find a smolblog error wrapped inside a kida runtime error.

    ``renderMarkdown`` raises smolblog errors from inside template
    execution; kida may chain them under its own exception type.
    """
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, SmolblogError):
            return current
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return None
