"""Manifest loader.

Reads the JSON manifest into frozen dataclasses. The manifest is the
single source of truth for one render cycle and is never cached: every
call to ``load_manifest()`` re-reads the file, which is what gives the
serving front-end its edit-and-reload behavior.

Unknown keys are ignored and missing fields default to empty values.
A field of the wrong JSON type is a ``ManifestParseError``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from smolblog.errors import ManifestParseError, ManifestReadError
from smolblog.paths import manifest_dir, resolve_path

# Route args are flat: one level of scalars, or arrays of scalars.
type Scalar = str | int | float | bool | None
type ArgValue = Scalar | tuple[Scalar, ...]


@dataclass(frozen=True, slots=True)
class MarkdownRef:
    """Reference to a Markdown source, relative to the manifest directory."""

    path: str = ""


@dataclass(frozen=True, slots=True)
class Route:
    """A URL path mapped to a static file or a named template.

    When ``static_path`` is set it takes precedence; ``template`` and
    ``args`` are then ignored.
    """

    static_path: str = ""
    content_type: str = ""
    template: str = ""
    args: Mapping[str, ArgValue] = field(default_factory=dict)

    @property
    def is_static(self) -> bool:
        return bool(self.static_path)


@dataclass(frozen=True, slots=True)
class Page:
    """A page rendered once into ``<output>/<path>/index.html``."""

    name: str
    layout: str = ""
    path: str = ""
    args: Mapping[str, str] = field(default_factory=dict)
    markdown: MarkdownRef | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """The parsed manifest for one render cycle."""

    path: Path
    layouts: tuple[Path, ...] = ()
    routes: Mapping[str, Route] = field(default_factory=dict)
    pages: Mapping[str, Page] = field(default_factory=dict)
    # Parsed for completeness; no template sees these.
    args: Mapping[str, str] = field(default_factory=dict)

    @property
    def directory(self) -> Path:
        """Directory every relative manifest path is resolved against."""
        return manifest_dir(self.path)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a manifest-relative path (absolute paths pass through)."""
        return resolve_path(self.directory, path)


def load_manifest(path: str | Path) -> Manifest:
    """Read, decode, and resolve the manifest at *path*.

    Raises:
        ManifestReadError: The file could not be opened or read.
        ManifestParseError: The file is not JSON or has the wrong shape.
    """
    manifest_path = Path(path).absolute()
    try:
        raw = manifest_path.read_bytes()
    except OSError as exc:
        msg = f"error opening manifest {str(manifest_path)!r}: {exc}"
        raise ManifestReadError(msg, manifest_path) from exc

    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"error decoding manifest {str(manifest_path)!r}: {exc}"
        raise ManifestParseError(msg, manifest_path) from exc

    return parse_manifest(data, manifest_path)


def parse_manifest(data: Any, path: str | Path) -> Manifest:
    """Build a ``Manifest`` from already-decoded JSON *data*.

    Layout paths are resolved against the directory of *path*.
    """
    manifest_path = Path(path).absolute()
    base = manifest_dir(manifest_path)
    top = _expect(data, dict, "manifest", manifest_path)

    layouts = tuple(
        resolve_path(base, _expect(item, str, f"layouts[{i}]", manifest_path))
        for i, item in enumerate(_expect(top.get("layouts") or [], list, "layouts", manifest_path))
    )

    routes = {
        url: _parse_route(url, entry, manifest_path)
        for url, entry in _expect(top.get("routes") or {}, dict, "routes", manifest_path).items()
    }

    pages = {
        name: _parse_page(name, entry, manifest_path)
        for name, entry in _expect(top.get("pages") or {}, dict, "pages", manifest_path).items()
    }

    args = _string_map(top.get("args"), "args", manifest_path)

    return Manifest(path=manifest_path, layouts=layouts, routes=routes, pages=pages, args=args)


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


def _parse_route(url: str, entry: Any, manifest_path: Path) -> Route:
    where = f"routes[{url!r}]"
    obj = _expect(entry, dict, where, manifest_path)
    return Route(
        static_path=_optional_str(obj, "static_path", where, manifest_path),
        content_type=_optional_str(obj, "content_type", where, manifest_path),
        template=_optional_str(obj, "template", where, manifest_path),
        args=_flat_map(obj.get("args"), f"{where}.args", manifest_path),
    )


def _parse_page(name: str, entry: Any, manifest_path: Path) -> Page:
    where = f"pages[{name!r}]"
    obj = _expect(entry, dict, where, manifest_path)

    # "template" is accepted as an alias of "layout"
    layout = _optional_str(obj, "layout", where, manifest_path) or _optional_str(
        obj, "template", where, manifest_path
    )

    markdown: MarkdownRef | None = None
    md = obj.get("markdown")
    if md is not None:
        md_obj = _expect(md, dict, f"{where}.markdown", manifest_path)
        md_path = _optional_str(md_obj, "path", f"{where}.markdown", manifest_path)
        if md_path:
            markdown = MarkdownRef(path=md_path)

    return Page(
        name=name,
        layout=layout,
        path=_optional_str(obj, "path", where, manifest_path),
        args=_string_map(obj.get("args"), f"{where}.args", manifest_path),
        markdown=markdown,
    )


def _expect(value: Any, kind: type, where: str, manifest_path: Path) -> Any:
    if not isinstance(value, kind):
        expected = {dict: "an object", list: "an array", str: "a string"}.get(kind, kind.__name__)
        msg = f"error decoding manifest {str(manifest_path)!r}: {where} must be {expected}"
        raise ManifestParseError(msg, manifest_path)
    return value


def _optional_str(obj: Mapping[str, Any], key: str, where: str, manifest_path: Path) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    return _expect(value, str, f"{where}.{key}", manifest_path)


def _string_map(value: Any, where: str, manifest_path: Path) -> dict[str, str]:
    if value is None:
        return {}
    obj = _expect(value, dict, where, manifest_path)
    return {key: _expect(item, str, f"{where}[{key!r}]", manifest_path) for key, item in obj.items()}


def _flat_map(value: Any, where: str, manifest_path: Path) -> dict[str, ArgValue]:
    """Validate a route ``args`` map: scalars or arrays of scalars only."""
    if value is None:
        return {}
    obj = _expect(value, dict, where, manifest_path)
    result: dict[str, ArgValue] = {}
    for key, item in obj.items():
        if isinstance(item, list):
            if not all(_is_scalar(v) for v in item):
                msg = (
                    f"error decoding manifest {str(manifest_path)!r}: "
                    f"{where}[{key!r}] may only contain scalar values"
                )
                raise ManifestParseError(msg, manifest_path)
            result[key] = tuple(item)
        elif _is_scalar(item):
            result[key] = item
        else:
            msg = (
                f"error decoding manifest {str(manifest_path)!r}: "
                f"{where}[{key!r}] must be a scalar or an array of scalars"
            )
            raise ManifestParseError(msg, manifest_path)
    return result


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))
