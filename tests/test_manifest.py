"""Tests for smolblog.manifest: loading, shape checks, path resolution."""

import json
from pathlib import Path

import pytest

from smolblog.errors import ManifestParseError, ManifestReadError
from smolblog.manifest import MarkdownRef, Route, load_manifest, parse_manifest


class TestLoadManifest:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError) as exc_info:
            load_manifest(tmp_path / "nope.json")
        assert exc_info.value.path == tmp_path / "nope.json"
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "smolmanifest.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ManifestParseError):
            load_manifest(path)

    def test_empty_object_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "smolmanifest.json"
        path.write_text("{}", encoding="utf-8")
        manifest = load_manifest(path)
        assert manifest.layouts == ()
        assert manifest.routes == {}
        assert manifest.pages == {}
        assert manifest.args == {}

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "smolmanifest.json"
        path.write_text(
            json.dumps({"theme": "dark", "routes": {"/": {"template": "i", "extra": 1}}}),
            encoding="utf-8",
        )
        manifest = load_manifest(path)
        assert manifest.routes["/"] == Route(template="i")

    def test_reads_fresh_every_time(self, tmp_path: Path) -> None:
        path = tmp_path / "smolmanifest.json"
        path.write_text(json.dumps({"layouts": ["a.html"]}), encoding="utf-8")
        assert load_manifest(path).layouts == (tmp_path / "a.html",)

        path.write_text(json.dumps({"layouts": ["b.html"]}), encoding="utf-8")
        assert load_manifest(path).layouts == (tmp_path / "b.html",)


class TestLayouts:
    def test_relative_resolved_against_manifest_dir(self, tmp_path: Path) -> None:
        manifest = parse_manifest({"layouts": ["layouts/post.html"]}, tmp_path / "m.json")
        assert manifest.layouts == (tmp_path / "layouts" / "post.html",)

    def test_absolute_kept(self, tmp_path: Path) -> None:
        absolute = str(tmp_path / "shared" / "base.html")
        manifest = parse_manifest({"layouts": [absolute]}, "/elsewhere/m.json")
        assert manifest.layouts == (Path(absolute),)

    def test_order_preserved(self, tmp_path: Path) -> None:
        manifest = parse_manifest({"layouts": ["b.html", "a.html"]}, tmp_path / "m.json")
        assert [p.name for p in manifest.layouts] == ["b.html", "a.html"]

    def test_non_string_layout_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError, match=r"layouts\[0\]"):
            parse_manifest({"layouts": [3]}, tmp_path / "m.json")


class TestRoutes:
    def test_template_route(self, tmp_path: Path) -> None:
        manifest = parse_manifest(
            {"routes": {"/": {"template": "index", "args": {"title": "Home", "n": 2}}}},
            tmp_path / "m.json",
        )
        route = manifest.routes["/"]
        assert route.template == "index"
        assert route.args == {"title": "Home", "n": 2}
        assert not route.is_static

    def test_static_route(self, tmp_path: Path) -> None:
        manifest = parse_manifest(
            {"routes": {"/s.css": {"static_path": "s.css", "content_type": "text/css"}}},
            tmp_path / "m.json",
        )
        route = manifest.routes["/s.css"]
        assert route.is_static
        assert route.content_type == "text/css"

    def test_array_args_become_tuples(self, tmp_path: Path) -> None:
        manifest = parse_manifest(
            {"routes": {"/": {"template": "i", "args": {"tags": ["a", "b"]}}}},
            tmp_path / "m.json",
        )
        assert manifest.routes["/"].args["tags"] == ("a", "b")

    def test_nested_object_arg_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError, match="scalar"):
            parse_manifest(
                {"routes": {"/": {"template": "i", "args": {"author": {"name": "x"}}}}},
                tmp_path / "m.json",
            )

    def test_nested_array_arg_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError):
            parse_manifest(
                {"routes": {"/": {"template": "i", "args": {"grid": [[1, 2]]}}}},
                tmp_path / "m.json",
            )

    def test_routes_must_be_object(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError, match="routes"):
            parse_manifest({"routes": ["/"]}, tmp_path / "m.json")


class TestPages:
    def test_full_page(self, tmp_path: Path) -> None:
        manifest = parse_manifest(
            {
                "pages": {
                    "home": {
                        "layout": "post",
                        "path": "blog/my-post",
                        "args": {"title": "Home"},
                        "markdown": {"path": "content/home.md"},
                    }
                }
            },
            tmp_path / "m.json",
        )
        page = manifest.pages["home"]
        assert page.name == "home"
        assert page.layout == "post"
        assert page.path == "blog/my-post"
        assert page.args == {"title": "Home"}
        assert page.markdown == MarkdownRef(path="content/home.md")

    def test_template_alias_for_layout(self, tmp_path: Path) -> None:
        manifest = parse_manifest({"pages": {"p": {"template": "article"}}}, tmp_path / "m.json")
        assert manifest.pages["p"].layout == "article"

    def test_markdown_without_path_is_none(self, tmp_path: Path) -> None:
        manifest = parse_manifest({"pages": {"p": {"markdown": {}}}}, tmp_path / "m.json")
        assert manifest.pages["p"].markdown is None

    def test_page_args_must_be_strings(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError):
            parse_manifest({"pages": {"p": {"args": {"n": 1}}}}, tmp_path / "m.json")

    def test_top_level_args_parsed(self, tmp_path: Path) -> None:
        manifest = parse_manifest({"args": {"site": "smol"}}, tmp_path / "m.json")
        assert manifest.args == {"site": "smol"}


class TestManifestHelpers:
    def test_directory_and_resolve(self, tmp_path: Path) -> None:
        manifest = parse_manifest({}, tmp_path / "m.json")
        assert manifest.directory == tmp_path
        assert manifest.resolve("a/b.md") == tmp_path / "a" / "b.md"
        assert manifest.resolve("/abs/b.md") == Path("/abs/b.md")
