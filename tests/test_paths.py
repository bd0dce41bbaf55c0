"""Tests for smolblog.paths: manifest-relative resolution."""

from pathlib import Path

from smolblog.paths import manifest_dir, resolve_path


class TestResolvePath:
    def test_relative_joins_base(self, tmp_path: Path) -> None:
        assert resolve_path(tmp_path, "layouts/post.html") == tmp_path / "layouts" / "post.html"

    def test_absolute_passes_through(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere" / "base.html"
        assert resolve_path("/some/other/dir", absolute) == absolute

    def test_independent_of_cwd(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        first = resolve_path("/srv/site", "a.html")
        monkeypatch.chdir("/")
        assert resolve_path("/srv/site", "a.html") == first == Path("/srv/site/a.html")


class TestManifestDir:
    def test_parent_directory(self, tmp_path: Path) -> None:
        assert manifest_dir(tmp_path / "smolmanifest.json") == tmp_path

    def test_relative_manifest_made_absolute(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert manifest_dir("site/smolmanifest.json") == tmp_path / "site"
