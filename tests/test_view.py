"""Tests for trellis.view — resolution and kida rendering through ViewRenderer."""

from pathlib import Path

import pytest
from kida.environment.exceptions import TemplateNotFoundError

from trellis.config import TrellisConfig
from trellis.errors import InvalidIdentifier, TemplateNotFound
from trellis.view import ViewRenderer


def _write(root: Path, name: str, source: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


def _renderer(tmp_path: Path, *paths: str, **overrides: object) -> ViewRenderer:
    """Build a renderer over template roots under *tmp_path*."""
    cfg = TrellisConfig(base_dir=tmp_path, template_paths=paths or ("views",), **overrides)
    return ViewRenderer(cfg)


class TestSearchPath:
    def test_created_lazily_from_config(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "views", "shared")
        assert renderer.search_path.roots == (str(tmp_path / "views"), str(tmp_path / "shared"))

    def test_missing_roots_created(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "views")
        renderer.search_path
        assert (tmp_path / "views").is_dir()

    def test_missing_roots_left_alone(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "views", create_missing=False)
        renderer.search_path
        assert not (tmp_path / "views").exists()

    def test_empty_root_ignored(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        before = renderer.environment
        assert renderer.add_template_path("") is False
        _write(tmp_path / "views", "index.twig", "home")
        assert renderer.render("index", template_path=[""]) == "home"
        assert renderer.search_path.roots == (str(tmp_path / "views"),)
        assert renderer.environment is before

    def test_absolute_roots_kept(self, tmp_path: Path) -> None:
        other = tmp_path / "other"
        renderer = _renderer(tmp_path / "base", str(other))
        assert renderer.search_path.roots == (str(other),)


class TestResolve:
    def test_most_specific(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "page-about.twig", "")
        _write(tmp_path / "views", "page.twig", "")
        assert renderer.resolve("page-about") == "page-about.twig"

    def test_less_specific(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "page.twig", "")
        assert renderer.resolve("page-about") == "page.twig"

    def test_generic_fallback(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "index.twig", "")
        assert renderer.resolve("single-post") == "index.twig"

    def test_path_major_across_roots(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "a", "b")
        _write(tmp_path / "a", "page.twig", "")
        _write(tmp_path / "b", "page-about.twig", "")
        assert renderer.resolve("page-about") == "page.twig"

    def test_lower_root(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "a", "b")
        _write(tmp_path / "b", "x.twig", "")
        assert renderer.resolve("x-y") == "x.twig"

    def test_not_found_passes_through(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        assert renderer.resolve("page-about") == "page-about.twig"

    def test_not_found_strict(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        with pytest.raises(TemplateNotFound) as exc_info:
            renderer.resolve("page-about", strict=True)
        assert exc_info.value.candidates == ("page-about.twig", "page.twig", "index.twig")
        assert exc_info.value.roots == (str(tmp_path / "views"),)
        assert "page-about" in str(exc_info.value)

    def test_defaults_to_requested_template(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "single.twig", "")
        assert renderer.note_requested("/theme/single-post.php") == "/theme/single-post.php"
        assert renderer.requested == "single-post"
        assert renderer.resolve() == "single.twig"

    def test_empty_identifier_rejected(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "index.twig", "")
        renderer.note_requested("/theme/single.php")
        with pytest.raises(InvalidIdentifier):
            renderer.resolve("")
        with pytest.raises(InvalidIdentifier):
            renderer.render("")

    def test_defaults_to_sentinel(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        assert renderer.resolve() == "index.twig"

    def test_injected_exists(self, tmp_path: Path) -> None:
        cfg = TrellisConfig(base_dir=tmp_path, template_paths=("views",), create_missing=False)
        views = str(tmp_path / "views")
        renderer = ViewRenderer(cfg, exists={f"{views}/page.twig"}.__contains__)
        assert renderer.resolve("page-about") == "page.twig"


class TestRender:
    def test_renders_resolved_template(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "page.twig", "Page: {{ title }}")
        assert renderer.render("page-about", {"title": "About"}) == "Page: About"

    def test_renders_nested_identifier(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, "a", "b")
        _write(tmp_path / "b", "x.twig", "from b")
        assert renderer.render("x-y") == "from b"

    def test_template_path_argument_adds_root(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "plugin", "card.twig", "card {{ n }}")
        html = renderer.render("card", {"n": 3}, template_path=str(tmp_path / "plugin"))
        assert html == "card 3"
        assert str(tmp_path / "plugin") in renderer.search_path

    def test_word_count_available(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        _write(tmp_path / "views", "index.twig", "{{ body | word_count }}")
        assert renderer.render("index", {"body": "<p>one <b>two</b> three</p>"}) == "3"

    def test_extra_globals(self, tmp_path: Path) -> None:
        cfg = TrellisConfig(base_dir=tmp_path, template_paths=("views",))
        renderer = ViewRenderer(cfg, globals_={"site_name": "Example"})
        _write(tmp_path / "views", "index.twig", "{{ site_name }}")
        assert renderer.render() == "Example"

    def test_unresolved_fails_in_engine(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        with pytest.raises(TemplateNotFoundError):
            renderer.render("missing")


class TestEngineRebuild:
    def test_environment_is_reused(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        assert renderer.environment is renderer.environment

    def test_new_root_rebuilds_environment(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        before = renderer.environment
        assert renderer.add_template_path(tmp_path / "extra") is True
        assert renderer.environment is not before

    def test_known_root_keeps_environment(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        before = renderer.environment
        assert renderer.add_template_path(tmp_path / "views") is False
        assert renderer.add_template_path("views") is False
        assert len(renderer.search_path) == 1
        assert renderer.environment is before

    def test_new_root_visible_to_engine(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path)
        renderer.environment
        _write(tmp_path / "extra", "widget.twig", "widget")
        renderer.add_template_path(tmp_path / "extra")
        assert renderer.render("widget") == "widget"

    def test_cache_dir_created(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, use_cache=True)
        renderer.environment
        assert (tmp_path / "views" / "cache").is_dir()

    def test_explicit_cache_dir(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, use_cache=True, cache_dir="compiled")
        renderer.environment
        assert (tmp_path / "compiled").is_dir()

    def test_compiled_templates_land_in_cache_dir(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, use_cache=True, cache_dir="compiled")
        _write(tmp_path / "views", "page.twig", "cached {{ n }}")
        assert renderer.render("page", {"n": 1}) == "cached 1"
        assert any((tmp_path / "compiled").iterdir())

    def test_no_cache_files_without_caching(self, tmp_path: Path) -> None:
        renderer = _renderer(tmp_path, cache_dir="compiled")
        _write(tmp_path / "views", "page.twig", "plain")
        assert renderer.render("page") == "plain"
        assert not (tmp_path / "compiled").exists()
