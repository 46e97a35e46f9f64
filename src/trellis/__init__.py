"""Trellis — hierarchical view resolution for kida templates.

Resolves a view identifier such as ``page-about`` to the most specific
template found across an ordered list of template roots, and optionally
wraps host templates in a master layout.

Basic usage::

    from trellis import TrellisConfig, setup

    trellis = setup(TrellisConfig(base_dir="/srv/site", template_paths=("views",)))
    html = trellis.renderer.render("page-about", {"title": "About"})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "EngineUnavailable",
    "LayoutWrapper",
    "ResolvedTemplate",
    "SearchPath",
    "TemplateNotFound",
    "Trellis",
    "TrellisConfig",
    "TrellisError",
    "ViewRenderer",
    "setup",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import trellis`` fast and free of the kida import until a
    renderer is actually needed.
    """
    if name == "TrellisConfig":
        from trellis.config import TrellisConfig

        return TrellisConfig

    if name in ("Trellis", "setup"):
        from trellis import bootstrap

        return getattr(bootstrap, name)

    if name == "ViewRenderer":
        from trellis.view import ViewRenderer

        return ViewRenderer

    if name == "LayoutWrapper":
        from trellis.layout import LayoutWrapper

        return LayoutWrapper

    if name == "SearchPath":
        from trellis.resolution.search_path import SearchPath

        return SearchPath

    if name == "ResolvedTemplate":
        from trellis.resolution.resolver import ResolvedTemplate

        return ResolvedTemplate

    if name in ("ConfigurationError", "EngineUnavailable", "TemplateNotFound", "TrellisError"):
        from trellis import errors

        return getattr(errors, name)

    raise AttributeError(f"module 'trellis' has no attribute {name!r}")
