"""Startup wiring.

``setup()`` builds the renderer and, when enabled, the layout wrapper
once, and returns them together for the host to hold on to::

    trellis = setup(TrellisConfig.from_options(store.get("trellis-options", {})))
    if trellis is not None:
        host.on_template_include(trellis.template_include)
        html = trellis.renderer.render("page-about", {"title": "About"})

If kida is missing the operator is warned and ``None`` is returned;
the host keeps running with trellis inert.
"""

import logging
import os
import warnings
from dataclasses import dataclass

from trellis.config import TrellisConfig
from trellis.errors import EngineUnavailable
from trellis.fs import absolute_path
from trellis.layout import LayoutWrapper, ThemeRoots
from trellis.resolution.resolver import Exists
from trellis.templating.integration import load_engine
from trellis.view import ViewRenderer

logger = logging.getLogger("trellis")


@dataclass(frozen=True, slots=True)
class Trellis:
    """The wired components for one host process.

    Attributes:
        config: The configuration everything was built from.
        renderer: Resolves and renders view identifiers.
        wrapper: Layout wrapper, or ``None`` when wrapping is disabled.
    """

    config: TrellisConfig
    renderer: ViewRenderer
    wrapper: LayoutWrapper | None = None

    def template_include(self, template_file: str) -> str:
        """Host hook for "about to render *template_file*".

        Records the requested template for the renderer, then returns
        the layout to render in its place (or the file itself when
        wrapping is disabled).
        """
        self.renderer.note_requested(template_file)
        if self.wrapper is None:
            return template_file
        return self.wrapper.wrap(template_file)


def setup(config: TrellisConfig | None = None, *, exists: Exists = os.path.isfile) -> Trellis | None:
    """Wire trellis from *config*.

    Returns:
        The wired ``Trellis``, or ``None`` if the rendering engine is
        unavailable (reported as a ``RuntimeWarning`` and a log warning).
    """
    config = config or TrellisConfig()
    try:
        load_engine()
    except EngineUnavailable as exc:
        logger.warning("Trellis disabled: %s", exc)
        warnings.warn(str(exc), RuntimeWarning, stacklevel=2)
        return None

    wrapper = None
    globals_: dict[str, object] = {}
    if config.template_wrapper:
        roots = ThemeRoots(
            override=absolute_path(config.theme_dir, config.base_dir),
            base=(
                absolute_path(config.parent_theme_dir, config.base_dir)
                if config.parent_theme_dir
                else None
            ),
        )
        wrapper = LayoutWrapper(roots, sentinel=config.sentinel, exists=exists)
        globals_.update(wrapper.template_globals())

    renderer = ViewRenderer(config, globals_=globals_, exists=exists)
    return Trellis(config=config, renderer=renderer, wrapper=wrapper)
