"""Kida environment setup.

Builds a kida Environment whose loader searches the same ordered roots
the view cascade resolves against, so the relative identifiers trellis
produces are valid loader keys. The environment is rebuilt whenever a
new root is registered; nothing else mutates it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any

from trellis.errors import EngineUnavailable
from trellis.templating.filters import BUILTIN_FILTERS, BUILTIN_GLOBALS

if TYPE_CHECKING:
    from kida import Environment

    from trellis.config import TrellisConfig

logger = logging.getLogger("trellis.engine")


def load_engine() -> ModuleType:
    """Import kida, raising a clear error if it is missing."""
    try:
        import kida
    except ImportError:
        msg = (
            "trellis requires the 'kida' template engine for rendering. "
            "Install with: pip install kida-templates"
        )
        raise EngineUnavailable(msg) from None
    return kida


def create_environment(
    roots: Iterable[str],
    config: TrellisConfig,
    *,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
    cache_dir: str | None = None,
) -> Environment:
    """Create a kida Environment over *roots*, in priority order.

    One ``FileSystemLoader`` per root, chained with a ``ChoiceLoader``
    so kida's own lookup order matches the registry. With caching on and
    a *cache_dir*, compiled templates are persisted there through kida's
    ``BytecodeCache`` and kept for the life of the environment
    (``auto_reload`` off). Otherwise no bytecode cache is used.
    """
    kida = load_engine()

    loaders = [kida.FileSystemLoader(root) for root in roots]
    env = kida.Environment(
        loader=kida.ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=not config.use_cache,
        bytecode_cache=_bytecode_cache(config, cache_dir),
    )

    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)

    for name, value in BUILTIN_GLOBALS.items():
        env.add_global(name, value)
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    logger.info("Built kida environment over %d root(s)", len(loaders))
    return env


def render_template(env: Environment, name: str, context: dict[str, Any]) -> str:
    """Render a template by loader key."""
    template = env.get_template(name)
    return template.render(context)


def _bytecode_cache(config: TrellisConfig, cache_dir: str | None) -> Any:
    # False disables kida's own auto-detected cache as well
    if not config.use_cache or cache_dir is None:
        return False
    from kida.bytecode_cache import BytecodeCache

    return BytecodeCache(Path(cache_dir))
