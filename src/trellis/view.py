"""Host-facing view rendering.

``ViewRenderer`` ties the pieces together for one render call::

    identifier -> candidate_chain -> resolve_path_major -> reduce_identifier -> kida

The search path is created lazily from the configured template roots
and only grows. Each new root rebuilds the kida environment before the
next lookup, so the environment's loader and the resolver always agree
on the root list.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from trellis.errors import TemplateNotFound
from trellis.fs import absolute_path, ensure_directories, ensure_directory
from trellis.resolution.candidates import candidate_chain
from trellis.resolution.resolver import Exists, reduce_identifier, resolve_path_major
from trellis.resolution.search_path import SearchPath
from trellis.settings import default_cache_dir
from trellis.templating.integration import create_environment, render_template

if TYPE_CHECKING:
    from kida import Environment

    from trellis.config import TrellisConfig

logger = logging.getLogger("trellis.view")


class ViewRenderer:
    """Resolves view identifiers and renders them with kida.

    Args:
        config: Trellis configuration.
        globals_: Extra kida globals (e.g. the layout side channel).
        exists: File existence probe, injectable for tests.
    """

    def __init__(
        self,
        config: TrellisConfig,
        *,
        globals_: Mapping[str, Any] | None = None,
        exists: Exists = os.path.isfile,
    ) -> None:
        self._config = config
        self._globals = dict(globals_ or {})
        self._exists = exists
        self._search_path: SearchPath | None = None
        self._env: Environment | None = None
        self.requested: str | None = None

    @property
    def config(self) -> TrellisConfig:
        return self._config

    @property
    def search_path(self) -> SearchPath:
        if self._search_path is None:
            roots = self._prepare_roots(self._config.template_paths)
            self._search_path = SearchPath(roots, on_change=self._rebuild)
        return self._search_path

    @property
    def environment(self) -> Environment:
        if self._env is None:
            self._env = self._create_environment()
        return self._env

    def note_requested(self, template_file: str) -> str:
        """Record the template the host is about to render.

        Its basename (without extension) becomes the default identifier
        for ``resolve()`` and ``render()``. Returns *template_file*
        unchanged so it can sit in a host's filter chain.
        """
        self.requested = os.path.splitext(os.path.basename(template_file))[0]
        return template_file

    def add_template_path(self, *paths: str | os.PathLike[str]) -> bool:
        """Register extra template roots at the lowest priority.

        Returns:
            ``True`` if any root was new (the environment was rebuilt).
        """
        return self.search_path.extend(self._prepare_roots(paths))

    def resolve(self, identifier: str | None = None, *, strict: bool = False) -> str:
        """Return the kida loader key for *identifier*.

        When no candidate exists in any root, the bare
        ``identifier + extension`` is returned so kida reports the miss at
        render time; with *strict* a ``TemplateNotFound`` is raised instead.
        """
        identifier = self._identifier(identifier)
        candidates = candidate_chain(
            identifier,
            self._config.extension,
            sentinel=self._config.sentinel,
        )
        roots = self.search_path.roots
        resolved = resolve_path_major(candidates, roots, exists=self._exists)
        if resolved is None:
            if strict:
                raise TemplateNotFound(identifier, candidates, roots)
            logger.debug("No template for %r, passing it through", identifier)
            return identifier + self._config.extension
        return reduce_identifier(resolved, roots)

    def render(
        self,
        template: str | None = None,
        context: Mapping[str, Any] | None = None,
        template_path: str | os.PathLike[str] | Iterable[str | os.PathLike[str]] | None = None,
        *,
        strict: bool = False,
    ) -> str:
        """Resolve and render a view.

        Args:
            template: View identifier; defaults to the host's requested
                template (see ``note_requested()``).
            context: Template variables.
            template_path: Extra root(s) to register before resolving.
            strict: Raise ``TemplateNotFound`` instead of passing an
                unresolved identifier through to kida.
        """
        if template_path:
            if isinstance(template_path, (str, os.PathLike)):
                template_path = (template_path,)
            self.add_template_path(*template_path)
        name = self.resolve(template, strict=strict)
        return render_template(self.environment, name, dict(context or {}))

    def _identifier(self, identifier: str | None) -> str:
        if identifier is not None:
            return identifier
        if self.requested:
            return self.requested
        return self._config.sentinel

    def _prepare_roots(self, paths: Iterable[str | os.PathLike[str]]) -> list[str]:
        roots = [absolute_path(p, self._config.base_dir) for p in paths if os.fspath(p)]
        if self._config.create_missing:
            ensure_directories(roots)
        return roots

    def _cache_dir(self) -> str | None:
        if self._config.cache_dir:
            return absolute_path(self._config.cache_dir, self._config.base_dir)
        return default_cache_dir(self._config.template_paths, self._config.base_dir)

    def _create_environment(self) -> Environment:
        cache_dir = None
        if self._config.use_cache:
            cache_dir = self._cache_dir()
            if cache_dir is not None and not ensure_directory(cache_dir):
                cache_dir = None
        return create_environment(
            self.search_path.roots,
            self._config,
            globals_=self._globals,
            cache_dir=cache_dir,
        )

    def _rebuild(self, search_path: SearchPath) -> None:
        # Only an environment that was already built needs replacing
        if self._env is None:
            return
        logger.info("Template roots changed, rebuilding kida environment")
        self._env = self._create_environment()
