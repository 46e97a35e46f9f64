"""Layout wrapping for host templates.

Intercepts the host's "about to render file X" step and substitutes a
master layout, chosen by the most specific match of::

    _layout-page-about.php -> _layout-page.php -> _layout.php -> page-about.php

across the host's theme roots (override root first, then base root).
Specificity always beats root priority here (candidate-major search).

The layout renders the wrapped content itself, so the wrapper keeps
the originally requested file as a side channel::

    {{ wrapped_template() }}       {# "page-about" #}
    {{ wrapped_template_path() }}  {# "/theme/page-about.php" #}
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass

from trellis.resolution.candidates import layout_candidates
from trellis.resolution.resolver import Exists, resolve_candidate_major
from trellis.resolution.search_path import normalize_root

logger = logging.getLogger("trellis.layout")


@dataclass(frozen=True, slots=True)
class ThemeRoots:
    """The host's theme directories, in search priority.

    Attributes:
        override: Child theme directory, searched first.
        base: Parent theme directory. ``None`` when there is no child
            theme; then only *override* is searched.
    """

    override: str
    base: str | None = None

    def __iter__(self) -> Iterator[str]:
        override = normalize_root(self.override)
        yield override
        if self.base is not None and normalize_root(self.base) != override:
            yield normalize_root(self.base)


@dataclass(frozen=True, slots=True)
class WrappedTemplate:
    """The host template a layout was substituted for.

    Attributes:
        path: Full path of the file the host was about to render.
        name: Its basename without extension (``"page-about"``).
    """

    path: str
    name: str

    @classmethod
    def from_path(cls, template_file: str) -> WrappedTemplate:
        stem, _ = os.path.splitext(os.path.basename(template_file))
        return cls(path=template_file, name=stem)


class LayoutWrapper:
    """Selects the layout to render in place of a host template."""

    __slots__ = ("_exists", "_roots", "_sentinel", "wrapped")

    def __init__(
        self,
        roots: ThemeRoots,
        *,
        sentinel: str = "index",
        exists: Exists = os.path.isfile,
    ) -> None:
        self._roots = roots
        self._sentinel = sentinel
        self._exists = exists
        self.wrapped: WrappedTemplate | None = None

    def wrap(self, template_file: str) -> str:
        """Return the layout file to render instead of *template_file*.

        Never fails: the original file name is the last candidate, and
        when even that is outside the theme roots *template_file* itself
        is returned.
        """
        self.wrapped = WrappedTemplate.from_path(template_file)
        candidates = layout_candidates(template_file, sentinel=self._sentinel)
        resolved = resolve_candidate_major(candidates, self._roots, exists=self._exists)
        if resolved is None:
            logger.debug("No layout for %s, rendering it unwrapped", template_file)
            return template_file
        logger.debug("Wrapping %s in %s", template_file, resolved.absolute_path)
        return resolved.absolute_path

    def wrapped_template_path(self) -> str | None:
        """Path of the template the current layout wraps."""
        return self.wrapped.path if self.wrapped is not None else None

    def wrapped_template(self) -> str | None:
        """Basename (no extension) of the template the current layout wraps."""
        return self.wrapped.name if self.wrapped is not None else None

    def template_globals(self) -> dict[str, object]:
        """Side-channel accessors to expose to the rendering engine."""
        return {
            "wrapped_template": self.wrapped_template,
            "wrapped_template_path": self.wrapped_template_path,
        }
