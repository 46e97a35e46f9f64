"""Prioritized filesystem search and relative-identifier reduction.

Two search orderings exist and each call site keeps its own:

- **Path-major** (primary view lookup): every candidate in the first
  root before moving to the next root. A generic name in a
  high-priority root beats a specific name in a lower one.
- **Candidate-major** (layout lookup): every root for the first
  candidate before moving to the next candidate. Specificity always
  beats root priority.

Both return ``None`` when nothing matches; the caller owns the fallback.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from trellis.errors import TemplateResolutionError

logger = logging.getLogger("trellis.resolution")

Exists = Callable[[str], bool]


@dataclass(frozen=True, slots=True)
class ResolvedTemplate:
    """A template file found on disk, and the root it was found under.

    Attributes:
        absolute_path: Full path to the matched file.
        matched_root: The search root that produced the match.
    """

    absolute_path: str
    matched_root: str


def resolve_path_major(
    candidates: Sequence[str],
    roots: Iterable[str],
    *,
    exists: Exists = os.path.isfile,
) -> ResolvedTemplate | None:
    """Search root by root, trying every candidate in each root."""
    for root in roots:
        for name in candidates:
            if not name:
                continue
            path = os.path.join(root, name)
            if exists(path):
                logger.debug("Resolved %s in %s (path-major)", name, root)
                return ResolvedTemplate(path, root)
    logger.debug("No match for %s (path-major)", list(candidates))
    return None


def resolve_candidate_major(
    candidates: Sequence[str],
    roots: Iterable[str],
    *,
    exists: Exists = os.path.isfile,
) -> ResolvedTemplate | None:
    """Search candidate by candidate, trying every root for each."""
    roots = tuple(roots)
    for name in candidates:
        if not name:
            continue
        for root in roots:
            path = os.path.join(root, name)
            if exists(path):
                logger.debug("Resolved %s in %s (candidate-major)", name, root)
                return ResolvedTemplate(path, root)
    logger.debug("No match for %s (candidate-major)", list(candidates))
    return None


def _strip_root(path: str, root: str) -> str | None:
    prefix = root if root.endswith(os.sep) else root + os.sep
    if not path.startswith(prefix):
        return None
    return path[len(prefix) :]


def reduce_identifier(resolved: ResolvedTemplate, roots: Iterable[str]) -> str:
    """Strip the matched root from a resolved path.

    The result is the loader key handed to kida, so it must be relative
    to a root the environment's loader was built with. The root that
    actually produced the match wins; otherwise the first root (in
    priority order) that prefixes the path on a separator boundary.

    Returns:
        The relative identifier, always with ``/`` separators.

    Raises:
        TemplateResolutionError: If no registered root prefixes the path.
    """
    roots = tuple(roots)
    ordered = [resolved.matched_root] if resolved.matched_root in roots else []
    ordered.extend(r for r in roots if r != resolved.matched_root)

    for root in ordered:
        relative = _strip_root(resolved.absolute_path, root)
        if relative is not None:
            return relative.replace(os.sep, "/")

    msg = f"{resolved.absolute_path!r} is not under any search root"
    raise TemplateResolutionError(msg)
