"""Settings-store save hook.

When an operator saves trellis options, the template directories are
created, and the cache directory is created (caching on) or removed
(caching off). Everything here is best-effort: failures are logged and
the options are returned with whatever could be applied.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from trellis.fs import absolute_path, ensure_directories, ensure_directory, remove_tree

logger = logging.getLogger("trellis.settings")

CACHE_DIRNAME = "cache"


def _as_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (str, os.PathLike)):
        return [os.fspath(value)]
    return [os.fspath(v) for v in value]


def default_cache_dir(template_paths: Any, base_dir: str | os.PathLike[str]) -> str | None:
    """Return ``<first template path>/cache``, anchored under *base_dir*."""
    paths = _as_list(template_paths)
    if not paths:
        return None
    return os.path.join(absolute_path(paths[0], base_dir), CACHE_DIRNAME)


def prepare_options(
    options: Mapping[str, Any],
    base_dir: str | os.PathLike[str],
) -> dict[str, Any]:
    """Apply filesystem side effects of saved options and return them.

    - Creates every ``template_path`` that doesn't exist yet.
    - With ``use_cache`` on, creates the cache directory inside the first
      template path and records it as ``cache_dir``.
    - With ``use_cache`` off, removes a previously recorded ``cache_dir``
      and clears it once removed.
    """
    prepared = dict(options)
    template_paths = _as_list(prepared.get("template_path"))
    ensure_directories(absolute_path(p, base_dir) for p in template_paths)

    if prepared.get("use_cache"):
        cache_dir = default_cache_dir(template_paths, base_dir)
        if cache_dir is not None:
            ensure_directory(cache_dir)
            prepared["cache_dir"] = cache_dir
    elif prepared.get("cache_dir"):
        cache_dir = absolute_path(prepared["cache_dir"], base_dir)
        try:
            removed = remove_tree(cache_dir)
        except OSError as exc:
            logger.warning("Could not remove cache directory %s: %s", cache_dir, exc)
            removed = False
        if removed:
            prepared["cache_dir"] = ""

    return prepared
