"""Filesystem helpers: path anchoring, directory bootstrapping, removal.

Directory creation is best-effort. A failure is logged as a
``DirectoryCreateFailed`` and never propagates into template lookup;
only ``ensure_directory(..., strict=True)`` raises it.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from trellis.errors import DirectoryCreateFailed

logger = logging.getLogger("trellis.fs")


def absolute_path(path: str | os.PathLike[str], base_dir: str | os.PathLike[str]) -> str:
    """Anchor *path* under *base_dir* unless it is already absolute."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path(base_dir) / candidate
    return os.path.normpath(candidate)


def ensure_directory(path: str | os.PathLike[str], *, strict: bool = False) -> bool:
    """Create *path* and any missing parents.

    Returns:
        ``True`` if the directory exists afterwards.

    Raises:
        DirectoryCreateFailed: Only when *strict* is set.
    """
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        error = DirectoryCreateFailed(os.fspath(path), exc.strerror or str(exc))
        if strict:
            raise error from exc
        logger.warning("%s", error)
        return False
    return True


def ensure_directories(paths: Iterable[str | os.PathLike[str]]) -> list[str]:
    """Best-effort ``ensure_directory`` over *paths*.

    Returns:
        The paths that could not be created (empty on full success).
    """
    return [os.fspath(p) for p in paths if not ensure_directory(p)]


def remove_tree(path: str | os.PathLike[str]) -> bool:
    """Remove a directory tree without recursion.

    Walks with an explicit stack: each directory is pushed once to be
    expanded and once more (marked) to be removed after its children.
    Symlinks are unlinked, never followed.

    Returns:
        ``True`` if the tree was removed, ``False`` if *path* is empty
        or not a directory.

    Raises:
        OSError: If an entry cannot be removed.
    """
    if not os.fspath(path):
        return False
    root = Path(path)
    if root.is_symlink() or not root.is_dir():
        return False

    stack: list[tuple[Path, bool]] = [(root, False)]
    while stack:
        directory, expanded = stack.pop()
        if expanded:
            directory.rmdir()
            continue
        stack.append((directory, True))
        for entry in directory.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                stack.append((entry, False))
            else:
                entry.unlink()

    logger.info("Removed directory tree %s", root)
    return True
