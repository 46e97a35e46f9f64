"""Ordered, deduplicated registry of template search roots.

Priority is position: index 0 is searched first. Adding a root that is
already registered is a no-op. Adding a new one notifies listeners
synchronously so the owner can rebuild anything keyed to the root list
(the kida environment, in practice) before the next lookup.

Not thread-safe. Hosts that share one registry between threads must
serialize ``add()`` calls themselves.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator

logger = logging.getLogger("trellis.resolution")

Listener = Callable[["SearchPath"], None]


def normalize_root(path: str | os.PathLike[str]) -> str:
    """Normalize a root for comparison and prefix matching."""
    return os.path.normpath(os.fspath(path))


class SearchPath:
    """Mutable, priority-ordered list of template directories."""

    __slots__ = ("_listeners", "_roots")

    def __init__(
        self,
        roots: Iterable[str | os.PathLike[str]] = (),
        *,
        on_change: Listener | None = None,
    ) -> None:
        self._roots: list[str] = []
        self._listeners: list[Listener] = []
        for root in roots:
            self._append(root)
        if on_change is not None:
            self._listeners.append(on_change)

    def add(self, path: str | os.PathLike[str]) -> bool:
        """Append *path* at the lowest priority.

        Returns:
            ``True`` if the root was new and listeners were notified,
            ``False`` if it was already registered.
        """
        if not self._append(path):
            return False
        logger.info("Added template root %s", self._roots[-1])
        for listener in self._listeners:
            listener(self)
        return True

    def extend(self, paths: Iterable[str | os.PathLike[str]]) -> bool:
        """Add several roots, notifying listeners once if any was new."""
        added = False
        for path in paths:
            if self._append(path):
                logger.info("Added template root %s", self._roots[-1])
                added = True
        if not added:
            return False
        for listener in self._listeners:
            listener(self)
        return True

    def subscribe(self, listener: Listener) -> None:
        """Register a callback fired after each change."""
        self._listeners.append(listener)

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(self._roots)

    def _append(self, path: str | os.PathLike[str]) -> bool:
        if not os.fspath(path):
            return False
        root = normalize_root(path)
        if root in self._roots:
            return False
        self._roots.append(root)
        return True

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return normalize_root(path) in self._roots

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._roots))

    def __len__(self) -> int:
        return len(self._roots)

    def __repr__(self) -> str:
        return f"SearchPath({self._roots!r})"
