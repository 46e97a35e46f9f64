"""Candidate name generation for hierarchical template lookup.

A template identifier such as ``page-about`` decomposes into file names
of decreasing specificity::

    page-about.twig -> page.twig

The view cascade appends the generic sentinel (``index.twig``) after
the decomposition; the layout cascade builds ``_layout-`` prefixed
names, then ``_layout.php``, then the original file name.
"""

import os

from trellis.errors import InvalidIdentifier

SEPARATOR = "-"
LAYOUT_PREFIX = "_layout"


def split_identifier(identifier: str) -> list[str]:
    """Split an identifier into its hyphen-separated segments."""
    if not identifier:
        raise InvalidIdentifier("Template identifier must not be empty")
    return identifier.split(SEPARATOR)


def generate_candidates(
    identifier: str,
    extension: str,
    *,
    sentinel: str = "index",
) -> tuple[str, ...]:
    """Return candidate file names for *identifier*, most specific first.

    Each successive candidate drops one trailing segment. An identifier
    equal to *sentinel* is not decomposed and yields no candidates; the
    caller's fallback covers it.

    Args:
        identifier: Hyphen-segmented view identifier (``"page-about"``).
        extension: File extension including the dot (``".twig"``).
        sentinel: Generic identifier that is never decomposed.

    Returns:
        A tuple with one entry per segment, e.g.
        ``("page-about.twig", "page.twig")``.

    Raises:
        InvalidIdentifier: If *identifier* is empty.
    """
    parts = split_identifier(identifier)
    if identifier == sentinel:
        return ()
    return tuple(SEPARATOR.join(parts[:i]) + extension for i in range(len(parts), 0, -1))


def candidate_chain(
    identifier: str,
    extension: str,
    *,
    sentinel: str = "index",
) -> tuple[str, ...]:
    """Return the full view cascade: decomposition plus the generic fallback."""
    fallback = sentinel + extension
    names = generate_candidates(identifier, extension, sentinel=sentinel)
    if names and names[-1] == fallback:
        return names
    return (*names, fallback)


def layout_candidates(template_file: str, *, sentinel: str = "index") -> tuple[str, ...]:
    """Return layout file names to try for wrapping *template_file*.

    For ``/theme/page-about.php``::

        _layout-page-about.php, _layout-page.php, _layout.php, page-about.php

    The sentinel template (``index.php``) skips the decomposition and
    only tries ``_layout.php`` before itself.
    """
    filename = os.path.basename(template_file)
    stem, extension = os.path.splitext(filename)
    names: list[str] = []
    if stem and stem != sentinel:
        parts = stem.split(SEPARATOR)
        names.extend(
            f"{LAYOUT_PREFIX}{SEPARATOR}{SEPARATOR.join(parts[:i])}{extension}"
            for i in range(len(parts), 0, -1)
        )
    names.append(LAYOUT_PREFIX + extension)
    names.append(filename)
    return tuple(names)
