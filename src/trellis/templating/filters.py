"""Built-in trellis template helpers.

Auto-registered on every trellis kida Environment, both as a filter and
as a global function::

    {{ post.content | word_count }} words
    {{ word_count(post.content) }} words
"""

import re
from typing import Any

_TAG_RE = re.compile(r"<[^>]*>")
_WORD_RE = re.compile(r"\S+")


def strip_tags(value: Any) -> str:
    """Remove HTML tags from *value*, leaving the text content."""
    return _TAG_RE.sub(" ", str(value))


def word_count(value: Any) -> int:
    """Count whitespace-separated words in *value* after stripping tags.

    Example:
        {{ "<p>Hello <em>brave</em> world</p>" | word_count }}
        → 3
    """
    if value is None:
        return 0
    return len(_WORD_RE.findall(strip_tags(value)))


BUILTIN_FILTERS = {
    "word_count": word_count,
}

BUILTIN_GLOBALS = {
    "word_count": word_count,
}
