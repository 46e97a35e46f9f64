"""Trellis configuration.

TrellisConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, built once at startup and passed to the renderer
and layout wrapper. ``from_options()`` adapts the flat mapping a
settings store persists.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from trellis.errors import ConfigurationError

# Settings-store keys that differ from field names
_OPTION_ALIASES = {
    "template_path": "template_paths",
}


@dataclass(frozen=True, slots=True)
class TrellisConfig:
    """Trellis configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = TrellisConfig(base_dir="/srv/site", template_wrapper=True)
    """

    # Relative paths below are anchored here
    base_dir: str | Path = "."

    # Templates
    template_paths: tuple[str | Path, ...] = ("twig",)
    extension: str = ".twig"
    sentinel: str = "index"  # Generic identifier, never decomposed
    create_missing: bool = True  # Create template roots that don't exist yet
    autoescape: bool = True

    # Layout wrapping (host theme roots, searched override first)
    template_wrapper: bool = False
    theme_dir: str | Path = "."
    parent_theme_dir: str | Path | None = None

    # Cache
    use_cache: bool = False
    cache_dir: str | Path | None = None  # Defaults to <first template path>/cache

    def __post_init__(self) -> None:
        if isinstance(self.template_paths, (str, Path)):
            object.__setattr__(self, "template_paths", (self.template_paths,))
        if not self.extension.startswith("."):
            msg = f"extension must start with '.', got {self.extension!r}"
            raise ConfigurationError(msg)
        if not self.sentinel or "-" in self.sentinel:
            msg = f"sentinel must be a single segment, got {self.sentinel!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_options(cls, options: Mapping[str, Any], **overrides: Any) -> "TrellisConfig":
        """Build a config from a settings-store mapping merged over the defaults.

        ``template_path`` may be a single path or a list of paths. Empty
        values fall back to the defaults.

        Raises:
            ConfigurationError: If *options* contains an unknown key.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in {**options, **overrides}.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                msg = f"Unknown trellis option: {key!r}"
                raise ConfigurationError(msg)
            if value is None or value == "":
                continue
            if name == "template_paths" and not isinstance(value, (str, Path)):
                value = tuple(value)
            kwargs[name] = value
        return cls(**kwargs)

    def with_options(self, **changes: Any) -> "TrellisConfig":
        """Return a copy with *changes* applied."""
        return replace(self, **changes)
