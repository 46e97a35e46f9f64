"""Trellis exception hierarchy.

Shared across resolution, the view renderer, the layout wrapper and the
filesystem helpers so every module raises and catches the same types.
"""

from dataclasses import dataclass


class TrellisError(Exception):
    """Base for all trellis-specific errors."""


class ConfigurationError(TrellisError):
    """Raised when configuration or settings-store options are invalid.

    Typically caught during ``bootstrap.setup()`` at startup.
    """


class InvalidIdentifier(TrellisError, ValueError):  # noqa: N818
    """A template identifier is empty or otherwise unusable."""


class TemplateResolutionError(TrellisError):
    """Base for failures while turning an identifier into a template."""


@dataclass(frozen=True, slots=True)
class TemplateNotFound(TemplateResolutionError):  # noqa: N818
    """No candidate name matched in any search root.

    Only raised by strict rendering. The resolvers themselves report a
    miss by returning ``None``.
    """

    identifier: str
    candidates: tuple[str, ...] = ()
    roots: tuple[str, ...] = ()

    def __str__(self) -> str:
        tried = ", ".join(self.candidates) or "(none)"
        where = ", ".join(self.roots) or "(no roots)"
        return f"No template for {self.identifier!r}: tried {tried} in {where}"


class EngineUnavailable(TrellisError):  # noqa: N818
    """The kida rendering engine could not be located or loaded.

    Non-fatal: ``bootstrap.setup()`` reports it and leaves trellis inert.
    """


@dataclass(frozen=True, slots=True)
class DirectoryCreateFailed(TrellisError):
    """A template or cache directory could not be created.

    Best-effort callers log this and carry on; the failure only matters
    to a later write, never to a lookup.
    """

    path: str
    reason: str = ""

    def __str__(self) -> str:
        if self.reason:
            return f"Could not create directory {self.path}: {self.reason}"
        return f"Could not create directory {self.path}"
