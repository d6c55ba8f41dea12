"""Exception taxonomy for import formatting.

Components raise these internally; the document-level boundary
(:meth:`ImportFormatter.format` and :meth:`TidyImports.organize`) converts
them into failed results so a single bad document never halts the caller.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tidyimports.imports.models import InvalidImport


class TidyImportsError(Exception):
    """Base class for every error raised by tidyimports."""


class LocatorAmbiguousError(TidyImportsError):
    """The import section boundary cannot be determined safely.

    Raised when a dynamic import is mixed with static imports, or when
    non-import code shares the presumed import block.
    """

    def __init__(self, reason: str, position: int = 0) -> None:
        super().__init__(reason)
        self.reason = reason
        self.position = position


class InvalidImportSyntaxError(TidyImportsError):
    """The structural parser reported an unparsable import statement."""

    def __init__(self, invalid: InvalidImport) -> None:
        super().__init__(invalid.describe())
        self.invalid = invalid


class RenderError(TidyImportsError):
    """Unexpected failure while classifying, merging, sorting or rendering."""


class ConfigError(TidyImportsError):
    """Configuration could not be loaded or failed validation."""
