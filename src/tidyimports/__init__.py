"""
tidyimports - Organize the imports of JavaScript and TypeScript files.

Rewrites only the import section at the top of a document: imports are
grouped by module pattern, merged, sorted, aligned on their ``from`` keyword
and preceded by a ``// Group`` header comment. Everything else in the
document is left byte for byte as it was.

Example
-------
>>> from tidyimports import ImportFormatter, config_from_dict
>>>
>>> config = config_from_dict({
...     "groups": [
...         {"name": "React", "order": 1, "match": "/^react/"},
...         {"name": "Misc", "order": 2, "default": True},
...     ],
... })
>>> result = ImportFormatter(config).format(source)
>>> print(result.text)
>>>
>>> # Organize files on disk, previewing the changes first
>>> from tidyimports import TidyImports
>>> tidy = TidyImports("src/", dry_run=True)
>>> print(tidy.organize_all().diff)

Classes
-------
ImportFormatter
    The formatting pipeline for one document.

TidyImports
    Entry point for organizing files and directories.

Result
    Result class for all operations. Operations never raise exceptions for
    document problems.

FormatResult
    Result of formatting one document, with the new text.
"""
from __future__ import annotations

from tidyimports.core import (
    BatchResult,
    ConfigError,
    ErrorResult,
    FormatErrorResult,
    FormatResult,
    ImportFormatter,
    InvalidImportSyntaxError,
    LocatorAmbiguousError,
    RenderError,
    Result,
    TidyImports,
    TidyImportsError,
    format_imports,
)
from tidyimports.config import (
    DEFAULT_CONFIG,
    Config,
    FormatOptions,
    Group,
    ImportOrder,
    config_from_dict,
    find_config,
    load_config,
)
from tidyimports.imports import ImportKind, ParsedImport, Specifier

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "ImportFormatter",
    "TidyImports",
    "format_imports",
    # Results
    "Result",
    "ErrorResult",
    "BatchResult",
    "FormatResult",
    "FormatErrorResult",
    # Errors
    "TidyImportsError",
    "LocatorAmbiguousError",
    "InvalidImportSyntaxError",
    "RenderError",
    "ConfigError",
    # Configuration
    "DEFAULT_CONFIG",
    "Config",
    "FormatOptions",
    "Group",
    "ImportOrder",
    "config_from_dict",
    "find_config",
    "load_config",
    # Records
    "ImportKind",
    "ParsedImport",
    "Specifier",
]
