"""
Core module.

Example
-------
>>> from tidyimports import ImportFormatter
>>>
>>> formatter = ImportFormatter()
>>> result = formatter.format(source)
>>> if result:
...     source = result.text
"""
from __future__ import annotations

from .errors import (
    ConfigError,
    InvalidImportSyntaxError,
    LocatorAmbiguousError,
    RenderError,
    TidyImportsError,
)
from .formatter import ImportFormatter, format_imports
from .results import BatchResult, ErrorResult, FormatErrorResult, FormatResult, Result
from .tidy import TidyImports

__all__ = [
    "TidyImports",
    "ImportFormatter",
    "format_imports",
    "Result",
    "ErrorResult",
    "BatchResult",
    "FormatResult",
    "FormatErrorResult",
    "TidyImportsError",
    "LocatorAmbiguousError",
    "InvalidImportSyntaxError",
    "RenderError",
    "ConfigError",
]
