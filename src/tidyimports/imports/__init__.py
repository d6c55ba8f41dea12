"""Import section handling for JavaScript and TypeScript sources.

Provides the building blocks of the formatting pipeline:
- Locating the import section (``locator``, on top of ``lexer``)
- Parsing import declarations into records (``parser``)
- Filtering and merging records (``merger``)
- Grouping, ordering and rendering (``classifier``, ``sorter``, ``renderer``)
- Splicing the rendered section back into the document (``splicer``)
"""
from __future__ import annotations

from tidyimports.imports.locator import locate_imports
from tidyimports.imports.merger import apply_exclusions, merge_imports
from tidyimports.imports.models import (
    FormattedGroup,
    ImportKind,
    ImportRange,
    InvalidImport,
    LocatorFailure,
    ParsedImport,
    Specifier,
)
from tidyimports.imports.parser import ParseOutcome, parse_imports, parse_statement
from tidyimports.imports.splicer import SpliceResult, splice

__all__ = [
    "FormattedGroup",
    "ImportKind",
    "ImportRange",
    "InvalidImport",
    "LocatorFailure",
    "ParsedImport",
    "ParseOutcome",
    "SpliceResult",
    "Specifier",
    "apply_exclusions",
    "locate_imports",
    "merge_imports",
    "parse_imports",
    "parse_statement",
    "splice",
]
