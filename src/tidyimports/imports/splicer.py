"""Replacement of the import section with its rendering."""
from __future__ import annotations

from dataclasses import dataclass

from tidyimports.imports.models import ImportRange


@dataclass(frozen=True)
class SpliceResult:
    text: str
    changed: bool


def splice(text: str, import_range: ImportRange, rendered: str) -> SpliceResult:
    """Put ``rendered`` in place of ``import_range``.

    Only the range is compared with the rendering; when they are equal the
    original ``text`` object is returned untouched and ``changed`` is False.

    Examples
    --------
    >>> splice("ab", ImportRange(0, 1), "a")
    SpliceResult(text='ab', changed=False)
    >>> splice("ab", ImportRange(0, 1), "x")
    SpliceResult(text='xb', changed=True)
    """
    if import_range.slice(text) == rendered:
        return SpliceResult(text, False)
    return SpliceResult(text[:import_range.start] + rendered + text[import_range.end:], True)
