"""Deterministic ordering of merged records within one group."""
from __future__ import annotations

import math
import re
from dataclasses import replace
from functools import lru_cache
from typing import Iterable

from tidyimports.config.models import ImportOrder
from tidyimports.imports.models import ParsedImport, Specifier


def specifier_sort_key(specifier: Specifier | str) -> tuple[int, str]:
    """Shortest rendered specifier first, alphabetical among equal lengths."""
    text = str(specifier)
    return (len(text), text)


def sort_specifiers(record: ParsedImport) -> ParsedImport:
    if len(record.specifiers) < 2:
        return record
    return replace(record, specifiers=tuple(sorted(record.specifiers, key=specifier_sort_key)))


@lru_cache(maxsize=256)
def _wildcard(pattern: str) -> re.Pattern[str]:
    return re.compile("^" + ".*".join(re.escape(part) for part in pattern.split("*")) + "$")


def custom_sort_index(module: str, sort_order: str | tuple[str, ...] | None) -> float:
    """Position of ``module`` in a group's custom ``sort_order``.

    Modules matching no pattern (and every module when the order is
    ``"alphabetic"`` or unset) share the last position.
    """
    if not sort_order or isinstance(sort_order, str):
        return math.inf
    for i, pattern in enumerate(sort_order):
        if pattern == module or ("*" in pattern and _wildcard(pattern).match(module)):
            return i
    return math.inf


def sort_imports(
    records: Iterable[ParsedImport],
    import_order: ImportOrder,
    sort_order: str | tuple[str, ...] | None = None,
) -> list[ParsedImport]:
    """Order the records of one group.

    Comparison, in sequence until a tie is broken:

    1. Declaration-kind weight from ``import_order``.
    2. Priority records before the others.
    3. Custom ``sort_order`` position of the module, if configured.
    4. Module specifier, lexicographically.
    5. Declaration order.

    Specifiers inside each record are re-ordered by length, then name.
    """

    def key(record: ParsedImport) -> tuple:
        return (
            import_order.weight(record.kind),
            not record.is_priority,
            custom_sort_index(record.module, sort_order),
            record.module,
            record.index,
        )

    return [sort_specifiers(r) for r in sorted(records, key=key)]
