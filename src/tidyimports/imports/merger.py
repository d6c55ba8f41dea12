"""Filtering and deduplication of import records.

Exclusion sets come from an external unused/missing-import detector and are
applied before grouping, so filtered bindings never reach the renderer.
Merging then collapses records that import from the same module with the
same declaration kind.
"""
from __future__ import annotations

from collections.abc import Collection, Iterable
from dataclasses import replace

from tidyimports.imports.models import ImportKind, ParsedImport, Specifier


def apply_exclusions(
    records: Iterable[ParsedImport],
    unused: Collection[str] = (),
    missing: Collection[str] = (),
) -> list[ParsedImport]:
    """Drop unused bindings and imports of missing modules.

    Parameters
    ----------
    records : Iterable[ParsedImport]
        Parsed records.
    unused : Collection[str]
        Local binding names to remove. Namespace bindings (``* as Name``)
        match on ``Name``.
    missing : Collection[str]
        Module specifiers treated as absent; all their records are dropped.

    Returns
    -------
    list[ParsedImport]
        Remaining records. A record left without bindings is dropped, except
        side-effect imports, which are always kept.
    """
    unused = set(unused)
    missing = set(missing)
    kept: list[ParsedImport] = []
    for record in records:
        if record.module in missing:
            continue
        if record.kind is ImportKind.SIDE_EFFECT or not unused:
            kept.append(record)
            continue
        default_name = record.default_name
        if default_name and record.binding_names[0] in unused:
            default_name = None
        specifiers = tuple(s for s in record.specifiers if s.local not in unused)
        filtered = replace(record, default_name=default_name, specifiers=specifiers)
        if not filtered.is_empty:
            kept.append(filtered)
    return kept


def merge_key(record: ParsedImport) -> tuple[str, ImportKind, str | None]:
    """Records sharing this key are merged into one.

    Default and namespace bindings are part of the key: two different local
    names for the same module stay on separate lines.
    """
    return (record.module, record.kind, record.default_name)


def merge_imports(records: Iterable[ParsedImport]) -> list[ParsedImport]:
    """Collapse records with the same module and declaration kind.

    Specifiers are united by local name (first occurrence wins) and
    identical side-effect imports collapse to a single record. Records with
    different default names are never merged. The output keeps
    first-occurrence order.

    Examples
    --------
    >>> a = ParsedImport(ImportKind.NAMED, "x", (Specifier("b"),))
    >>> b = ParsedImport(ImportKind.NAMED, "x", (Specifier("a"), Specifier("b")))
    >>> [str(s) for s in merge_imports([a, b])[0].specifiers]
    ['b', 'a']
    """
    merged: dict[tuple[str, ImportKind, str | None], ParsedImport] = {}
    for record in records:
        key = merge_key(record)
        existing = merged.get(key)
        if existing is None:
            merged[key] = record
            continue
        merged[key] = replace(
            existing,
            specifiers=_union(existing.specifiers, record.specifiers),
            is_priority=existing.is_priority or record.is_priority,
        )
    return list(merged.values())


def _union(first: tuple[Specifier, ...], second: tuple[Specifier, ...]) -> tuple[Specifier, ...]:
    seen = {s.local for s in first}
    result = list(first)
    for specifier in second:
        if specifier.local not in seen:
            seen.add(specifier.local)
            result.append(specifier)
    return tuple(result)
