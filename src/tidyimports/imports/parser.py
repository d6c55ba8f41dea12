"""Structural parser for import declarations.

Turns the statements of a located import section into
:class:`~tidyimports.imports.models.ParsedImport` records. Recognized forms::

    import Default from 'module';
    import * as Namespace from 'module';
    import Default, { a, b as c } from 'module';
    import Default, * as Namespace from 'module';
    import { a, type B, c as d } from 'module';
    import type Default from 'module';
    import type { A, B } from 'module';
    import 'module';

A declaration mixing several kinds yields one record per kind. Statements
that match none of the forms are reported as :class:`InvalidImport` entries
with their line and column; no recovery is attempted.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from tidyimports.imports.lexer import (
    IMPORT_START,
    line_end,
    line_number,
    line_start,
    mask_source,
    skip_whitespace,
    statement_end,
)
from tidyimports.imports.models import (
    NAMESPACE_PREFIX,
    ImportKind,
    ImportRange,
    InvalidImport,
    ParsedImport,
    Specifier,
)

logger = logging.getLogger(__name__)

_IDENT = r"[A-Za-z_$][\w$]*"

STATEMENT_PATTERN = re.compile(
    r"^import\s*"
    r"(?:(?P<type>type)\s+)?"
    r"(?:(?P<clause>.+?)\s*\bfrom\s*)?"
    r"(?P<quote>['\"])(?P<module>[^'\"]*)(?P=quote)"
    r"\s*;?$",
    re.DOTALL,
)
NAMESPACE_PATTERN = re.compile(rf"^\*\s*as\s+(?P<name>{_IDENT})$")
NAMED_PATTERN = re.compile(r"^\{(?P<body>[^{}]*)\}$")
DEFAULT_PATTERN = re.compile(rf"^(?P<name>{_IDENT})\s*(?:,\s*(?P<rest>.+))?$", re.DOTALL)
SPECIFIER_PATTERN = re.compile(
    rf"^(?:(?P<type>type)\s+)?"
    rf"(?P<imported>{_IDENT}|'[^']*'|\"[^\"]*\")"
    rf"(?:\s+as\s+(?P<local>{_IDENT}))?$"
)


class ImportSyntaxError(ValueError):
    """A single statement could not be parsed."""


@dataclass
class ParseOutcome:
    """Records and per-statement errors produced by :func:`parse_imports`."""

    imports: list[ParsedImport] = field(default_factory=list)
    invalid: list[InvalidImport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.invalid


def parse_imports(text: str, import_range: ImportRange | None = None) -> ParseOutcome:
    """Parse every import declaration inside ``import_range``.

    Parameters
    ----------
    text : str
        The full document (line and column numbers are relative to it).
    import_range : ImportRange | None
        The section to parse. When omitted the whole document is parsed and
        must then consist of import declarations and comments only.

    Returns
    -------
    ParseOutcome
        Records in declaration order plus any invalid statements.
    """
    if import_range is None:
        import_range = ImportRange(0, len(text))
    masked = mask_source(text)
    code = mask_source(text, strings=False)
    outcome = ParseOutcome()

    pos = import_range.start
    stop = import_range.end
    while True:
        pos = skip_whitespace(masked, pos)
        if pos >= stop:
            break
        if IMPORT_START.match(masked, pos):
            end = min(statement_end(masked, pos, require_string=True), stop)
        else:
            end = line_end(masked, pos)
        raw = text[pos:end].strip()
        try:
            if not IMPORT_START.match(masked, pos):
                raise ImportSyntaxError("Unexpected statement in import section")
            outcome.imports.extend(
                parse_statement(code[pos:end], raw=raw, first_index=len(outcome.imports))
            )
        except ImportSyntaxError as e:
            outcome.invalid.append(_invalid(text, pos, raw, str(e)))
        pos = end

    logger.debug(
        "Parsed %d import records (%d invalid statements)",
        len(outcome.imports),
        len(outcome.invalid),
    )
    return outcome


def parse_statement(statement: str, raw: str = "", first_index: int = 0) -> list[ParsedImport]:
    """Parse a single comment-free import statement into records.

    Raises
    ------
    ImportSyntaxError
        If the statement is not a recognized import form.

    Examples
    --------
    >>> [r.kind.value for r in parse_statement("import React, { useState } from 'react';")]
    ['default', 'named']
    """
    normalized = " ".join(statement.split())
    raw = raw or normalized
    match = STATEMENT_PATTERN.match(normalized)
    if not match:
        raise ImportSyntaxError("Unrecognized import declaration")

    module = match.group("module")
    type_only = match.group("type") is not None
    clause = match.group("clause")

    def make(kind: ImportKind, **kwargs) -> ParsedImport:
        return ParsedImport(kind=kind, module=module, raw=raw, index=first_index + len(records), **kwargs)

    records: list[ParsedImport] = []
    if clause is None:
        if type_only:
            raise ImportSyntaxError("Type-only import without bindings")
        records.append(make(ImportKind.SIDE_EFFECT))
        return records

    default_kind = ImportKind.TYPE_DEFAULT if type_only else ImportKind.DEFAULT
    named_kind = ImportKind.TYPE_NAMED if type_only else ImportKind.NAMED

    default_name: str | None = None
    rest: str | None = clause.strip()
    if not rest.startswith(("{", "*")):
        default_match = DEFAULT_PATTERN.match(rest)
        if not default_match:
            raise ImportSyntaxError(f"Invalid default binding: {rest!r}")
        default_name = default_match.group("name")
        rest = default_match.group("rest")

    namespace: str | None = None
    values: list[Specifier] = []
    types: list[Specifier] = []
    if rest is not None:
        rest = rest.strip()
        namespace_match = NAMESPACE_PATTERN.match(rest)
        named_match = NAMED_PATTERN.match(rest)
        if namespace_match:
            namespace = NAMESPACE_PREFIX + namespace_match.group("name")
        elif named_match:
            values, types = _parse_specifiers(named_match.group("body"), type_only)
        else:
            raise ImportSyntaxError(f"Invalid import clause: {rest!r}")

    if default_name:
        records.append(make(default_kind, default_name=default_name))
    if namespace:
        records.append(make(default_kind, default_name=namespace))
    if values:
        records.append(make(named_kind, specifiers=tuple(values)))
    if types:
        records.append(make(ImportKind.TYPE_NAMED, specifiers=tuple(types)))
    if not records:
        # ``import {} from 'module'`` only runs the module.
        records.append(make(ImportKind.SIDE_EFFECT))
    return records


def _parse_specifiers(body: str, type_only: bool) -> tuple[list[Specifier], list[Specifier]]:
    values: list[Specifier] = []
    types: list[Specifier] = []
    for item in body.split(","):
        item = item.strip()
        if not item:
            continue
        match = SPECIFIER_PATTERN.match(item)
        if not match:
            raise ImportSyntaxError(f"Invalid import specifier: {item!r}")
        imported = match.group("imported")
        specifier = Specifier(imported, match.group("local") or imported)
        if type_only or match.group("type"):
            types.append(specifier)
        else:
            values.append(specifier)
    return values, types


def _invalid(text: str, pos: int, raw: str, message: str) -> InvalidImport:
    start = line_start(text, pos)
    return InvalidImport(
        raw=raw,
        message=message,
        line=line_number(text, pos),
        column=pos - start + 1,
        source_line=text[start:line_end(text, pos)].rstrip("\r"),
    )
