"""Rendering of ordered import records into aligned text.

Line shapes::

    import 'module';                      side effect
    import Name from 'module';            default (``import type`` for types)
    import * as Name from 'module';       namespace
    import { name } from 'module';        one named specifier
    import {                              several named specifiers,
        a,                                shortest first
        bcd
    }   from 'module';

Within a group every ``from`` keyword starts on the same column: the widest
natural position in the group. For a single-line form that position is just
after the import clause; for a multi-line form it is just after the widest
specifier line, and the closing brace is padded up to it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from tidyimports.config.models import FormatOptions
from tidyimports.imports.models import FormattedGroup, ImportKind, ParsedImport
from tidyimports.imports.sorter import specifier_sort_key


@dataclass
class _Rendered:
    """One record before alignment.

    ``head`` holds the complete physical lines before the last one; the last
    line is ``prefix`` + padding + ``suffix``. ``column`` is where ``from``
    naturally starts, or None for side-effect imports (no ``from``).
    """

    head: list[str]
    prefix: str
    suffix: str
    column: int | None

    def lines(self, column: int | None) -> list[str]:
        if self.column is None:
            return [*self.head, self.prefix]
        return [*self.head, self.prefix.ljust(column) + self.suffix]


def quote_module(module: str, options: FormatOptions) -> str:
    quote = options.quote
    escaped = module.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return f"{quote}{escaped}{quote}"


def _render_record(record: ParsedImport, options: FormatOptions) -> _Rendered:
    semi = ";" if options.semicolons else ""
    module = quote_module(record.module, options)
    kind = record.kind

    if kind is ImportKind.SIDE_EFFECT or record.is_empty:
        return _Rendered([], f"import {module}{semi}", "", None)

    suffix = f"from {module}{semi}"
    keyword = "import type" if kind.is_type_only else "import"

    if kind in (ImportKind.DEFAULT, ImportKind.TYPE_DEFAULT):
        clause = f"{keyword} {record.default_name}"
        return _Rendered([], clause, suffix, len(clause) + 1)

    names = sorted({str(s) for s in record.specifiers}, key=specifier_sort_key)
    if len(names) == 1:
        inner = f" {names[0]} " if options.bracket_spacing else names[0]
        clause = f"{keyword} {{{inner}}}"
        return _Rendered([], clause, suffix, len(clause) + 1)

    pad = " " * options.indent
    body = [f"{pad}{name}," for name in names[:-1]] + [f"{pad}{names[-1]}"]
    column = max(2, max(len(line) for line in body) + 1)
    return _Rendered([f"{keyword} {{", *body], "}", suffix, column)


def render_record(record: ParsedImport, options: FormatOptions | None = None) -> list[str]:
    """Render one record without group alignment."""
    rendered = _render_record(record, options or FormatOptions())
    return rendered.lines(rendered.column)


def render_group(
    name: str,
    records: Sequence[ParsedImport],
    options: FormatOptions | None = None,
) -> FormattedGroup:
    """Render the records of one group with aligned ``from`` keywords."""
    options = options or FormatOptions()
    rendered = [_render_record(r, options) for r in records]
    columns = [r.column for r in rendered if r.column is not None]
    column = max(columns) if columns else None
    group = FormattedGroup(group_name=name, comment_line=f"// {name}")
    for item in rendered:
        group.lines.extend(item.lines(column))
    return group


def clean_up_lines(lines: Iterable[str], trailing_blank: bool = True) -> list[str]:
    """Collapse blank runs to one blank line and normalize both ends.

    The result has no leading blank line and ends with exactly one blank
    line when ``trailing_blank`` is set, none otherwise.
    """
    cleaned: list[str] = []
    for line in lines:
        if not line.strip():
            if cleaned and cleaned[-1] != "":
                cleaned.append("")
            continue
        cleaned.append(line)
    while cleaned and cleaned[-1] == "":
        cleaned.pop()
    if trailing_blank and cleaned:
        cleaned.append("")
    return cleaned


def render_groups(
    groups: Iterable[FormattedGroup],
    trailing_blank: bool = True,
    newline: str = "\n",
) -> str:
    """Join rendered groups into the text of the import section.

    Groups are separated by one blank line and each group name's header
    comment is emitted only once. An empty input renders as ``""``.
    """
    lines: list[str] = []
    seen: set[str] = set()
    for group in groups:
        if not group.lines:
            continue
        if lines:
            lines.append("")
        if group.group_name not in seen:
            seen.add(group.group_name)
            lines.append(group.comment_line)
        lines.extend(group.lines)
    cleaned = clean_up_lines(lines, trailing_blank=trailing_blank)
    if not cleaned:
        return ""
    return newline.join(cleaned) + newline
