"""Data model for parsed import declarations.

Records are immutable: classification, filtering and merging return new
records through :func:`dataclasses.replace` instead of mutating in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NAMESPACE_PREFIX = "* as "


class ImportKind(Enum):
    """Declaration kind of a single import record."""

    DEFAULT = "default"
    NAMED = "named"
    TYPE_DEFAULT = "typeDefault"
    TYPE_NAMED = "typeNamed"
    SIDE_EFFECT = "sideEffect"

    @property
    def is_type_only(self) -> bool:
        return self in (ImportKind.TYPE_DEFAULT, ImportKind.TYPE_NAMED)

    @property
    def is_named(self) -> bool:
        return self in (ImportKind.NAMED, ImportKind.TYPE_NAMED)


@dataclass(frozen=True)
class Specifier:
    """A named binding, ``imported`` optionally renamed to ``local``."""

    imported: str
    local: str = ""

    def __post_init__(self) -> None:
        if not self.local:
            object.__setattr__(self, "local", self.imported)

    def __str__(self) -> str:
        if self.imported == self.local:
            return self.imported
        return f"{self.imported} as {self.local}"


@dataclass(frozen=True)
class ParsedImport:
    """One import record produced by the structural parser.

    Attributes
    ----------
    kind : ImportKind
        Declaration kind. A mixed declaration such as
        ``import React, { useState } from 'react'`` yields one record per kind.
    module : str
        The module specifier string, without quotes.
    specifiers : tuple[Specifier, ...]
        Named bindings (only for the named kinds).
    default_name : str | None
        Default binding for the default kinds. Namespace bindings are stored
        as ``* as Name``.
    raw : str
        Source text of the declaration this record came from.
    is_priority : bool
        Set by the classifier when the module matches a priority pattern.
    group : str | None
        Name of the assigned group, set by the classifier.
    index : int
        Position in declaration order, used as the final sort tie-breaker.
    """

    kind: ImportKind
    module: str
    specifiers: tuple[Specifier, ...] = ()
    default_name: str | None = None
    raw: str = ""
    is_priority: bool = False
    group: str | None = None
    index: int = 0

    @property
    def is_namespace(self) -> bool:
        return bool(self.default_name) and self.default_name.startswith(NAMESPACE_PREFIX)

    @property
    def binding_names(self) -> list[str]:
        """Local names this record introduces into the module scope."""
        names = []
        if self.default_name:
            names.append(self.default_name.removeprefix(NAMESPACE_PREFIX))
        names.extend(s.local for s in self.specifiers)
        return names

    @property
    def is_empty(self) -> bool:
        return not self.specifiers and not self.default_name


@dataclass(frozen=True)
class ImportRange:
    """Half-open character range ``[start, end)`` of the import section."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"Invalid import range: {self.start}..{self.end}")

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


@dataclass(frozen=True)
class LocatorFailure:
    """Returned by the locator when the import boundary is ambiguous."""

    reason: str
    position: int = 0


@dataclass(frozen=True)
class InvalidImport:
    """A statement the structural parser could not understand."""

    raw: str
    message: str
    line: int | None = None
    column: int | None = None
    source_line: str = ""

    def describe(self) -> str:
        """Render the error with the offending line and a caret indicator."""
        if self.line is None:
            return f"Invalid import: {self.message}\n{self.raw}"
        header = f"Invalid import at line {self.line}"
        if self.column is not None:
            header += f", column {self.column}"
        lines = [f"{header}: {self.message}"]
        if self.source_line:
            lines.append(f"    {self.source_line}")
            if self.column is not None:
                lines.append("    " + " " * (self.column - 1) + "^")
        return "\n".join(lines)


@dataclass
class FormattedGroup:
    """Rendered lines of one group; produced and consumed per render."""

    group_name: str
    comment_line: str
    lines: list[str] = field(default_factory=list)
