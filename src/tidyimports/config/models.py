"""Configuration data model.

A :class:`Config` is immutable. Changing configuration means building a new
one and handing it to :meth:`ImportFormatter.reconfigure`, which drops the
caches derived from the previous configuration.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal

from tidyimports.imports.models import ImportKind

QuoteStyle = Literal["single", "double"]

DEFAULT_GROUP_NAME = "Misc"


@dataclass(frozen=True)
class Group:
    """A named bucket of imports.

    Parameters
    ----------
    name : str
        Unique group name, rendered as the ``// name`` header comment.
    order : Any
        Requested position. Anything but a non-negative integer counts as
        missing; :func:`resolve_group_order` assigns the final value.
    pattern : re.Pattern | None
        Module specifiers matching this pattern (``re.search``) belong here.
        Ignored for the default group.
    is_default : bool
        The fallback group for modules no pattern matches.
    priority_patterns : tuple[re.Pattern, ...]
        Modules of this group matching one of these sort first within their
        declaration kind.
    sort_order : str | tuple[str, ...] | None
        ``"alphabetic"`` or wildcard patterns (``react``, ``react-*``) giving
        a custom module order inside the group.
    """

    name: str
    order: Any = None
    pattern: re.Pattern[str] | None = None
    is_default: bool = False
    priority_patterns: tuple[re.Pattern[str], ...] = ()
    sort_order: str | tuple[str, ...] | None = None

    def matches(self, module: str) -> bool:
        return self.pattern is not None and self.pattern.search(module) is not None


@dataclass(frozen=True)
class ImportOrder:
    """Weight of each declaration kind; lower weights sort first."""

    default: int = 0
    named: int = 1
    type_default: int = 2
    type_named: int = 3
    side_effect: int = 4

    def weight(self, kind: ImportKind) -> int:
        return {
            ImportKind.DEFAULT: self.default,
            ImportKind.NAMED: self.named,
            ImportKind.TYPE_DEFAULT: self.type_default,
            ImportKind.TYPE_NAMED: self.type_named,
            ImportKind.SIDE_EFFECT: self.side_effect,
        }[kind]


@dataclass(frozen=True)
class FormatOptions:
    """Rendering options for the import section."""

    indent: int = 4
    quote_style: QuoteStyle = "single"
    semicolons: bool = True
    bracket_spacing: bool = True

    @property
    def quote(self) -> str:
        return '"' if self.quote_style == "double" else "'"


@dataclass(frozen=True)
class Config:
    """Validated configuration for one formatter.

    The loader guarantees unique group names and exactly one default group;
    the pipeline trusts these invariants.
    """

    groups: tuple[Group, ...] = (Group(DEFAULT_GROUP_NAME, 0, is_default=True),)
    import_order: ImportOrder = field(default_factory=ImportOrder)
    format: FormatOptions = field(default_factory=FormatOptions)
    priority_patterns: tuple[re.Pattern[str], ...] = ()
    excluded_folders: tuple[str, ...] = ()

    @property
    def default_group(self) -> Group:
        return next(g for g in self.groups if g.is_default)

    def group(self, name: str) -> Group | None:
        for g in self.groups:
            if g.name == name:
                return g
        return None


DEFAULT_CONFIG = Config()
