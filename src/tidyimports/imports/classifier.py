"""Assignment of import records to configured groups."""
from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Sequence

from tidyimports.config.models import Group
from tidyimports.imports.models import ParsedImport

logger = logging.getLogger(__name__)


class GroupMatcher:
    """Match module specifiers against group patterns, with a cache.

    Non-default groups are tried in ascending order; the first whose pattern
    matches wins. Unmatched modules go to the default group. Results are
    cached per module string, so the cache must be cleared (or the matcher
    rebuilt) whenever the groups change.

    Parameters
    ----------
    groups : Sequence[Group]
        Groups with resolved orders. Exactly one must be the default.
    priority_patterns : Sequence[re.Pattern]
        Config-wide priority patterns, checked in addition to the assigned
        group's own ``priority_patterns``.

    Examples
    --------
    >>> matcher = GroupMatcher([Group("Misc", 0, is_default=True),
    ...                         Group("React", 1, re.compile(r"^react"))])
    >>> matcher.group_for("react-dom")
    'React'
    >>> matcher.group_for("lodash")
    'Misc'
    """

    def __init__(
        self,
        groups: Sequence[Group],
        priority_patterns: Sequence[re.Pattern[str]] = (),
    ) -> None:
        self._groups = {g.name: g for g in groups}
        self._candidates = sorted(
            (g for g in groups if not g.is_default and g.pattern is not None),
            key=lambda g: g.order,
        )
        defaults = [g for g in groups if g.is_default]
        if len(defaults) != 1:
            raise ValueError(f"Expected exactly one default group, got {len(defaults)}")
        self._default = defaults[0]
        self._priority_patterns = tuple(priority_patterns)
        self._cache: dict[str, str] = {}

    @property
    def default_group(self) -> Group:
        return self._default

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def group_for(self, module: str) -> str:
        """Return the name of the group ``module`` belongs to."""
        cached = self._cache.get(module)
        if cached is not None:
            return cached
        name = self._default.name
        for group in self._candidates:
            if group.matches(module):
                name = group.name
                break
        self._cache[module] = name
        return name

    def is_priority(self, module: str, group_name: str | None = None) -> bool:
        patterns = list(self._priority_patterns)
        group = self._groups.get(group_name) if group_name else None
        if group is not None:
            patterns.extend(group.priority_patterns)
        return any(p.search(module) for p in patterns)

    def classify(self, record: ParsedImport) -> ParsedImport:
        """Return a copy of ``record`` with its group and priority assigned."""
        group_name = self.group_for(record.module)
        return replace(
            record,
            group=group_name,
            is_priority=self.is_priority(record.module, group_name),
        )

    def classify_all(self, records: Sequence[ParsedImport]) -> list[ParsedImport]:
        classified = [self.classify(r) for r in records]
        logger.debug("Classified %d records (%d cached modules)", len(classified), self.cache_size)
        return classified
