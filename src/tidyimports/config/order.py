"""Resolution of user-declared group orders.

Users may leave orders out, repeat them or write nonsense. The resolver
turns whatever was declared into distinct integers while staying as close
as possible to what was asked for:

1. Groups with a valid order (a non-negative integer) claim it in
   declaration order; a collision moves the later group up to the next free
   value.
2. Groups without a valid order take the smallest free values, again in
   declaration order.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Sequence

from tidyimports.config.models import Group

logger = logging.getLogger(__name__)

ORDER_WARN_THRESHOLD = 1000


def is_valid_order(value: Any) -> bool:
    """True for non-negative integers (booleans excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def resolve_group_order(
    groups: Sequence[Group],
    warn_threshold: int = ORDER_WARN_THRESHOLD,
) -> list[Group]:
    """Assign every group a unique order and sort by it.

    Parameters
    ----------
    groups : Sequence[Group]
        Groups in declaration order.
    warn_threshold : int
        Requested orders above this value are honored but logged.

    Returns
    -------
    list[Group]
        New group objects, one per input, sorted by their final order.

    Examples
    --------
    >>> resolved = resolve_group_order([Group("a", 2), Group("b", 2), Group("c")])
    >>> [(g.name, g.order) for g in resolved]
    [('c', 0), ('a', 2), ('b', 3)]
    """
    claimed: set[int] = set()
    final: list[int | None] = [None] * len(groups)

    for i, group in enumerate(groups):
        if not is_valid_order(group.order):
            if group.order is not None:
                logger.warning(
                    "Group %r has invalid order %r, assigning one automatically",
                    group.name,
                    group.order,
                )
            continue
        if group.order > warn_threshold:
            logger.warning(
                "Group %r has a very large order (%d > %d)",
                group.name,
                group.order,
                warn_threshold,
            )
        value = group.order
        while value in claimed:
            value += 1
        if value != group.order:
            logger.debug("Group %r order %d taken, using %d", group.name, group.order, value)
        claimed.add(value)
        final[i] = value

    next_free = 0
    for i, value in enumerate(final):
        if value is not None:
            continue
        while next_free in claimed:
            next_free += 1
        claimed.add(next_free)
        final[i] = next_free

    resolved = [replace(group, order=order) for group, order in zip(groups, final)]
    return sorted(resolved, key=lambda g: g.order)
