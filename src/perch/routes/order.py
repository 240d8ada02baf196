"""Reconcile a layout's declared screen order with its discovered children.

Entries are processed in declared order, each claiming at most one child.
Children nobody claimed follow, sorted by ``sort_routes_with_initial``.
A child is never emitted twice and never lost, except when an entry
deliberately consumes it with a non-string ``redirect``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from perch.errors import UnsupportedRedirectError
from perch.routes.sorting import sorted_routes
from perch.routes.types import OrderEntry, RouteNode, ScreenProps, SortedChild

logger = logging.getLogger("perch.routes")


def get_sorted_children(
    children: Sequence[RouteNode],
    order: Sequence[OrderEntry | Mapping[str, Any]] | None = None,
    initial_route_name: str | None = None,
) -> list[SortedChild]:
    """Order *children* by the explicit *order* list, then by default sort.

    Args:
        children: Discovered child routes of a layout.
        order: Author-declared entries, or ``None`` for default ordering.
        initial_route_name: Child pinned first among the unordered remainder.

    Returns:
        Explicitly ordered children followed by the sorted remainder, each
        paired with its override props.

    Raises:
        UnsupportedRedirectError: An entry names a string redirect target.
    """
    if not order:
        return [SortedChild(route) for route in sorted_routes(children, initial_route_name)]

    remaining = list(children)
    ordered: list[SortedChild] = []

    for raw in order:
        entry = OrderEntry.coerce(raw)
        if not remaining:
            logger.warning(
                "[Layout children]: Too many screens defined. Route %r is extraneous.",
                entry.name,
            )
            continue

        match_index = next(
            (i for i, child in enumerate(remaining) if child.name == entry.name),
            None,
        )
        if match_index is None:
            logger.warning(
                "[Layout children]: No route named %r exists in nested children: %s",
                entry.name,
                [child.name for child in children],
            )
            continue

        # Consume the match before deciding whether it renders
        match = remaining.pop(match_index)

        if entry.redirect:
            if isinstance(entry.redirect, str):
                raise UnsupportedRedirectError(entry.name, entry.redirect)
            continue

        ordered.append(
            SortedChild(
                match,
                ScreenProps(
                    initial_params=entry.initial_params,
                    listeners=entry.listeners,
                    options=entry.options,
                    get_id=entry.get_id,
                ),
            )
        )

    ordered.extend(SortedChild(route) for route in sorted_routes(remaining, initial_route_name))
    return ordered
