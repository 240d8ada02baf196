"""Sibling route ordering.

A total order over routes that share a parent.  Static routes come before
dynamic ones, ``index`` and group routes lead among static routes, and
names and context keys break any remaining ties so equal inputs never
reorder between calls.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from functools import cmp_to_key

from perch.routes.types import RouteNode

# Regex matching (group) segment names
_GROUP_RE = re.compile(r"^\((.+)\)$")


def match_group_name(name: str) -> str | None:
    """Return the group name for ``(group)`` segments, else ``None``."""
    match = _GROUP_RE.match(name)
    if match:
        return match.group(1)
    return None


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def sort_routes(a: RouteNode, b: RouteNode) -> int:
    """Compare two sibling routes, returning a negative, zero or positive int."""
    if a.dynamic and not b.dynamic:
        return 1
    if not a.dynamic and b.dynamic:
        return -1

    if a.dynamic and b.dynamic:
        # More captured segments is more specific
        if len(a.dynamic) != len(b.dynamic):
            return len(b.dynamic) - len(a.dynamic)
        for a_seg, b_seg in zip(a.dynamic, b.dynamic, strict=True):
            if a_seg.deep and not b_seg.deep:
                return 1
            if not a_seg.deep and b_seg.deep:
                return -1

    a_index = a.name == "index" or match_group_name(a.name) is not None
    b_index = b.name == "index" or match_group_name(b.name) is not None
    if a_index and not b_index:
        return -1
    if not a_index and b_index:
        return 1

    return (
        (len(a.name) - len(b.name))
        or _cmp(a.name, b.name)
        or _cmp(a.context_key, b.context_key)
    )


def sort_routes_with_initial(
    initial_route_name: str | None = None,
) -> Callable[[RouteNode, RouteNode], int]:
    """Build a comparator that pins *initial_route_name* first."""

    def compare(a: RouteNode, b: RouteNode) -> int:
        if initial_route_name is not None:
            if a.name == initial_route_name and b.name != initial_route_name:
                return -1
            if b.name == initial_route_name and a.name != initial_route_name:
                return 1
        return sort_routes(a, b)

    return compare


def sorted_routes(
    routes: Iterable[RouteNode],
    initial_route_name: str | None = None,
) -> list[RouteNode]:
    """Return *routes* ordered by ``sort_routes_with_initial``."""
    return sorted(routes, key=cmp_to_key(sort_routes_with_initial(initial_route_name)))
