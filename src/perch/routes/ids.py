"""Screen identifiers derived from route parameters.

A screen id must be stable for one parameter binding and distinct across
bindings: the host keeps component state for equal ids and mounts a new
screen for different ones.

Examples for ``[user]/[...rest]``::

    {"user": "ada", "rest": ["a", "b"]}  -> "ada/a/b"
    {}                                   -> "[user]/[...rest]"

Leaf routes also fold leftover search params into the id::

    {"user": "ada", "tab": "posts"}      -> "ada/[...rest]?tab=posts"
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from perch.routes.types import DynamicSegment, RouteNode

# Navigation-internal keys that never become search params
RESERVED_PARAMS = frozenset({"screen", "params"})

GetId = Callable[..., str]


def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _format_search_value(value: Any) -> str:
    if _is_array(value):
        return ",".join(str(v) for v in value)
    return str(value)


def _format_segment(segment: DynamicSegment, value: Any) -> str:
    if _is_array(value) and len(value) > 0:
        return "/".join(str(v) for v in value)
    if value and not _is_array(value):
        return str(value)
    if segment.deep:
        return f"[...{segment.name}]"
    return f"[{segment.name}]"


def make_id_generator(
    route: RouteNode,
    *,
    reserved: frozenset[str] = RESERVED_PARAMS,
) -> GetId:
    """Return a ``get_id(params=None)`` function bound to *route*.

    The id joins one piece per dynamic segment with ``/``: the bound value
    (arrays joined with ``/``) or a ``[name]`` / ``[...name]`` placeholder.
    For leaf routes, unconsumed params other than *reserved* keys are
    appended as ``?key=value&...``; when the route has no dynamic segments
    the ``context_key`` stands in for the empty base.

    A route with no dynamic segments and no search params yields ``""``.
    """
    # Keyed by name; a repeated name keeps its first position
    include: dict[str, DynamicSegment] = {}
    for segment in route.dynamic or ():
        include[segment.name] = segment

    def get_id(params: Mapping[str, Any] | None = None) -> str:
        params = params or {}
        unprocessed = [key for key in params if key not in include]

        segments = [_format_segment(seg, params.get(name)) for name, seg in include.items()]
        screen_id = "/".join(segments)

        search_params: list[str] = []
        if route.is_leaf:
            for key in unprocessed:
                if key in reserved:
                    continue
                search_params.append(f"{key}={_format_search_value(params[key])}")

        if search_params:
            screen_id = f"{screen_id or route.context_key}?{'&'.join(search_params)}"

        return screen_id

    return get_id
