"""Route-scoped context via ContextVar.

Provides:
- ``route_node_var``: The ``RouteNode`` whose screen is currently rendering.
- ``route_scope()``: Context manager used by adapted screens to expose their
  node to everything rendered beneath them.

Nested screens push their own node and restore the parent's on exit, so a
descendant always sees the closest enclosing route.

Thread safety:
    ``ContextVar`` is task-local under asyncio and thread-local under
    free-threading (3.14t). No locks needed.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.routes.types import RouteNode

route_node_var: ContextVar[RouteNode] = ContextVar("perch_route_node")
"""The route currently rendering. Set by ``AdaptedComponent`` during render."""


def get_route_node() -> RouteNode:
    """Return the route node of the closest enclosing screen.

    Raises ``LookupError`` if called outside a screen render.
    """
    return route_node_var.get()


@contextmanager
def route_scope(node: RouteNode) -> Iterator[RouteNode]:
    """Expose *node* to descendants for the duration of the block."""
    token = route_node_var.set(node)
    try:
        yield node
    finally:
        route_node_var.reset(token)
