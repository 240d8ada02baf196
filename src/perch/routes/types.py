"""Data models for file-system-derived routes.

Frozen dataclasses representing discovered route nodes, their dynamic
segments, and the author-declared ordering entries of a layout.  Built
once during discovery and treated as immutable afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# Options may be a plain mapping or a callable producing one
Options = Mapping[str, Any] | Callable[..., Mapping[str, Any]]


@dataclass(frozen=True, slots=True)
class DynamicSegment:
    """One captured path parameter.

    Attributes:
        name: Key expected in the runtime parameter bag.
        deep: ``True`` for catch-all segments (``[...rest]``) that capture
            zero or more path components.
    """

    name: str
    deep: bool = False


@dataclass(frozen=True, slots=True, eq=False)
class RouteNode:
    """A route discovered from the filesystem.

    Equality and hashing are by identity: two structurally identical nodes
    are still two distinct screens, and the node itself is the key of the
    screen component cache.

    Attributes:
        name: Path segment identity within the parent's children
            (e.g. ``index``, ``[id]``, ``(tabs)``).
        context_key: Globally unique key derived from the node's file path.
        load_route: Returns the route's module exports, or an awaitable
            resolving to them.
        children: Nested routes; empty for leaf routes.
        initial_route_name: Child that sorts first regardless of the
            default ordering.
        dynamic: Path parameters captured by this route, in path order.
        generated: Synthesized rather than authored; hidden from navigation
            chrome.
    """

    name: str
    context_key: str
    load_route: Callable[[], Any]
    children: tuple[RouteNode, ...] = ()
    initial_route_name: str | None = None
    dynamic: tuple[DynamicSegment, ...] | None = None
    generated: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self) -> str:
        return f"RouteNode({self.name!r}, context_key={self.context_key!r})"


@dataclass(frozen=True, slots=True)
class OrderEntry:
    """An author-declared screen in a layout's ordering list.

    Attributes:
        name: Name of the child route this entry claims.
        redirect: A string target is unsupported and fails reconciliation.
            Any other truthy value consumes the route without emitting a
            screen.
        initial_params: Passed through to the screen descriptor.
        listeners: Passed through to the screen descriptor.
        options: Screen options, a mapping or a callable returning one.
        get_id: Replaces the generated screen id function.
    """

    name: str
    redirect: str | bool | None = None
    initial_params: Mapping[str, Any] | None = None
    listeners: Mapping[str, Callable[..., Any]] | None = None
    options: Options | None = None
    get_id: Callable[..., str] | None = None

    @classmethod
    def coerce(cls, entry: OrderEntry | Mapping[str, Any]) -> OrderEntry:
        """Accept an ``OrderEntry`` or a mapping with the same keys."""
        if isinstance(entry, OrderEntry):
            return entry
        return cls(**entry)


@dataclass(frozen=True, slots=True)
class ScreenProps:
    """Per-route overrides taken from a matched ``OrderEntry``."""

    initial_params: Mapping[str, Any] | None = None
    listeners: Mapping[str, Callable[..., Any]] | None = None
    options: Options | None = None
    get_id: Callable[..., str] | None = None


@dataclass(frozen=True, slots=True)
class SortedChild:
    """A reconciled child route paired with its override props."""

    route: RouteNode
    props: ScreenProps = field(default_factory=ScreenProps)
