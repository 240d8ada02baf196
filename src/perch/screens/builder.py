"""Screen descriptors for the host navigator.

Turns a layout's reconciled children into ``ScreenDescriptor`` objects:
one per visible route, each with an id function, an options function,
and a lazy getter for the adapted component.  Descriptors are cheap and
rebuilt on every render; the expensive component adaptation is cached in
the builder's ``ComponentCache``.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from perch.config import RouterConfig
from perch.routes.ids import make_id_generator
from perch.routes.order import get_sorted_children
from perch.routes.types import OrderEntry, Options, RouteNode, ScreenProps
from perch.screens.adapter import AdaptedComponent, ComponentCache
from perch.screens.exports import ModuleExports


def _hidden_tab_bar_button(*args: Any, **kwargs: Any) -> None:
    return None


@dataclass(frozen=True, slots=True)
class ScreenDescriptor:
    """One screen registration for the host navigator.

    Attributes:
        route: The route this screen renders.
        name: Screen name, the route's segment name.
        key: Stable key for the host's child list, same as ``name``.
        get_id: ``get_id(params=None) -> str`` distinguishing screen instances.
        options: ``options(*args, **kwargs) -> dict`` of navigation options.
        get_component: Returns the adapted component; called on demand.
        initial_params: Passed through from the ordering entry.
        listeners: Passed through from the ordering entry.
    """

    route: RouteNode
    name: str
    key: str
    get_id: Callable[..., str]
    options: Callable[..., dict[str, Any]]
    get_component: Callable[[], AdaptedComponent]
    initial_params: Mapping[str, Any] | None = None
    listeners: Mapping[str, Callable[..., Any]] | None = None


def _call_options(options: Options | None, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    if callable(options):
        return options(*args, **kwargs)
    return options


def _static_options(route: RouteNode) -> Any:
    """Read ``nav_options`` from a generated route's module, loading it now."""
    result = route.load_route()
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        return None
    return ModuleExports.from_module(result).nav_options


class ScreenBuilder:
    """Build screen descriptors for route layouts.

    Owns the ``ComponentCache`` for one route tree; create a new builder
    when the tree is rebuilt.

    Usage::

        builder = ScreenBuilder(RouterConfig(import_mode="eager"))
        screens = builder.sorted_screens(layout_node, order=[{"name": "index"}])
        unit = screens[0].get_component()
    """

    __slots__ = ("cache", "config")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        cache: ComponentCache | None = None,
    ) -> None:
        self.config = config or RouterConfig()
        self.cache = cache if cache is not None else ComponentCache(self.config)

    def sorted_screens(
        self,
        node: RouteNode | None,
        order: Sequence[OrderEntry | Mapping[str, Any]] | None = None,
    ) -> list[ScreenDescriptor]:
        """Reconcile *node*'s children with *order* and build their screens."""
        if node is None or not node.children:
            return []
        sorted_children = get_sorted_children(node.children, order, node.initial_route_name)
        return [self.route_to_screen(child.route, child.props) for child in sorted_children]

    def route_to_screen(
        self,
        route: RouteNode,
        props: ScreenProps | None = None,
    ) -> ScreenDescriptor:
        """Build the descriptor for one route and its override props."""
        props = props or ScreenProps()
        override_options = props.options

        def options(*args: Any, **kwargs: Any) -> dict[str, Any]:
            # Only generated routes load their module for static options
            static_options = _static_options(route) if route.generated else None
            output: dict[str, Any] = {}
            output.update(_call_options(static_options, args, kwargs) or {})
            output.update(_call_options(override_options, args, kwargs) or {})
            # Generated routes never show up in navigation chrome
            if route.generated:
                output["tab_bar_button"] = _hidden_tab_bar_button
                output["drawer_item_style"] = {"height": 0, "display": "none"}
            return output

        get_id = props.get_id or make_id_generator(route, reserved=self.config.reserved_params)

        return ScreenDescriptor(
            route=route,
            name=route.name,
            key=route.name,
            get_id=get_id,
            options=options,
            get_component=lambda: self.cache.get(route),
            initial_params=props.initial_params,
            listeners=props.listeners,
        )
