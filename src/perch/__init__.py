"""Perch — file-system routes reconciled into navigator screens.

Orders a layout's discovered child routes against its declared screen
list, gives every screen instance a stable id derived from its params,
and wraps each route module in a cached component that loads lazily,
honours error boundaries, and exposes its route to descendants.

Basic usage::

    from perch import RouterConfig, ScreenBuilder, discover_routes

    config = RouterConfig(routes_dir="app")
    root = discover_routes(config.routes_dir)
    builder = ScreenBuilder(config)

    for screen in builder.sorted_screens(root, order=[{"name": "index"}]):
        screen.get_id({"id": "42"})
        screen.get_component().render(title="Home")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AdaptedComponent",
    "ComponentCache",
    "ConfigurationError",
    "DynamicSegment",
    "ModuleExports",
    "OrderEntry",
    "PerchError",
    "RouteNode",
    "RouterConfig",
    "ScreenBuilder",
    "ScreenDescriptor",
    "UnsupportedRedirectError",
    "discover_routes",
    "get_route_node",
    "get_sorted_children",
    "make_id_generator",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "RouterConfig":
        from perch.config import RouterConfig

        return RouterConfig

    if name in ("PerchError", "ConfigurationError", "UnsupportedRedirectError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    if name == "get_route_node":
        from perch.context import get_route_node

        return get_route_node

    if name in (
        "DynamicSegment",
        "OrderEntry",
        "RouteNode",
        "discover_routes",
        "get_sorted_children",
        "make_id_generator",
    ):
        from perch import routes as _routes

        return getattr(_routes, name)

    if name in (
        "AdaptedComponent",
        "ComponentCache",
        "ModuleExports",
        "ScreenBuilder",
        "ScreenDescriptor",
    ):
        from perch import screens as _screens

        return getattr(_screens, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
