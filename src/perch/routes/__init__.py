"""Route tree model, ordering, and screen identifiers.

The ``routes/`` directory structure defines the route tree: files are
screens, directories are layouts, ``[param]`` names capture parameters.

Usage::

    root = discover_routes("app")
    children = get_sorted_children(root.children, order, root.initial_route_name)
    get_id = make_id_generator(children[0].route)
    get_id({"id": "42"})

Conventions:

    app/
      _layout.py         # Root layout (optional; generated when missing)
      index.py           # Screen "index"
      settings.py        # Screen "settings"
      posts/
        _layout.py       # initial_route_name = "index"
        index.py
        [id].py          # Screen "[id]", captures params["id"]
      docs/
        [...slug].py     # Captures the rest of the path
"""

from perch.routes.discovery import discover_routes
from perch.routes.ids import make_id_generator
from perch.routes.order import get_sorted_children
from perch.routes.sorting import sort_routes, sort_routes_with_initial, sorted_routes
from perch.routes.types import DynamicSegment, OrderEntry, RouteNode, ScreenProps, SortedChild

__all__ = [
    "DynamicSegment",
    "OrderEntry",
    "RouteNode",
    "ScreenProps",
    "SortedChild",
    "discover_routes",
    "get_sorted_children",
    "make_id_generator",
    "sort_routes",
    "sort_routes_with_initial",
    "sorted_routes",
]
