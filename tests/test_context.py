"""Tests for perch.context — route-scoped ContextVar."""

import pytest

from perch.context import get_route_node, route_node_var, route_scope
from perch.routes.types import RouteNode


def _route(name: str) -> RouteNode:
    return RouteNode(name=name, context_key=f"./{name}.py", load_route=lambda: None)


class TestRouteNodeVar:
    def test_get_route_node_raises_outside_scope(self) -> None:
        with pytest.raises(LookupError):
            get_route_node()

    def test_set_and_get(self) -> None:
        route = _route("a")
        token = route_node_var.set(route)
        try:
            assert get_route_node() is route
        finally:
            route_node_var.reset(token)


class TestRouteScope:
    def test_scope_yields_node(self) -> None:
        route = _route("a")
        with route_scope(route) as scoped:
            assert scoped is route
            assert get_route_node() is route

    def test_nested_scopes_restore_parent(self) -> None:
        parent, child = _route("parent"), _route("child")
        with route_scope(parent):
            with route_scope(child):
                assert get_route_node() is child
            assert get_route_node() is parent

    def test_reset_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with route_scope(_route("a")):
                raise RuntimeError("boom")
        with pytest.raises(LookupError):
            get_route_node()
