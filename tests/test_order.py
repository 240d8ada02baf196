"""Tests for perch.routes.order — reconciling declared order with children."""

import logging

import pytest

from perch.errors import ConfigurationError, UnsupportedRedirectError
from perch.routes.order import get_sorted_children
from perch.routes.types import OrderEntry, RouteNode, ScreenProps, SortedChild

# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def _route(name: str) -> RouteNode:
    return RouteNode(name=name, context_key=f"./{name}.py", load_route=lambda: None)


def _children(*names: str) -> list[RouteNode]:
    return [_route(name) for name in names]


def _names(result: list[SortedChild]) -> list[str]:
    return [child.route.name for child in result]


# ---------------------------------------------------------------------------
# Default ordering
# ---------------------------------------------------------------------------


class TestNoOrder:
    def test_none_sorts_children(self) -> None:
        result = get_sorted_children(_children("c", "a", "b"))
        assert _names(result) == ["a", "b", "c"]

    def test_empty_order_sorts_children(self) -> None:
        result = get_sorted_children(_children("c", "a"), [], "c")
        assert _names(result) == ["c", "a"]

    def test_props_are_empty(self) -> None:
        result = get_sorted_children(_children("a"))
        assert result[0].props == ScreenProps()

    def test_input_is_not_mutated(self) -> None:
        children = _children("c", "a", "b")
        get_sorted_children(children, [OrderEntry("b")])
        assert [child.name for child in children] == ["c", "a", "b"]


# ---------------------------------------------------------------------------
# Explicit ordering
# ---------------------------------------------------------------------------


class TestExplicitOrder:
    def test_explicit_then_sorted_remainder(self) -> None:
        result = get_sorted_children(_children("A", "B", "C"), [OrderEntry("B")], "C")
        assert _names(result) == ["B", "C", "A"]

    def test_order_matches_entry_sequence(self) -> None:
        order = [OrderEntry("c"), OrderEntry("a"), OrderEntry("b")]
        result = get_sorted_children(_children("a", "b", "c"), order)
        assert _names(result) == ["c", "a", "b"]

    def test_override_props_pass_through(self) -> None:
        def get_id(params=None) -> str:
            return "custom"

        listeners = {"focus": print}
        entry = OrderEntry(
            "a",
            initial_params={"tab": "1"},
            listeners=listeners,
            options={"title": "A"},
            get_id=get_id,
        )
        result = get_sorted_children(_children("a", "b"), [entry])

        assert result[0].props == ScreenProps(
            initial_params={"tab": "1"},
            listeners=listeners,
            options={"title": "A"},
            get_id=get_id,
        )
        assert result[1].props == ScreenProps()

    def test_mapping_entries(self) -> None:
        result = get_sorted_children(
            _children("a", "b"),
            [{"name": "b", "options": {"title": "B"}}],
        )
        assert _names(result) == ["b", "a"]
        assert result[0].props.options == {"title": "B"}

    def test_matches_by_identity_of_first_remaining(self) -> None:
        first, second = _route("a"), _route("a")
        result = get_sorted_children([first, second], [OrderEntry("a")])
        assert result[0].route is first
        assert result[1].route is second

    def test_every_child_kept_once(self) -> None:
        children = _children("a", "b", "c", "d")
        orders = [
            [OrderEntry("d")],
            [OrderEntry("b"), OrderEntry("b")],
            [OrderEntry("x"), OrderEntry("a")],
            [OrderEntry(name) for name in ("d", "c", "b", "a", "e")],
        ]
        for order in orders:
            result = get_sorted_children(children, order)
            routes = [child.route for child in result]
            assert len(routes) == len(children)
            assert {id(r) for r in routes} == {id(c) for c in children}


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


class TestDiagnostics:
    def test_extraneous_entry_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="perch.routes"):
            result = get_sorted_children(_children("a"), [OrderEntry("a"), OrderEntry("b")])

        assert _names(result) == ["a"]
        assert "Too many screens defined" in caplog.text
        assert "'b' is extraneous" in caplog.text

    def test_unknown_entry_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="perch.routes"):
            result = get_sorted_children(_children("a", "b"), [OrderEntry("zzz")])

        assert _names(result) == ["a", "b"]
        assert "No route named 'zzz' exists in nested children" in caplog.text
        assert "['a', 'b']" in caplog.text

    def test_duplicate_entry_is_not_duplicated(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="perch.routes"):
            result = get_sorted_children(_children("a", "b"), [OrderEntry("a"), OrderEntry("a")])

        assert _names(result) == ["a", "b"]
        assert "No route named 'a'" in caplog.text


# ---------------------------------------------------------------------------
# Redirects
# ---------------------------------------------------------------------------


class TestRedirect:
    def test_string_redirect_raises(self) -> None:
        order = [OrderEntry("a"), OrderEntry("b", redirect="/somewhere")]
        with pytest.raises(UnsupportedRedirectError, match="not supported yet") as exc_info:
            get_sorted_children(_children("a", "b", "c"), order)

        assert exc_info.value.name == "b"
        assert exc_info.value.target == "/somewhere"

    def test_string_redirect_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            get_sorted_children(_children("b"), [{"name": "b", "redirect": "/x"}])

    def test_truthy_redirect_consumes_route(self) -> None:
        result = get_sorted_children(_children("a", "b"), [OrderEntry("a", redirect=True)])
        assert _names(result) == ["b"]

    def test_empty_string_redirect_is_ignored(self) -> None:
        result = get_sorted_children(_children("a", "b"), [OrderEntry("b", redirect="")])
        assert _names(result) == ["b", "a"]
