"""Built-in screen views.

Placeholders rendered through inline kida templates, plus the error
boundary decorator applied to route modules that export one.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from functools import cache
from typing import TYPE_CHECKING, Any

from kida import Environment

if TYPE_CHECKING:
    from perch.routes.types import RouteNode

_EMPTY_ROUTE = (
    '<div class="perch-empty-route" data-segment="{{ segment }}">'
    "Missing default export in route {{ segment }}"
    "</div>"
)

_SUSPENSE_FALLBACK = (
    '<div class="perch-suspense" data-route="{{ name }}">Bundling {{ context_key }}</div>'
)


@cache
def _minimal_kida_env() -> Environment:
    """Create a bare kida Environment for the inline placeholder templates."""
    return Environment()


def _render_inline(source: str, context: dict[str, Any]) -> str:
    return _minimal_kida_env().from_string(source).render(context)


def EmptyRoute(**props: Any) -> str:  # noqa: N802
    """Placeholder for a route module whose default export is empty."""
    return _render_inline(_EMPTY_ROUTE, {"segment": props.get("segment", "")})


def SuspenseFallback(route: RouteNode) -> str:  # noqa: N802
    """Placeholder shown while a lazily loaded route is pending."""
    return _render_inline(
        _SUSPENSE_FALLBACK,
        {"name": route.name, "context_key": route.context_key},
    )


def DefaultLayout(**props: Any) -> Any:  # noqa: N802
    """Component of generated layouts: renders its nested screen as-is."""
    return props.get("children", "")


class ErrorBoundaryScreen:
    """Render *inner*; render *boundary* with the same props if it raises.

    The boundary receives the exception as ``error=``.  Async components are
    supported: errors raised while awaiting the result are caught too.
    """

    __slots__ = ("boundary", "inner")

    def __init__(self, inner: Callable[..., Any], boundary: Callable[..., Any]) -> None:
        self.inner = inner
        self.boundary = boundary

    def __call__(self, **props: Any) -> Any:
        try:
            result = self.inner(**props)
        except Exception as error:
            return self.boundary(error=error, **props)
        if inspect.isawaitable(result):
            return self._await(result, props)
        return result

    async def _await(self, result: Any, props: dict[str, Any]) -> Any:
        try:
            return await result
        except Exception as error:
            fallback = self.boundary(error=error, **props)
            if inspect.isawaitable(fallback):
                fallback = await fallback
            return fallback

    def __repr__(self) -> str:
        return f"ErrorBoundaryScreen({self.inner!r}, boundary={self.boundary!r})"
