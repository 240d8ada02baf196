"""Adapted route components and their identity-keyed cache.

An ``AdaptedComponent`` wraps one route's module for the host renderer:

1. Loads the module, eagerly at build time or lazily at first render
2. Normalizes its exports (error boundary, empty default export)
3. Drops host-injected ``route``/``navigation`` props and adds ``segment``
4. Renders inside ``route_scope(route)`` so descendants can find the node

Rendering a screen may rebuild the parent's screen list, which asks for
the same component again.  ``ComponentCache`` returns the existing unit
for a node it has seen, which stops that loop.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

import anyio

from perch.config import RouterConfig
from perch.context import route_scope
from perch.errors import ConfigurationError
from perch.routes.types import RouteNode
from perch.screens.exports import from_import
from perch.screens.views import SuspenseFallback

logger = logging.getLogger("perch.screens")

# Props set by the host navigator; screens read routing state via perch.context
_HOST_PROPS = frozenset({"route", "navigation"})

Fallback = Callable[[RouteNode], Any]


class _EagerScreen:
    """A screen whose module was loaded and normalized up front."""

    __slots__ = ("component",)

    def __init__(self, route: RouteNode, *, dev_checks: bool) -> None:
        result = route.load_route()
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            msg = (
                f"Route {route.context_key!r} loaded asynchronously, "
                "but import_mode='eager' requires a synchronous load_route()."
            )
            raise ConfigurationError(msg)
        self.component = from_import(result, dev_checks=dev_checks).default

    @property
    def resolved(self) -> bool:
        return True

    def render(self, props: dict[str, Any], fallback: Fallback) -> Any:
        return self.component(**props)

    async def resolve(self) -> Callable[..., Any]:
        return self.component

    def close(self) -> None:
        pass


class _LazyScreen:
    """A screen whose module loads on first render.

    ``load_route()`` runs once.  A synchronous result is normalized on the
    spot; an awaitable stays pending until ``resolve()`` awaits it, and the
    sync ``render`` path shows the fallback meanwhile.  A failed load, sync
    or async, raises and is forgotten so the next render retries.

    A pending coroutine that is never resolved stays un-awaited until
    ``close()`` discards it.
    """

    __slots__ = ("_component", "_dev_checks", "_lock", "_pending", "_started", "route")

    def __init__(self, route: RouteNode, *, dev_checks: bool) -> None:
        self.route = route
        self._dev_checks = dev_checks
        self._component: Callable[..., Any] | None = None
        self._pending: Any = None
        self._started = False
        self._lock: anyio.Lock | None = None

    @property
    def resolved(self) -> bool:
        return self._component is not None

    def _start(self) -> None:
        if self._started:
            return
        result = self.route.load_route()
        if inspect.isawaitable(result):
            self._pending = result
        else:
            self._component = from_import(result, dev_checks=self._dev_checks).default
        self._started = True

    def render(self, props: dict[str, Any], fallback: Fallback) -> Any:
        self._start()
        if self._component is None:
            return fallback(self.route)
        return self._component(**props)

    async def resolve(self) -> Callable[..., Any]:
        self._start()
        if self._component is not None:
            return self._component

        if self._lock is None:
            self._lock = anyio.Lock()
        async with self._lock:
            # A failed load may have reset state while this task waited
            self._start()
            if self._component is None:
                try:
                    exports = await self._pending
                except BaseException:
                    self._pending = None
                    self._started = False
                    raise
                self._pending = None
                self._component = from_import(exports, dev_checks=self._dev_checks).default
                logger.debug("Resolved lazy route %s", self.route.context_key)
        return self._component

    def close(self) -> None:
        """Discard a pending load that was never resolved."""
        if inspect.iscoroutine(self._pending):
            self._pending.close()
        self._pending = None
        if self._component is None:
            self._started = False


class AdaptedComponent:
    """A route's renderable unit, as handed to the host renderer.

    Usage::

        unit = cache.get(route)
        html = unit.render(title="Hi")
        html = await unit.render_async(title="Hi")
    """

    __slots__ = ("_fallback", "_screen", "display_name", "route")

    def __init__(
        self,
        route: RouteNode,
        *,
        import_mode: str = "lazy",
        dev_checks: bool = True,
        fallback: Fallback = SuspenseFallback,
    ) -> None:
        self.route = route
        self.display_name = f"Route({route.name})"
        self._fallback = fallback
        if import_mode == "lazy":
            self._screen: _EagerScreen | _LazyScreen = _LazyScreen(route, dev_checks=dev_checks)
        else:
            self._screen = _EagerScreen(route, dev_checks=dev_checks)

    @property
    def resolved(self) -> bool:
        """Whether the route's module has loaded."""
        return self._screen.resolved

    def _qualify(self, props: dict[str, Any]) -> dict[str, Any]:
        forwarded = {k: v for k, v in props.items() if k not in _HOST_PROPS}
        # Template segment path, e.g. "(home)", "[id]", "index"
        forwarded["segment"] = self.route.name
        return forwarded

    def render(self, **props: Any) -> Any:
        """Render synchronously; a pending lazy route renders its fallback."""
        forwarded = self._qualify(props)
        with route_scope(self.route):
            return self._screen.render(forwarded, self._fallback)

    async def resolve(self) -> Callable[..., Any]:
        """Load the route if needed and return its normalized component."""
        return await self._screen.resolve()

    def close(self) -> None:
        """Discard a pending lazy load that was never resolved."""
        self._screen.close()

    async def render_async(self, **props: Any) -> Any:
        """Wait for the route to load, then render it."""
        forwarded = self._qualify(props)
        component = await self._screen.resolve()
        with route_scope(self.route):
            result = component(**forwarded)
            if inspect.isawaitable(result):
                result = await result
        return result

    def __repr__(self) -> str:
        return f"<AdaptedComponent {self.display_name}>"


class ComponentCache:
    """Adapted components keyed by ``RouteNode`` identity.

    Owned by a ``ScreenBuilder`` and lives as long as the route tree it
    serves.  A rebuilt tree brings new nodes and gets a new cache; entries
    are never evicted individually.
    """

    __slots__ = ("_config", "_fallback", "_units")

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        fallback: Fallback = SuspenseFallback,
    ) -> None:
        self._config = config or RouterConfig()
        self._fallback = fallback
        self._units: dict[RouteNode, AdaptedComponent] = {}

    def get(self, route: RouteNode) -> AdaptedComponent:
        """Return the adapted component for *route*, building it once."""
        unit = self._units.get(route)
        if unit is not None:
            return unit

        unit = AdaptedComponent(
            route,
            import_mode=self._config.import_mode,
            dev_checks=self._config.dev_checks,
            fallback=self._fallback,
        )
        self._units[route] = unit
        logger.debug("Adapted %s (%s)", unit.display_name, self._config.import_mode)
        return unit

    def __contains__(self, route: object) -> bool:
        return route in self._units

    def __len__(self) -> int:
        return len(self._units)

    def clear(self) -> None:
        """Forget every adapted component, discarding pending loads."""
        for unit in self._units.values():
            unit.close()
        self._units.clear()
