"""Route module exports and their normalization.

A route module exposes up to three names:

- ``default``: the screen component, ``component(**props)``.
- ``error_boundary``: rendered with ``error=`` when ``default`` raises.
- ``nav_options``: static navigation options, a mapping or a callable.

Loaders may hand back a ``ModuleExports``, a mapping with those keys, or
any object carrying them as attributes (such as an imported module).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

from perch.screens.views import EmptyRoute, ErrorBoundaryScreen

logger = logging.getLogger("perch.screens")

_EXPORT_NAMES = ("default", "error_boundary", "nav_options")


@dataclass(frozen=True, slots=True)
class ModuleExports:
    """The exports of one loaded route module.

    Attributes:
        default: The screen component, or ``None`` when the module has none.
        error_boundary: Component rendered when ``default`` raises.
        nav_options: Static navigation options, a mapping or a callable.
    """

    default: Any = None
    error_boundary: Callable[..., Any] | None = None
    nav_options: Mapping[str, Any] | Callable[..., Mapping[str, Any]] | None = None

    @classmethod
    def from_module(cls, module: Any) -> ModuleExports:
        """Coerce a loader result into ``ModuleExports``."""
        if isinstance(module, ModuleExports):
            return module
        if isinstance(module, Mapping):
            return cls(**{name: module.get(name) for name in _EXPORT_NAMES})
        return cls(**{name: getattr(module, name, None) for name in _EXPORT_NAMES})


def is_empty_export(value: Any) -> bool:
    """Whether *value* is an export with no content, e.g. ``{}``."""
    if value is None or callable(value):
        return False
    if isinstance(value, Mapping):
        return not value
    if isinstance(value, SimpleNamespace):
        return not vars(value)
    return type(value) is object


def from_import(module: Any, *, dev_checks: bool = True) -> ModuleExports:
    """Normalize loaded exports so ``default`` is always renderable.

    - With an ``error_boundary``, ``default`` is wrapped so render errors
      render the boundary instead.
    - With *dev_checks*, an empty ``default`` becomes ``EmptyRoute``.
    - Otherwise ``default`` is used unmodified.
    """
    exports = ModuleExports.from_module(module)

    if exports.error_boundary is not None:
        inner = exports.default or EmptyRoute
        return ModuleExports(
            default=ErrorBoundaryScreen(inner, exports.error_boundary),
            nav_options=exports.nav_options,
        )

    if dev_checks and (exports.default is None or is_empty_export(exports.default)):
        logger.warning("Route module has no default export; rendering EmptyRoute")
        return ModuleExports(default=EmptyRoute, nav_options=exports.nav_options)

    return exports

