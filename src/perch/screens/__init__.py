"""Screen adaptation for the host navigator.

Wraps route modules in cached, context-aware components and builds the
screen descriptors a layout registers with its navigator.

Usage::

    builder = ScreenBuilder(RouterConfig())
    for screen in builder.sorted_screens(layout_node):
        navigator.register(screen.name, screen.get_component, screen.options)
"""

from perch.screens.adapter import AdaptedComponent, ComponentCache
from perch.screens.builder import ScreenBuilder, ScreenDescriptor
from perch.screens.exports import ModuleExports, from_import
from perch.screens.views import DefaultLayout, EmptyRoute, ErrorBoundaryScreen, SuspenseFallback

__all__ = [
    "AdaptedComponent",
    "ComponentCache",
    "DefaultLayout",
    "EmptyRoute",
    "ErrorBoundaryScreen",
    "ModuleExports",
    "ScreenBuilder",
    "ScreenDescriptor",
    "SuspenseFallback",
    "from_import",
]
