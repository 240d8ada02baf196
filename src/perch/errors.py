"""Perch exception hierarchy.

Shared across the reconciler, the screen adapter, and discovery so every
module raises and catches the same types.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when router configuration is invalid.

    Typically raised from ``RouterConfig.__post_init__`` or while
    reconciling a layout's ordering entries.
    """


class UnsupportedRedirectError(ConfigurationError):
    """An ordering entry redirects to a named route.

    Redirect targets are not implemented.  Ignoring them would produce a
    navigation tree that looks right but is wrong, so reconciliation stops.
    """

    def __init__(self, name: str, target: str) -> None:
        self.name = name
        self.target = target
        super().__init__(
            f"Redirecting to a specific route is not supported yet "
            f"(route {name!r} redirects to {target!r})."
        )


class RouteLoadError(PerchError):
    """A route module file could not be turned into an importable module."""
