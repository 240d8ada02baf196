"""Filesystem route discovery for the routes directory.

Walks the directory tree and builds an immutable ``RouteNode`` tree:
- ``.py`` files become leaf routes (imported on first ``load_route()``)
- directories become layout routes with nested children
- ``_layout.py`` supplies a directory's layout module; without one a
  generated layout is synthesized

Names wrapped in ``[brackets]`` capture a path parameter; ``[...name]``
captures the rest of the path.  Files and directories starting with ``_``
or ``.`` are skipped.

Layout modules are imported during discovery so their
``initial_route_name`` can be read; screen modules load lazily.
"""

from __future__ import annotations

import importlib.util
import logging
import re
from collections.abc import Callable
from functools import cache
from pathlib import Path
from types import ModuleType

from perch.errors import RouteLoadError
from perch.routes.types import DynamicSegment, RouteNode
from perch.screens.exports import ModuleExports
from perch.screens.views import DefaultLayout

logger = logging.getLogger("perch.routes")

# Regex matching [param] and [...param] names
_DYNAMIC_RE = re.compile(r"^\[(\.\.\.)?(\w+)\]$")

_LAYOUT_FILE = "_layout.py"


def discover_routes(routes_dir: str | Path) -> RouteNode:
    """Walk a routes directory and build its route tree.

    Args:
        routes_dir: Path to the routes directory (``RouterConfig.routes_dir``).

    Returns:
        The root layout :class:`RouteNode`, named ``""``.
    """
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Routes directory not found: {root}")

    node = _walk_directory(root, root, name="")
    logger.debug("Discovered %d top-level routes in %s", len(node.children), root)
    return node


def parse_dynamic(name: str) -> tuple[DynamicSegment, ...] | None:
    """Return the dynamic segment captured by a route name, if any."""
    match = _DYNAMIC_RE.match(name)
    if match is None:
        return None
    return (DynamicSegment(name=match.group(2), deep=match.group(1) is not None),)


def _context_key(path: Path, root: Path) -> str:
    relative = path.relative_to(root).as_posix()
    if relative == ".":
        return "./"
    return f"./{relative}"


def _walk_directory(directory: Path, root: Path, *, name: str) -> RouteNode:
    """Recursively build the layout node for *directory*."""
    children: list[RouteNode] = []

    # Process .py route files at this level
    for item in sorted(directory.iterdir()):
        if not item.is_file() or item.suffix != ".py":
            continue
        if item.name.startswith("_"):
            continue
        children.append(
            RouteNode(
                name=item.stem,
                context_key=_context_key(item, root),
                load_route=_module_loader(item, root),
                dynamic=parse_dynamic(item.stem),
            )
        )

    # Recurse into subdirectories
    for item in sorted(directory.iterdir()):
        if not item.is_dir():
            continue
        if item.name.startswith("_") or item.name.startswith("."):
            continue
        children.append(_walk_directory(item, root, name=item.name))

    layout_file = directory / _LAYOUT_FILE
    if layout_file.is_file():
        module = _import_file(layout_file, root)
        return RouteNode(
            name=name,
            context_key=_context_key(layout_file, root),
            load_route=lambda: module,
            children=tuple(children),
            initial_route_name=getattr(module, "initial_route_name", None),
            dynamic=parse_dynamic(name),
        )

    generated = ModuleExports(default=DefaultLayout)
    return RouteNode(
        name=name,
        context_key=_context_key(directory / "_layout", root),
        load_route=lambda: generated,
        children=tuple(children),
        dynamic=parse_dynamic(name),
        generated=True,
    )


def _module_loader(file: Path, root: Path) -> Callable[[], ModuleType]:
    """Return a loader that imports *file* on first call and caches it."""

    @cache
    def load_route() -> ModuleType:
        return _import_file(file, root)

    return load_route


def _import_file(file: Path, root: Path) -> ModuleType:
    """Import a route module from its file path."""
    relative = file.relative_to(root).with_suffix("").as_posix()
    module_name = "_perch_route_" + re.sub(r"\W", "_", relative)
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        msg = f"Cannot import route module {file}"
        raise RouteLoadError(msg)

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    logger.debug("Loaded route module %s", file)
    return module

