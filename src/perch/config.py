"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from perch.errors import ConfigurationError

ImportMode = Literal["lazy", "eager"]

_IMPORT_MODES = frozenset({"lazy", "eager"})


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(import_mode="eager", dev_checks=False)
    """

    # Module loading: "lazy" defers loading to render time, "eager" loads on adapt
    import_mode: ImportMode = "lazy"

    # Development checks (empty default export -> EmptyRoute placeholder)
    dev_checks: bool = True

    # Navigation keys never treated as search params in screen ids
    reserved_params: frozenset[str] = frozenset({"screen", "params"})

    # Discovery
    routes_dir: str | Path = "app"

    def __post_init__(self) -> None:
        if self.import_mode not in _IMPORT_MODES:
            msg = (
                f"Unknown import_mode {self.import_mode!r}. "
                f"Expected one of: {', '.join(sorted(_IMPORT_MODES))}"
            )
            raise ConfigurationError(msg)
