"""pioresolve - resolve embedded build targets against the PlatformIO catalog."""

from pioresolve.catalog import (
    BoardRecord,
    CatalogClient,
    CatalogTransportError,
    FrameworkRecord,
    PlatformIOCatalog,
    StaticCatalog,
    load_snapshot,
)
from pioresolve.resolve import (
    Resolution,
    ResolutionError,
    ResolutionParams,
    Resolver,
    derive_target,
    resolve,
    target_defaults,
)

__version__ = "0.1.0"

__all__ = [
    "Resolver",
    "resolve",
    "Resolution",
    "ResolutionParams",
    "ResolutionError",
    "derive_target",
    "target_defaults",
    "CatalogClient",
    "CatalogTransportError",
    "StaticCatalog",
    "PlatformIOCatalog",
    "BoardRecord",
    "FrameworkRecord",
    "load_snapshot",
]
