"""Board and framework catalogs for pioresolve.

This module provides the catalog interface the resolver queries, an
in-memory implementation, snapshot loading and the PlatformIO-backed client.
"""

from .client import CatalogClient, CatalogTransportError, StaticCatalog
from .platformio import PlatformIOCatalog
from .records import BoardRecord, FrameworkRecord
from .snapshot import catalog_from_dict, load_snapshot

__all__ = [
    "CatalogClient",
    "CatalogTransportError",
    "StaticCatalog",
    "PlatformIOCatalog",
    "BoardRecord",
    "FrameworkRecord",
    "catalog_from_dict",
    "load_snapshot",
]
