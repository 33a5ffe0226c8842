"""Catalog client interface.

The resolver only talks to the catalog through ``CatalogClient``, so tests
and offline tools can hand it a ``StaticCatalog`` while the command line uses
``PlatformIOCatalog``.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from .records import BoardRecord, FrameworkRecord


class CatalogTransportError(Exception):
    """Raised when the catalog cannot be queried or returns malformed data."""

    pass


class CatalogClient(ABC):
    """Queries boards and frameworks.

    Implementations must be stateless and reentrant, return records in
    catalog order and, when a filter is given, only records whose
    identifier equals it exactly.
    """

    @abstractmethod
    def list_boards(self, board_id: Optional[str] = None) -> List["BoardRecord"]:
        """List boards, optionally only those with the given id.

        Raises:
            CatalogTransportError: If the catalog cannot be queried
        """

    @abstractmethod
    def list_frameworks(self, name: Optional[str] = None) -> List["FrameworkRecord"]:
        """List frameworks, optionally only the one with the given name.

        Raises:
            CatalogTransportError: If the catalog cannot be queried
        """


class StaticCatalog(CatalogClient):
    """In-memory catalog over fixed record lists."""

    def __init__(
        self,
        boards: Iterable["BoardRecord"] = (),
        frameworks: Iterable["FrameworkRecord"] = (),
    ):
        self.boards = list(boards)
        self.frameworks = list(frameworks)

    def list_boards(self, board_id: Optional[str] = None) -> List["BoardRecord"]:
        if board_id is None:
            return list(self.boards)
        return [b for b in self.boards if b.id == board_id]

    def list_frameworks(self, name: Optional[str] = None) -> List["FrameworkRecord"]:
        if name is None:
            return list(self.frameworks)
        return [f for f in self.frameworks if f.name == name]

    def __repr__(self) -> str:
        return f"StaticCatalog(boards={len(self.boards)}, frameworks={len(self.frameworks)})"
