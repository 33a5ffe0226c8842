"""Catalog records for boards and frameworks.

The field names follow the JSON emitted by ``pio boards --json-output`` and
``pio platform frameworks --json-output``. Only the fields the resolver needs
are mandatory; the rest are kept for display and default to empty values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .client import CatalogTransportError


def _require_str(data: Dict[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise CatalogTransportError(
            f"Malformed {kind} record: '{key}' must be a string, got {value!r}"
        )
    return value


def _require_str_list(data: Dict[str, Any], key: str, kind: str) -> Tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogTransportError(
            f"Malformed {kind} record: '{key}' must be a list of strings, got {value!r}"
        )
    return tuple(value)


def _int(data: Dict[str, Any], key: str, kind: str) -> int:
    value = data.get(key) or 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CatalogTransportError(
            f"Malformed {kind} record: '{key}' must be an integer, got {value!r}"
        ) from e


@dataclass(frozen=True)
class BoardRecord:
    """A board as listed by the catalog.

    The same id may appear several times under different platforms.
    """

    id: str
    platform: str
    mcu: str
    frameworks: Tuple[str, ...] = field(default_factory=tuple)
    name: str = ""
    vendor: str = ""
    fcpu: int = 0
    ram: int = 0
    rom: int = 0
    url: str = ""

    def __post_init__(self):
        object.__setattr__(self, "frameworks", tuple(self.frameworks))

    def supports(self, frameworks) -> bool:
        """Check whether every given framework is in this board's list."""
        return all(f in self.frameworks for f in frameworks)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardRecord":
        """
        Build a record from one element of PlatformIO's boards JSON.

        Raises:
            CatalogTransportError: If a mandatory field is missing or malformed
        """
        if not isinstance(data, dict):
            raise CatalogTransportError(f"Malformed board record: {data!r}")

        return cls(
            id=_require_str(data, "id", "board"),
            platform=_require_str(data, "platform", "board"),
            mcu=_require_str(data, "mcu", "board"),
            frameworks=_require_str_list(data, "frameworks", "board"),
            name=str(data.get("name") or ""),
            vendor=str(data.get("vendor") or ""),
            fcpu=_int(data, "fcpu", "board"),
            ram=_int(data, "ram", "board"),
            rom=_int(data, "rom", "board"),
            url=str(data.get("url") or ""),
        )


@dataclass(frozen=True)
class FrameworkRecord:
    """A framework and the platforms that support it."""

    name: str
    platforms: Tuple[str, ...] = field(default_factory=tuple)
    title: str = ""
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "platforms", tuple(self.platforms))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrameworkRecord":
        """
        Build a record from one element of PlatformIO's frameworks JSON.

        Raises:
            CatalogTransportError: If a mandatory field is missing or malformed
        """
        if not isinstance(data, dict):
            raise CatalogTransportError(f"Malformed framework record: {data!r}")

        return cls(
            name=_require_str(data, "name", "framework"),
            platforms=_require_str_list(data, "platforms", "framework"),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
        )
