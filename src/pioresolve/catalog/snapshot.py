"""Catalog snapshots.

A snapshot is a JSON document holding a dump of the PlatformIO catalog:

    {
        "boards": [
            {"id": "esp32dev", "platform": "espressif32", "mcu": "ESP32",
             "frameworks": ["arduino", "espidf"], ...}
        ],
        "frameworks": [
            {"name": "arduino", "platforms": ["atmelavr", "espressif32", ...]}
        ]
    }

Records use the same keys as PlatformIO's --json-output. Snapshots let the
resolver run without a PlatformIO installation, from a local file or a URL.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import requests

from pioresolve.config.settings import DEFAULT_TIMEOUT

from .client import CatalogTransportError, StaticCatalog
from .records import BoardRecord, FrameworkRecord

logger = logging.getLogger(__name__)


def is_url(source: Union[str, Path]) -> bool:
    return isinstance(source, str) and (source.startswith("http://") or source.startswith("https://"))


def catalog_from_dict(data: Dict[str, Any]) -> StaticCatalog:
    """Build a StaticCatalog from a parsed snapshot document.

    Raises:
        CatalogTransportError: If the document or one of its records is malformed
    """
    if not isinstance(data, dict):
        raise CatalogTransportError("Catalog snapshot must be a JSON object")

    boards = data.get("boards", [])
    frameworks = data.get("frameworks", [])
    if not isinstance(boards, list) or not isinstance(frameworks, list):
        raise CatalogTransportError("Catalog snapshot 'boards' and 'frameworks' must be lists")

    return StaticCatalog(
        boards=[BoardRecord.from_dict(item) for item in boards],
        frameworks=[FrameworkRecord.from_dict(item) for item in frameworks],
    )


def _fetch(url: str, timeout: float) -> Any:
    logger.debug(f"Fetching catalog snapshot from {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise CatalogTransportError(f"Failed to fetch catalog snapshot {url}: {e}") from e
    except ValueError as e:
        raise CatalogTransportError(f"Catalog snapshot {url} is not valid JSON: {e}") from e


def _read(path: Path) -> Any:
    logger.debug(f"Reading catalog snapshot {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise CatalogTransportError(f"Failed to read catalog snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogTransportError(f"Catalog snapshot {path} is not valid JSON: {e}") from e


def load_snapshot(source: Union[str, Path], timeout: float = DEFAULT_TIMEOUT) -> StaticCatalog:
    """
    Load a catalog snapshot from a file or an http(s) URL.

    Args:
        source: Path to a JSON snapshot, or its URL
        timeout: HTTP timeout in seconds

    Returns:
        StaticCatalog over the snapshot's records

    Raises:
        CatalogTransportError: If the snapshot cannot be read or is malformed
    """
    if is_url(source):
        data = _fetch(str(source), timeout)
    else:
        data = _read(Path(source))

    return catalog_from_dict(data)
