"""PlatformIO-backed catalog.

Design:
    - Wraps ``pio boards`` and ``pio platform frameworks`` with --json-output
    - Re-applies the id/name filter exactly (PlatformIO searches fuzzily)
    - Turns every failure into CatalogTransportError
"""

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Any, List, Optional

from pioresolve.config.settings import DEFAULT_TIMEOUT, Settings
from .client import CatalogClient, CatalogTransportError
from .records import BoardRecord, FrameworkRecord

logger = logging.getLogger(__name__)


class PlatformIOCatalog(CatalogClient):
    """Catalog answered by the PlatformIO command line."""

    def __init__(
        self,
        pio_exe: str = "pio",
        core_dir: Optional[Path] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the catalog.

        Args:
            pio_exe: PlatformIO executable name or path
            core_dir: Optional PlatformIO core directory (PLATFORMIO_CORE_DIR)
            timeout: Timeout in seconds for each command
        """
        self.pio_exe = pio_exe
        self.core_dir = core_dir
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "PlatformIOCatalog":
        return cls(pio_exe=settings.pio_exe, core_dir=settings.core_dir, timeout=settings.timeout)

    def list_boards(self, board_id: Optional[str] = None) -> List[BoardRecord]:
        args = ["boards"]
        if board_id is not None:
            args.append(board_id)

        boards = [BoardRecord.from_dict(item) for item in self._json(args)]

        if board_id is not None:
            boards = [b for b in boards if b.id == board_id]
        return boards

    def list_frameworks(self, name: Optional[str] = None) -> List[FrameworkRecord]:
        args = ["platform", "frameworks"]
        if name is not None:
            args.append(name)

        frameworks = [FrameworkRecord.from_dict(item) for item in self._json(args)]

        if name is not None:
            frameworks = [f for f in frameworks if f.name == name]
        return frameworks

    def _env(self) -> dict:
        env = os.environ.copy()
        if self.core_dir is not None:
            env["PLATFORMIO_CORE_DIR"] = str(self.core_dir)
        return env

    def _json(self, args: List[str]) -> List[Any]:
        """Run a PlatformIO command with --json-output and parse the list it prints.

        Raises:
            CatalogTransportError: If the command cannot run, fails, times out,
                or does not print a JSON list
        """
        cmd = [self.pio_exe, *args, "--json-output"]
        logger.debug(f"Running PlatformIO command: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=self._env(),
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise CatalogTransportError(
                f"PlatformIO executable not found: {self.pio_exe}. "
                + "Install PlatformIO or set PIORESOLVE_PIO_EXE"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CatalogTransportError(
                f"PlatformIO command timed out after {self.timeout}s: {' '.join(cmd)}"
            ) from e
        except KeyboardInterrupt as ke:
            from pioresolve.interrupt_utils import handle_keyboard_interrupt_properly

            handle_keyboard_interrupt_properly(ke)
            raise  # Never reached, but satisfies type checker
        except OSError as e:
            raise CatalogTransportError(f"Failed to run {' '.join(cmd)}: {e}") from e

        if result.returncode != 0:
            raise CatalogTransportError(
                f"PlatformIO returned status code {result.returncode} "
                + f"and error stream: {result.stderr.strip()}"
            )

        try:
            data = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise CatalogTransportError(
                f"PlatformIO printed invalid JSON for {' '.join(args)}: {e}"
            ) from e

        if not isinstance(data, list):
            raise CatalogTransportError(
                f"PlatformIO printed {type(data).__name__} instead of a list for {' '.join(args)}"
            )
        return data

    def __repr__(self) -> str:
        return f"PlatformIOCatalog(pio_exe='{self.pio_exe}', core_dir={self.core_dir})"
