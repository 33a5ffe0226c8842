"""Environment-based settings for pioresolve.

Settings can be overridden with the following environment variables:

    PIORESOLVE_PIO_EXE   PlatformIO executable (default: 'pio' on PATH)
    PIORESOLVE_CORE_DIR  PlatformIO core directory (PLATFORMIO_CORE_DIR)
    PIORESOLVE_CATALOG   Catalog snapshot file or URL used instead of PlatformIO
    PIORESOLVE_TIMEOUT   Timeout in seconds for catalog queries (default: 120)
"""

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TIMEOUT = 120.0


class SettingsError(Exception):
    """Raised when an environment variable holds an invalid value."""

    pass


@dataclass
class Settings:
    """Runtime settings for catalog access."""

    pio_exe: str = "pio"
    core_dir: Optional[Path] = None
    catalog: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Raises:
            SettingsError: If PIORESOLVE_TIMEOUT is not a positive number
        """
        if environ is None:
            environ = os.environ

        pio_exe = environ.get("PIORESOLVE_PIO_EXE") or shutil.which("pio") or "pio"

        core_dir_env = environ.get("PIORESOLVE_CORE_DIR")
        core_dir = Path(core_dir_env).expanduser() if core_dir_env else None

        timeout = DEFAULT_TIMEOUT
        timeout_env = environ.get("PIORESOLVE_TIMEOUT")
        if timeout_env:
            try:
                timeout = float(timeout_env)
            except ValueError as e:
                raise SettingsError(f"PIORESOLVE_TIMEOUT must be a number, got '{timeout_env}'") from e
            if timeout <= 0:
                raise SettingsError(f"PIORESOLVE_TIMEOUT must be positive, got '{timeout_env}'")

        return cls(
            pio_exe=pio_exe,
            core_dir=core_dir,
            catalog=environ.get("PIORESOLVE_CATALOG") or None,
            timeout=timeout,
        )
