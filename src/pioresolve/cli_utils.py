"""CLI utility functions for pioresolve.

This module provides common utilities used across CLI commands including:
- Loading resolution params from platformio.ini
- Logging setup
- Result and error formatting
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pioresolve.catalog import CatalogClient, PlatformIOCatalog, load_snapshot
from pioresolve.config import PlatformIOConfig, Settings
from pioresolve.resolve import Resolution, ResolutionError, ResolutionParams


class ProjectParamsLoader:
    """Loads resolution params from a project's platformio.ini."""

    @staticmethod
    def load_params(project_dir: Path, env_name: Optional[str] = None) -> ResolutionParams:
        """Read params from platformio.ini, if the project has one.

        Args:
            project_dir: Project directory that may contain platformio.ini
            env_name: Optional explicit environment name

        Returns:
            Params from the environment, or empty params when there is no
            platformio.ini (or it defines no environment)

        Raises:
            FileNotFoundError: If env_name is given but there is no platformio.ini
            PlatformIOConfigError: If the file cannot be parsed or lacks env_name
        """
        ini_path = project_dir / "platformio.ini"
        if not ini_path.exists():
            if env_name:
                raise FileNotFoundError(f"platformio.ini not found in {project_dir}")
            return ResolutionParams()

        config = PlatformIOConfig(ini_path)
        env_name = env_name or config.get_default_environment()
        if not env_name:
            return ResolutionParams()

        return config.get_resolution_params(env_name)


class CatalogFactory:
    """Creates the catalog client a command should use."""

    @staticmethod
    def create(settings: Settings, source: Optional[str] = None) -> CatalogClient:
        """Create a snapshot catalog when a source is given (or configured), else PlatformIO.

        Args:
            settings: Runtime settings
            source: Optional snapshot path or URL overriding PIORESOLVE_CATALOG
        """
        source = source or settings.catalog
        if source:
            return load_snapshot(source, timeout=settings.timeout)
        return PlatformIOCatalog.from_settings(settings)


def configure_logging(verbosity: int) -> None:
    """Route log records to stderr; -v shows INFO, -vv shows DEBUG."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


class ResolutionFormatter:
    """Formats a resolution for display."""

    @staticmethod
    def format_text(resolution: Resolution) -> str:
        """Format as aligned 'key: value' lines.

        Example:
            board:      esp32dev
            platform:   espressif32
            mcu:        ESP32
            frameworks: arduino
            target:     xtensa-esp32-espidf
        """
        rows = [
            ("board", resolution.board),
            ("platform", resolution.platform),
            ("mcu", resolution.mcu),
            ("frameworks", ", ".join(resolution.frameworks)),
            ("target", resolution.target),
        ]
        return "\n".join(f"{key + ':':<12}{value}" for key, value in rows)

    @staticmethod
    def format_json(resolution: Resolution) -> str:
        return json.dumps(resolution.to_dict(), indent=2)


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message to stderr.

        Args:
            title: Error title (e.g., "Resolution failed")
            message: Error message details
        """
        print(file=sys.stderr)
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}", file=sys.stderr)
        print(file=sys.stderr)
        print(message, file=sys.stderr)
        print(file=sys.stderr)

    @staticmethod
    def print_warning(message: str) -> None:
        print(file=sys.stderr)
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}", file=sys.stderr)

    @staticmethod
    def handle_resolution_error(error: ResolutionError) -> None:
        """Report a resolution error and exit with status 1."""
        ErrorFormatter.print_error(f"Resolution failed: {type(error).__name__}", str(error))
        sys.exit(1)

    @staticmethod
    def handle_catalog_error(error: Exception) -> None:
        """Report a catalog transport error and exit with status 2."""
        ErrorFormatter.print_error("Error: Catalog unavailable", str(error))
        print(
            "Make sure PlatformIO is installed (or set PIORESOLVE_PIO_EXE), "
            "or pass a catalog snapshot with --catalog.",
            file=sys.stderr,
        )
        sys.exit(2)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        ErrorFormatter.print_warning("Resolution interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:", file=sys.stderr)
            print(traceback.format_exc(), file=sys.stderr)

        sys.exit(1)


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_project_dir(project_dir: Path) -> None:
        """Validate that project directory exists and is a directory.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not project_dir.exists():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path does not exist: {project_dir}{ErrorFormatter.RESET}",
                file=sys.stderr,
            )
            sys.exit(2)
        if not project_dir.is_dir():
            print(
                f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {project_dir}{ErrorFormatter.RESET}",
                file=sys.stderr,
            )
            sys.exit(2)
