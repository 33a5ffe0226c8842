"""
Command-line interface for pioresolve.

This module provides the `pio-resolve` CLI tool for resolving a complete
board/platform/MCU/frameworks/target combination from partial settings.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pioresolve import __version__
from pioresolve.catalog import CatalogTransportError
from pioresolve.cli_utils import (
    CatalogFactory,
    ErrorFormatter,
    PathValidator,
    ProjectParamsLoader,
    ResolutionFormatter,
    configure_logging,
)
from pioresolve.config import PlatformIOConfigError, Settings, SettingsError
from pioresolve.resolve import (
    ResolutionError,
    ResolutionParams,
    Resolver,
    derive_target,
    target_defaults,
)
from pioresolve.resolve.targets import find_target_rule


@dataclass
class ResolveArgs:
    """Arguments for the resolve command."""

    project_dir: Path
    environment: Optional[str] = None
    board: Optional[str] = None
    mcu: Optional[str] = None
    platform: Optional[str] = None
    frameworks: List[str] = field(default_factory=list)
    target: Optional[str] = None
    mandatory_target: bool = False
    catalog: Optional[str] = None
    json_output: bool = False
    verbose: int = 0


@dataclass
class TargetArgs:
    """Arguments for the target command."""

    mcu: Optional[str] = None
    triple: Optional[str] = None


def resolve_command(args: ResolveArgs) -> None:
    """Resolve the build target of a project.

    Command-line values override the ones read from platformio.ini.

    Examples:
        pio-resolve resolve --board esp32dev -f arduino
        pio-resolve resolve --target xtensa-esp32-espidf --mandatory-target
        pio-resolve resolve path/to/project -e release --json
        pio-resolve resolve --mcu atmega328p --catalog catalog.json
    """
    try:
        project_params = ProjectParamsLoader.load_params(args.project_dir, args.environment)
        params = project_params.merged(
            ResolutionParams(
                board=args.board,
                mcu=args.mcu,
                platform=args.platform,
                frameworks=args.frameworks,
                target=args.target,
            )
        )

        settings = Settings.from_env()
        catalog = CatalogFactory.create(settings, args.catalog)

        resolution = Resolver(catalog, params).resolve(args.mandatory_target)

        if args.json_output:
            print(ResolutionFormatter.format_json(resolution))
        else:
            print(ResolutionFormatter.format_text(resolution))
        sys.exit(0)

    except ResolutionError as e:
        ErrorFormatter.handle_resolution_error(e)
    except CatalogTransportError as e:
        ErrorFormatter.handle_catalog_error(e)
    except (PlatformIOConfigError, SettingsError) as e:
        ErrorFormatter.print_error("Error: Invalid configuration", str(e))
        sys.exit(2)
    except FileNotFoundError as e:
        ErrorFormatter.print_error("Error: File not found", str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose > 0)


def target_command(args: TargetArgs) -> None:
    """Look up the derivation tables.

    Examples:
        pio-resolve target --mcu STM32L476RG      # -> thumbv7em-none-eabihf
        pio-resolve target --triple xtensa-esp32-espidf
    """
    try:
        if args.mcu is not None:
            triple = derive_target(args.mcu)
            rule = find_target_rule(args.mcu)
            print(f"{triple}  ({rule.family})" if rule and rule.family else triple)
        else:
            defaults = target_defaults(args.triple)
            print(f"{'platform:':<12}{defaults.platform}")
            print(f"{'mcu:':<12}{defaults.mcu}")
            print(f"{'frameworks:':<12}{', '.join(defaults.frameworks)}")
        sys.exit(0)

    except ResolutionError as e:
        ErrorFormatter.handle_resolution_error(e)


def main(argv: Optional[List[str]] = None) -> None:
    """pio-resolve - resolve embedded build targets."""
    parser = argparse.ArgumentParser(
        prog="pio-resolve",
        description="Resolve board, platform, MCU, frameworks and target triple against the PlatformIO catalog",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"pio-resolve {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Resolve a complete build target from partial settings",
    )
    resolve_parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory whose platformio.ini provides defaults (default: current directory)",
    )
    resolve_parser.add_argument(
        "-e",
        "--environment",
        default=None,
        help="platformio.ini environment (default: auto-detect)",
    )
    resolve_parser.add_argument("--board", default=None, help="Board id (e.g., esp32dev)")
    resolve_parser.add_argument("--mcu", default=None, help="MCU (e.g., ESP32)")
    resolve_parser.add_argument("--platform", default=None, help="Platform (e.g., espressif32)")
    resolve_parser.add_argument(
        "-f",
        "--framework",
        dest="frameworks",
        action="append",
        default=[],
        help="Framework (repeatable, e.g., -f arduino -f espidf)",
    )
    resolve_parser.add_argument(
        "-t",
        "--target",
        default=None,
        help="Compiler target triple (e.g., xtensa-esp32-espidf)",
    )
    resolve_parser.add_argument(
        "--mandatory-target",
        action="store_true",
        help="Fail if no target defaults can be derived for the target triple",
    )
    resolve_parser.add_argument(
        "--catalog",
        default=None,
        help="Catalog snapshot file or URL to use instead of PlatformIO",
    )
    resolve_parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the resolution as JSON",
    )
    resolve_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show resolution steps (-vv for debug output)",
    )

    # Target command
    target_parser = subparsers.add_parser(
        "target",
        help="Look up the target derivation tables",
    )
    target_group = target_parser.add_mutually_exclusive_group(required=True)
    target_group.add_argument("--mcu", default=None, help="Print the target triple derived from an MCU")
    target_group.add_argument("--triple", default=None, help="Print the defaults of a target triple")

    # Parse arguments
    parsed_args = parser.parse_args(argv)

    # If no command specified, show help
    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    if parsed_args.command == "resolve":
        PathValidator.validate_project_dir(parsed_args.project_dir)
        configure_logging(parsed_args.verbose)

        resolve_args = ResolveArgs(
            project_dir=parsed_args.project_dir,
            environment=parsed_args.environment,
            board=parsed_args.board,
            mcu=parsed_args.mcu,
            platform=parsed_args.platform,
            frameworks=parsed_args.frameworks,
            target=parsed_args.target,
            mandatory_target=parsed_args.mandatory_target,
            catalog=parsed_args.catalog,
            json_output=parsed_args.json_output,
            verbose=parsed_args.verbose,
        )
        resolve_command(resolve_args)
    elif parsed_args.command == "target":
        target_args = TargetArgs(mcu=parsed_args.mcu, triple=parsed_args.triple)
        target_command(target_args)


if __name__ == "__main__":
    main()
