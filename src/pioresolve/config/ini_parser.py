"""
PlatformIO.ini configuration reader.

This module reads platformio.ini files and turns an environment section into
resolution params, so a partially configured project can be completed by
the resolver.
"""

import configparser
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from pioresolve.resolve.resolution import ResolutionParams


class PlatformIOConfigError(Exception):
    """Exception raised for platformio.ini configuration errors."""

    pass


class PlatformIOInterpolation(configparser.Interpolation):
    """
    Expands PlatformIO-style ${section.option} references.

    The section name ends at the first dot, so ${env:release.board_build.mcu}
    reads option 'board_build.mcu' of section [env:release]. ${this.option}
    (or ${option}) reads the current section and ${sysenv.NAME} reads an
    environment variable.
    """

    REFERENCE_RE = re.compile(r"\$\{([^}]+)\}")

    def before_get(self, parser, section, option, value, defaults):
        return self._expand(parser, section, option, value, 1)

    def _expand(self, parser, section: str, option: str, value: str, depth: int) -> str:
        if "${" not in value:
            return value
        if depth > configparser.MAX_INTERPOLATION_DEPTH:
            raise configparser.InterpolationDepthError(option, section, value)

        def substitute(match: re.Match) -> str:
            reference = match.group(1)
            ref_section, dot, ref_option = reference.partition(".")
            if not dot:
                ref_section, ref_option = section, reference
            elif ref_section == "sysenv":
                return os.environ.get(ref_option, "")
            elif ref_section == "this":
                ref_section = section

            try:
                raw = parser.get(ref_section, ref_option, raw=True)
            except (configparser.NoSectionError, configparser.NoOptionError):
                raise configparser.InterpolationMissingOptionError(
                    option, section, value, reference
                ) from None
            return self._expand(parser, ref_section, ref_option, raw or "", depth + 1)

        return self.REFERENCE_RE.sub(substitute, value)


class PlatformIOConfig:
    """
    Reader for platformio.ini configuration files.

    Example platformio.ini:
        [env:debug]
        board = esp32dev
        framework = arduino, espidf
        board_build.mcu = esp32
        rust_target = xtensa-esp32-espidf

    Usage:
        config = PlatformIOConfig(Path("platformio.ini"))
        params = config.get_resolution_params(config.get_default_environment())
    """

    # platformio.ini keys read into resolution params
    BOARD_KEY = "board"
    PLATFORM_KEY = "platform"
    FRAMEWORK_KEY = "framework"
    MCU_KEY = "board_build.mcu"
    TARGET_KEY = "rust_target"

    def __init__(self, ini_path: Path):
        """
        Initialize the reader with a platformio.ini file.

        Args:
            ini_path: Path to the platformio.ini file

        Raises:
            PlatformIOConfigError: If the file doesn't exist or cannot be parsed
        """
        self.ini_path = ini_path

        if not ini_path.exists():
            raise PlatformIOConfigError(f"Configuration file not found: {ini_path}")

        self.config = configparser.ConfigParser(
            allow_no_value=True, interpolation=PlatformIOInterpolation()
        )

        try:
            self.config.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise PlatformIOConfigError(f"Failed to parse {ini_path}: {e}") from e

    def get_environments(self) -> List[str]:
        """
        Get list of all environment names defined in the config.

        Returns:
            List of environment names (e.g., ['debug', 'release'])
        """
        envs = []
        for section in self.config.sections():
            if section.startswith("env:"):
                envs.append(section.split(":", 1)[1])
        return envs

    def get_env_config(self, env_name: str) -> Dict[str, str]:
        """
        Get configuration for a specific environment, merged over the base [env] section.

        Args:
            env_name: Name of the environment (e.g., 'debug')

        Returns:
            Dictionary of configuration key-value pairs

        Raises:
            PlatformIOConfigError: If the environment is not defined or cannot be interpolated
        """
        section = f"env:{env_name}"

        if section not in self.config:
            available = ", ".join(self.get_environments())
            raise PlatformIOConfigError(
                f"Environment '{env_name}' not found. "
                + f"Available environments: {available or 'none'}"
            )

        try:
            base_config = dict(self.config["env"]) if "env" in self.config else {}
            env_config = {key: (value or "").strip() for key, value in self.config[section].items()}
        except configparser.Error as e:
            raise PlatformIOConfigError(f"Failed to read environment '{env_name}': {e}") from e

        # Environment-specific values override base values
        return {**{k: (v or "").strip() for k, v in base_config.items()}, **env_config}

    def get_frameworks(self, env_name: str) -> List[str]:
        """
        Parse the framework option of an environment.

        Example:
            For framework = arduino, espidf
            Returns: ['arduino', 'espidf']
        """
        value = self.get_env_config(env_name).get(self.FRAMEWORK_KEY, "")

        frameworks = []
        for line in value.split("\n"):
            for framework in line.split(","):
                framework = framework.strip()
                if framework:
                    frameworks.append(framework)
        return frameworks

    def get_resolution_params(self, env_name: str) -> ResolutionParams:
        """
        Build resolution params from an environment.

        No option is mandatory; missing options stay unset.

        Args:
            env_name: Name of the environment

        Returns:
            ResolutionParams with the options found in the environment
        """
        env_config = self.get_env_config(env_name)

        def option(key: str) -> Optional[str]:
            return env_config.get(key) or None

        return ResolutionParams(
            board=option(self.BOARD_KEY),
            mcu=option(self.MCU_KEY),
            platform=option(self.PLATFORM_KEY),
            frameworks=self.get_frameworks(env_name),
            target=option(self.TARGET_KEY),
        )

    def has_environment(self, env_name: str) -> bool:
        return f"env:{env_name}" in self.config

    def get_default_environment(self) -> Optional[str]:
        """
        Get the default environment from platformio.ini.

        Returns:
            Default environment name, or first available environment, or None

        Example:
            If [platformio] section has default_envs = debug, returns 'debug'
            Otherwise returns the first environment found
        """
        if "platformio" in self.config:
            default_envs = (self.config["platformio"].get("default_envs") or "").strip()
            if default_envs:
                # Can be comma-separated, take the first one
                return default_envs.split(",")[0].strip()

        envs = self.get_environments()
        return envs[0] if envs else None
