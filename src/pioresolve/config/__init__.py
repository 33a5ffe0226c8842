"""Configuration modules for pioresolve."""

from .ini_parser import PlatformIOConfig, PlatformIOConfigError
from .settings import Settings, SettingsError

__all__ = [
    "PlatformIOConfig",
    "PlatformIOConfigError",
    "Settings",
    "SettingsError",
]
