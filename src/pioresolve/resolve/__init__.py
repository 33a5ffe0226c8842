"""Build target resolution for pioresolve."""

from .errors import (
    AmbiguousBoard,
    AmbiguousCommonPlatforms,
    AmbiguousMcu,
    BoardNotFound,
    CannotDeriveTarget,
    CatalogInconsistency,
    FrameworksMismatch,
    McuMismatch,
    NoCommonPlatform,
    NoMatchingBoard,
    PlatformMismatch,
    ResolutionError,
    Source,
    SourceMismatch,
    UnknownFramework,
    UnknownPlatform,
    UnsupportedFrameworks,
    UnsupportedTarget,
)
from .resolution import Resolution, ResolutionParams, TargetDefaults
from .resolver import Resolver, resolve
from .targets import MCU_TARGET_RULES, TARGET_DEFAULTS, derive_target, target_defaults

__all__ = [
    "Resolver",
    "resolve",
    "Resolution",
    "ResolutionParams",
    "TargetDefaults",
    "TARGET_DEFAULTS",
    "MCU_TARGET_RULES",
    "target_defaults",
    "derive_target",
    "ResolutionError",
    "Source",
    "SourceMismatch",
    "BoardNotFound",
    "AmbiguousBoard",
    "CatalogInconsistency",
    "PlatformMismatch",
    "McuMismatch",
    "FrameworksMismatch",
    "UnknownFramework",
    "UnknownPlatform",
    "UnsupportedFrameworks",
    "NoCommonPlatform",
    "AmbiguousCommonPlatforms",
    "NoMatchingBoard",
    "AmbiguousMcu",
    "UnsupportedTarget",
    "CannotDeriveTarget",
]
