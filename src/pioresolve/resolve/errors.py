"""Resolution error taxonomy.

Every way a resolution can fail has its own exception class carrying the
identifiers and values involved, so callers can render an actionable
message or branch on the failure kind without parsing strings.

Hierarchy:
    ResolutionError
    ├── BoardNotFound
    ├── AmbiguousBoard
    ├── CatalogInconsistency
    ├── SourceMismatch
    │   ├── PlatformMismatch
    │   ├── McuMismatch
    │   └── FrameworksMismatch
    ├── UnknownFramework
    ├── UnknownPlatform
    ├── UnsupportedFrameworks
    ├── NoCommonPlatform
    ├── AmbiguousCommonPlatforms
    ├── NoMatchingBoard
    ├── AmbiguousMcu
    ├── UnsupportedTarget
    └── CannotDeriveTarget
"""

from enum import Enum
from typing import Optional, Sequence, Tuple


class Source(Enum):
    """Authoritative information sources a resolution cross-checks."""

    USER = "user"
    BOARD = "board"
    TARGET = "target"

    def describe(self, board: Optional[str] = None, target: Optional[str] = None) -> str:
        """Name this source in a message, e.g. "board 'esp32dev'"."""
        if self is Source.USER:
            return "configured"
        if self is Source.BOARD:
            return f"board '{board}'" if board else "board"
        return f"build target '{target}'" if target else "build target"


def _join(values: Sequence[str]) -> str:
    return ", ".join(values)


class ResolutionError(Exception):
    """Base class for all resolution failures."""

    pass


class BoardNotFound(ResolutionError):
    """The board is unknown, or unknown for the requested platform."""

    def __init__(self, board: str, platform: Optional[str] = None):
        self.board = board
        self.platform = platform
        if platform is None:
            message = f"Configured board '{board}' is not known to the catalog"
        else:
            message = (
                f"None of the catalog boards matching the configured board '{board}' "
                f"supports platform '{platform}'"
            )
        super().__init__(message)


class AmbiguousBoard(ResolutionError):
    """The board id is listed under several platforms and nothing disambiguates it."""

    def __init__(self, board: str, platforms: Sequence[str]):
        self.board = board
        self.platforms: Tuple[str, ...] = tuple(platforms)
        super().__init__(
            f"Configured board '{board}' matches multiple catalog boards on platforms "
            f"[{_join(self.platforms)}]; please specify platform or target for proper resolution"
        )


class CatalogInconsistency(ResolutionError):
    """The catalog lists the same board more than once for one platform."""

    def __init__(self, board: str, platform: str, count: int):
        self.board = board
        self.platform = platform
        self.count = count
        super().__init__(
            f"Catalog lists board '{board}' {count} times for platform '{platform}'"
        )


class SourceMismatch(ResolutionError):
    """Two authoritative sources disagree on a value.

    Attributes:
        left_source, left_value: the first source and what it says
        right_source, right_value: the conflicting source and what it says
        board: board id, when one of the sources is a board record
        target: target triple, when one of the sources is target defaults
    """

    field = "value"

    def __init__(
        self,
        left_source: Source,
        left_value,
        right_source: Source,
        right_value,
        board: Optional[str] = None,
        target: Optional[str] = None,
    ):
        self.left_source = left_source
        self.left_value = left_value
        self.right_source = right_source
        self.right_value = right_value
        self.board = board
        self.target = target
        super().__init__(
            f"{self.field[0].upper()}{self.field[1:]} mismatch: "
            f"{left_source.describe(board, target)} {self.field} {self._render(left_value)} "
            f"does not match {right_source.describe(board, target)} {self.field} "
            f"{self._render(right_value)}"
        )

    @property
    def sources(self) -> Tuple[Source, Source]:
        return (self.left_source, self.right_source)

    @staticmethod
    def _render(value) -> str:
        if isinstance(value, (list, tuple)):
            return f"[{_join(value)}]"
        return f"'{value}'"


class PlatformMismatch(SourceMismatch):
    field = "platform"


class McuMismatch(SourceMismatch):
    field = "MCU"


class FrameworksMismatch(SourceMismatch):
    field = "frameworks"


class UnknownFramework(ResolutionError):
    """Some configured frameworks are not in the framework catalog."""

    def __init__(self, frameworks: Sequence[str]):
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        super().__init__(
            f"(Some of) the configured frameworks [{_join(self.frameworks)}] are not known to the catalog"
        )


class UnknownPlatform(ResolutionError):
    """No platform could be determined, or the platform has no frameworks."""

    def __init__(self, platform: Optional[str] = None):
        self.platform = platform
        if platform is None:
            message = (
                "Cannot select a platform: no platform, framework, board or target was configured"
            )
        else:
            message = (
                f"Configured platform '{platform}' is not known to the catalog: "
                "no framework supports it"
            )
        super().__init__(message)


class UnsupportedFrameworks(ResolutionError):
    """Some configured frameworks are not available for the configured platform."""

    def __init__(self, platform: str, frameworks: Sequence[str]):
        self.platform = platform
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        super().__init__(
            f"(Some of) the configured frameworks [{_join(self.frameworks)}] "
            f"are not supported by the configured platform '{platform}'"
        )


class NoCommonPlatform(ResolutionError):
    """The configured frameworks share no platform."""

    def __init__(self, frameworks: Sequence[str]):
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        super().__init__(
            f"Cannot select a platform: configured frameworks [{_join(self.frameworks)}] "
            "do not have a common platform"
        )


class AmbiguousCommonPlatforms(ResolutionError):
    """The configured frameworks share more than one platform."""

    def __init__(self, frameworks: Sequence[str], platforms: Sequence[str]):
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        self.platforms: Tuple[str, ...] = tuple(platforms)
        super().__init__(
            f"Cannot select a platform: configured frameworks [{_join(self.frameworks)}] "
            f"have multiple common platforms: [{_join(self.platforms)}]"
        )


class NoMatchingBoard(ResolutionError):
    """No catalog board supports the resolved platform, frameworks (and MCU)."""

    def __init__(self, platform: str, frameworks: Sequence[str], mcu: Optional[str] = None):
        self.platform = platform
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        self.mcu = mcu
        mcu_part = f", MCU '{mcu}'" if mcu is not None else ""
        super().__init__(
            f"Configured platform '{platform}'{mcu_part} and frameworks [{_join(self.frameworks)}] "
            "do not have any matching board in the catalog"
        )


class AmbiguousMcu(ResolutionError):
    """The matching boards are built around different MCUs."""

    def __init__(self, platform: str, frameworks: Sequence[str], mcus: Sequence[str]):
        self.platform = platform
        self.frameworks: Tuple[str, ...] = tuple(frameworks)
        self.mcus: Tuple[str, ...] = tuple(mcus)
        super().__init__(
            f"Configured platform '{platform}' and frameworks [{_join(self.frameworks)}] "
            f"match multiple MCUs in the catalog: [{_join(self.mcus)}]"
        )


class UnsupportedTarget(ResolutionError):
    """No target defaults exist for the triple (or no triple was available)."""

    def __init__(self, target: Optional[str]):
        self.target = target
        if target is None:
            message = "Cannot derive default platform, MCU and frameworks: no build target configured"
        else:
            message = f"Cannot derive default platform, MCU and frameworks for target '{target}'"
        super().__init__(message)


class CannotDeriveTarget(ResolutionError):
    """No rule maps the MCU to a target triple."""

    def __init__(self, mcu: str):
        self.mcu = mcu
        super().__init__(
            f"Cannot derive a target triple for MCU '{mcu}'. Specify one manually"
        )
