"""Value types consumed and produced by the resolver."""

from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Sequence, Tuple, Union


def _as_tuple(values: Union[Sequence[str], str, None]) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass(frozen=True)
class ResolutionParams:
    """Partial, user-supplied constraints.

    Every field is optional. Frameworks keep the order they were given in;
    an empty sequence means "no framework configured".
    """

    board: Optional[str] = None
    mcu: Optional[str] = None
    platform: Optional[str] = None
    frameworks: Tuple[str, ...] = field(default_factory=tuple)
    target: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "frameworks", _as_tuple(self.frameworks))

    def merged(self, overrides: "ResolutionParams") -> "ResolutionParams":
        """Return a copy where every field set in ``overrides`` replaces this one."""
        return replace(
            self,
            board=overrides.board if overrides.board is not None else self.board,
            mcu=overrides.mcu if overrides.mcu is not None else self.mcu,
            platform=overrides.platform if overrides.platform is not None else self.platform,
            frameworks=overrides.frameworks or self.frameworks,
            target=overrides.target if overrides.target is not None else self.target,
        )


@dataclass(frozen=True)
class TargetDefaults:
    """Default platform, MCU and frameworks for a compiler target triple."""

    platform: str
    mcu: str
    frameworks: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, "frameworks", _as_tuple(self.frameworks))


@dataclass(frozen=True)
class Resolution:
    """A fully resolved, mutually consistent build target."""

    board: str
    platform: str
    mcu: str
    frameworks: Tuple[str, ...]
    target: str

    def __post_init__(self):
        frameworks = _as_tuple(self.frameworks)
        if not frameworks:
            raise ValueError("A resolution needs at least one framework")
        object.__setattr__(self, "frameworks", frameworks)

    def to_params(self) -> ResolutionParams:
        """Express this resolution as (fully specified) resolution params."""
        return ResolutionParams(
            board=self.board,
            mcu=self.mcu,
            platform=self.platform,
            frameworks=self.frameworks,
            target=self.target,
        )

    def to_dict(self) -> Dict[str, object]:
        return {
            "board": self.board,
            "platform": self.platform,
            "mcu": self.mcu,
            "frameworks": list(self.frameworks),
            "target": self.target,
        }

    def __str__(self) -> str:
        return (
            f"board '{self.board}', platform '{self.platform}', MCU '{self.mcu}', "
            f"frameworks [{', '.join(self.frameworks)}], target '{self.target}'"
        )
