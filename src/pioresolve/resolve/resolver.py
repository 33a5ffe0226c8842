"""
Build target resolver.

This module turns partially specified constraints (board, MCU, platform,
frameworks, target triple) into a complete Resolution, cross-checking them
against the catalog and the target derivation tables.

Two paths:
    - Board configured: the board record is authoritative; the platform,
      MCU and frameworks are validated against it and filled from it.
    - No board: platform and frameworks are narrowed through the framework
      catalog, then the first board supporting them is picked.

Any disagreement between two sources (configured value, board record,
target defaults) stops the resolution with a dedicated ResolutionError.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from pioresolve.catalog.client import CatalogClient
from pioresolve.catalog.records import BoardRecord, FrameworkRecord

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
    Source,
    UnknownFramework,
    UnknownPlatform,
    UnsupportedFrameworks,
    UnsupportedTarget,
)
from .resolution import Resolution, ResolutionParams, TargetDefaults
from .targets import derive_target, target_defaults

logger = logging.getLogger(__name__)


def same_mcu(mcu1: str, mcu2: str) -> bool:
    """MCU identifiers compare case-insensitively ('ESP32' == 'esp32')."""
    return mcu1.lower() == mcu2.lower()


def _intersects(frameworks1: Iterable[str], frameworks2: Iterable[str]) -> bool:
    return bool(set(frameworks1) & set(frameworks2))


def _distinct(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _join(values: Iterable[str]) -> str:
    return ", ".join(values)


class Resolver:
    """
    Resolves a complete build target from partial constraints.

    The resolver keeps no state between calls: every call to resolve()
    queries the catalog again.

    Usage:
        resolver = Resolver(catalog, ResolutionParams(board="esp32dev"))
        resolution = resolver.resolve()
    """

    def __init__(self, catalog: CatalogClient, params: Optional[ResolutionParams] = None):
        """
        Initialize the resolver.

        Args:
            catalog: Catalog client queried for boards and frameworks
            params: Constraints to resolve (default: nothing configured)
        """
        self.catalog = catalog
        self.params = params if params is not None else ResolutionParams()

    def resolve(self, mandatory_target_resolution: bool = False) -> Resolution:
        """
        Resolve the configured constraints.

        Args:
            mandatory_target_resolution: If True, failing to find target
                defaults for the configured (or MCU-derived) target triple is
                an error. If False, target-based checks are skipped instead.

        Returns:
            Resolution with every field set

        Raises:
            ResolutionError: If the constraints contradict each other or the catalog
            CatalogTransportError: If the catalog cannot be queried
        """
        logger.debug(f"Resolving {self.params}")

        if self.params.board is not None:
            resolution = self._resolve_by_board(mandatory_target_resolution)
        else:
            resolution = self._resolve_all(mandatory_target_resolution)

        logger.info(f"Resolved {resolution}")
        return resolution

    # Target defaults

    def _lookup_target_defaults(
        self, mandatory: bool
    ) -> Tuple[Optional[str], Optional[TargetDefaults]]:
        """
        Find the target defaults for the configured target, or the configured MCU.

        Returns:
            Tuple of (target triple, defaults); either may be None when
            resolution is not mandatory

        Raises:
            UnsupportedTarget: If mandatory and no triple (or no defaults) exist
            CannotDeriveTarget: If mandatory and the configured MCU maps to no triple
            McuMismatch: If mandatory and the MCU-derived defaults name another MCU
        """
        target = self.params.target
        derived = False

        if target is None and self.params.mcu is not None:
            try:
                target = derive_target(self.params.mcu)
                derived = True
            except CannotDeriveTarget:
                if mandatory:
                    raise
                logger.debug(f"No target triple for MCU '{self.params.mcu}', skipping target defaults")
                return None, None

        if target is None:
            if mandatory:
                raise UnsupportedTarget(None)
            return None, None

        try:
            defaults = target_defaults(target)
        except UnsupportedTarget:
            if mandatory:
                raise
            logger.debug(f"No defaults for target '{target}', skipping target checks")
            return target, None

        if derived and not same_mcu(defaults.mcu, self.params.mcu):
            # The triple is shared with other MCUs; its defaults describe another part
            if mandatory:
                raise McuMismatch(Source.USER, self.params.mcu, Source.TARGET, defaults.mcu, target=target)
            logger.debug(
                f"Defaults of target '{target}' describe MCU '{defaults.mcu}', "
                + f"not the configured MCU '{self.params.mcu}'; skipping target defaults"
            )
            return target, None

        return target, defaults

    def _check_board_against_target(
        self, board: BoardRecord, defaults: TargetDefaults, target: str
    ) -> None:
        if board.platform != defaults.platform:
            raise PlatformMismatch(
                Source.BOARD, board.platform, Source.TARGET, defaults.platform,
                board=board.id, target=target,
            )
        if not same_mcu(board.mcu, defaults.mcu):
            raise McuMismatch(
                Source.BOARD, board.mcu, Source.TARGET, defaults.mcu,
                board=board.id, target=target,
            )
        if not _intersects(board.frameworks, defaults.frameworks):
            raise FrameworksMismatch(
                Source.BOARD, board.frameworks, Source.TARGET, defaults.frameworks,
                board=board.id, target=target,
            )

    def _check_configured_against_target(self, defaults: TargetDefaults, target: str) -> None:
        """Cross-check the configured platform, MCU and frameworks against target defaults."""
        params = self.params

        if params.platform is not None and params.platform != defaults.platform:
            raise PlatformMismatch(
                Source.USER, params.platform, Source.TARGET, defaults.platform, target=target
            )

        if params.mcu is not None and not same_mcu(params.mcu, defaults.mcu):
            raise McuMismatch(Source.USER, params.mcu, Source.TARGET, defaults.mcu, target=target)

        if params.frameworks and not _intersects(params.frameworks, defaults.frameworks):
            raise FrameworksMismatch(
                Source.USER, params.frameworks, Source.TARGET, defaults.frameworks, target=target
            )

    # Board configured

    def _resolve_by_board(self, mandatory: bool) -> Resolution:
        params = self.params
        board_id = params.board

        boards = [b for b in self.catalog.list_boards(board_id) if b.id == board_id]
        if not boards:
            raise BoardNotFound(board_id)

        target, defaults = self._lookup_target_defaults(mandatory)

        if len(boards) > 1:
            board = self._disambiguate_board(board_id, boards, defaults)
        else:
            board = boards[0]

        platform = params.platform
        mcu = params.mcu
        frameworks = list(params.frameworks)

        # Before the target checks, whose defaults may derive from this MCU
        if mcu is not None and not same_mcu(mcu, board.mcu):
            raise McuMismatch(Source.BOARD, board.mcu, Source.USER, mcu, board=board.id)

        if defaults is not None:
            self._check_board_against_target(board, defaults, target)
            self._check_configured_against_target(defaults, target)

        if platform is not None and platform != board.platform:
            raise PlatformMismatch(Source.BOARD, board.platform, Source.USER, platform, board=board.id)
        if platform is None:
            logger.info(f"Configuring platform '{board.platform}' supported by the configured board '{board.id}'")

        if mcu is None:
            logger.info(f"Configuring MCU '{board.mcu}' supported by the configured board '{board.id}'")

        if frameworks:
            if not board.supports(frameworks):
                raise FrameworksMismatch(
                    Source.BOARD, board.frameworks, Source.USER, tuple(frameworks), board=board.id
                )
        else:
            frameworks = [self._default_board_framework(board, defaults)]

        return self._finish(board, frameworks)

    def _disambiguate_board(
        self, board_id: str, boards: List[BoardRecord], defaults: Optional[TargetDefaults]
    ) -> BoardRecord:
        """Pick the one board record for the configured (or target-derived) platform."""
        if self.params.platform is not None:
            platform = self.params.platform
        elif defaults is not None:
            platform = defaults.platform
        else:
            raise AmbiguousBoard(board_id, _distinct(b.platform for b in boards))

        matching = [b for b in boards if b.platform == platform]
        if not matching:
            raise BoardNotFound(board_id, platform)
        if len(matching) > 1:
            raise CatalogInconsistency(board_id, platform, len(matching))
        return matching[0]

    def _default_board_framework(self, board: BoardRecord, defaults: Optional[TargetDefaults]) -> str:
        if not board.frameworks:
            raise NoMatchingBoard(board.platform, (), board.mcu)

        if defaults is not None:
            # Intersection is non-empty, checked against the target before
            framework = next(f for f in defaults.frameworks if f in board.frameworks)
            source = "derived from the build target"
        else:
            framework = board.frameworks[0]
            source = f"supported by the configured board '{board.id}'"

        logger.info(
            f"Configuring framework '{framework}' from the frameworks "
            + f"[{_join(board.frameworks)}] {source}"
        )
        return framework

    # No board configured

    def _resolve_all(self, mandatory: bool) -> Resolution:
        params = self.params
        platform = params.platform
        mcu = params.mcu
        frameworks = list(params.frameworks)

        target, defaults = self._lookup_target_defaults(mandatory)
        if defaults is not None:
            self._check_configured_against_target(defaults, target)

            if platform is None:
                logger.info(f"Configuring platform '{defaults.platform}' derived from the build target '{target}'")
                platform = defaults.platform
            if mcu is None:
                logger.info(f"Configuring MCU '{defaults.mcu}' derived from the build target '{target}'")
                mcu = defaults.mcu
            if not frameworks:
                logger.info(
                    f"Configuring framework '{defaults.frameworks[0]}' from the frameworks "
                    + f"[{_join(defaults.frameworks)}] derived from the build target '{target}'"
                )
                frameworks = [defaults.frameworks[0]]

        catalog_frameworks: List[FrameworkRecord] = []
        query_frameworks = bool(params.frameworks) or platform is None or not frameworks
        if query_frameworks:
            catalog_frameworks = self.catalog.list_frameworks()

        if params.frameworks:
            known = {f.name for f in catalog_frameworks}
            missing = [f for f in params.frameworks if f not in known]
            if missing:
                raise UnknownFramework(missing)

        if platform is None:
            if not frameworks:
                raise UnknownPlatform()
            platform = self._common_platform(frameworks, catalog_frameworks)
        elif query_frameworks:
            frameworks = self._frameworks_for_platform(platform, frameworks, catalog_frameworks)

        boards = [
            b for b in self.catalog.list_boards() if b.platform == platform and b.supports(frameworks)
        ]
        logger.debug(
            f"Boards supporting platform '{platform}' and frameworks [{_join(frameworks)}]: "
            + f"[{_join(b.id for b in boards)}]"
        )

        if not boards:
            raise NoMatchingBoard(platform, frameworks)

        if mcu is not None:
            boards = [b for b in boards if same_mcu(b.mcu, mcu)]
            if not boards:
                raise NoMatchingBoard(platform, frameworks, mcu)
        else:
            mcus = _distinct(b.mcu for b in boards)
            if len(mcus) > 1:
                raise AmbiguousMcu(platform, frameworks, mcus)

            logger.info(
                f"Configuring MCU '{mcus[0]}' which supports platform '{platform}' "
                + f"and frameworks [{_join(frameworks)}]"
            )

        board = boards[0]
        if len(boards) > 1:
            # Depends on catalog order, which the catalog does not promise to keep stable
            logger.warning(
                f"Multiple boards match platform '{platform}', MCU '{board.mcu}' and frameworks "
                + f"[{_join(frameworks)}]: [{_join(b.id for b in boards)}]; picking '{board.id}'"
            )
        else:
            logger.info(f"Configuring board '{board.id}' which supports platform '{platform}'")

        return self._finish(board, frameworks)

    def _common_platform(
        self, frameworks: Sequence[str], catalog_frameworks: Sequence[FrameworkRecord]
    ) -> str:
        """Find the single platform shared by all frameworks.

        Raises:
            NoCommonPlatform: If the frameworks share no platform
            AmbiguousCommonPlatforms: If they share more than one
        """
        platforms: Optional[List[str]] = None
        for name in frameworks:
            for record in catalog_frameworks:
                if record.name != name:
                    continue
                if platforms is None:
                    platforms = _distinct(record.platforms)
                else:
                    platforms = [p for p in platforms if p in record.platforms]

        if not platforms:
            raise NoCommonPlatform(frameworks)
        if len(platforms) > 1:
            raise AmbiguousCommonPlatforms(frameworks, platforms)

        logger.info(
            f"Configuring platform '{platforms[0]}' as the only common one of the "
            + f"frameworks [{_join(frameworks)}]"
        )
        return platforms[0]

    def _frameworks_for_platform(
        self,
        platform: str,
        frameworks: Sequence[str],
        catalog_frameworks: Sequence[FrameworkRecord],
    ) -> List[str]:
        """Check the frameworks against a known platform, or pick its first framework.

        Raises:
            UnknownPlatform: If no catalog framework supports the platform
            UnsupportedFrameworks: If some frameworks are not available for it
        """
        supporting = [f.name for f in catalog_frameworks if platform in f.platforms]
        if not supporting:
            raise UnknownPlatform(platform)

        if frameworks:
            unsupported = [f for f in frameworks if f not in supporting]
            if unsupported:
                raise UnsupportedFrameworks(platform, unsupported)
            return list(frameworks)

        logger.info(
            f"Configuring framework '{supporting[0]}' from the frameworks "
            + f"[{_join(supporting)}] matching the configured platform '{platform}'"
        )
        return [supporting[0]]

    # Completion

    def _finish(self, board: BoardRecord, frameworks: Sequence[str]) -> Resolution:
        """Fix the target triple and build the resolution from the chosen board."""
        target = self.params.target
        if target is None:
            target = derive_target(board.mcu)
            logger.info(f"Configuring target '{target}' derived from MCU '{board.mcu}'")
            self._check_derived_target(target, board, frameworks)

        return Resolution(
            board=board.id,
            platform=board.platform,
            mcu=board.mcu,
            frameworks=tuple(frameworks),
            target=target,
        )

    def _check_derived_target(self, target: str, board: BoardRecord, frameworks: Sequence[str]) -> None:
        """Verify the resolved values against the defaults of an MCU-derived triple."""
        try:
            defaults = target_defaults(target)
        except UnsupportedTarget:
            return

        # Shared triples carry the defaults of one MCU only
        if not same_mcu(defaults.mcu, board.mcu):
            return

        if board.platform != defaults.platform:
            raise PlatformMismatch(
                Source.BOARD, board.platform, Source.TARGET, defaults.platform,
                board=board.id, target=target,
            )
        if not _intersects(frameworks, defaults.frameworks):
            raise FrameworksMismatch(
                Source.BOARD, tuple(frameworks), Source.TARGET, defaults.frameworks,
                board=board.id, target=target,
            )


def resolve(
    catalog: CatalogClient,
    params: ResolutionParams,
    mandatory_target_resolution: bool = False,
) -> Resolution:
    """
    Resolve params against a catalog.

    Shortcut for Resolver(catalog, params).resolve(mandatory_target_resolution).
    """
    return Resolver(catalog, params).resolve(mandatory_target_resolution)
