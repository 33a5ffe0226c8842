"""
Unit tests for resolving a configured board.
"""

import pytest

from pioresolve.catalog import BoardRecord, StaticCatalog
from pioresolve.resolve import (
    AmbiguousBoard,
    BoardNotFound,
    CannotDeriveTarget,
    CatalogInconsistency,
    FrameworksMismatch,
    McuMismatch,
    PlatformMismatch,
    Resolution,
    ResolutionParams,
    Resolver,
    Source,
    UnsupportedTarget,
    resolve,
)


class TestResolveByBoard:
    """Test suite for resolution with a board configured."""

    def test_esp32dev_with_arduino(self, catalog):
        """Test the esp32dev/arduino example resolves with an MCU-derived target."""
        resolution = resolve(catalog, ResolutionParams(board="esp32dev", frameworks=["arduino"]))
        assert resolution == Resolution(
            board="esp32dev",
            platform="espressif32",
            mcu="ESP32",
            frameworks=("arduino",),
            target="xtensa-esp32-espidf",
        )

    def test_frameworks_default_to_board_first(self, catalog):
        """Test the board's first framework is used when none is configured."""
        resolution = resolve(catalog, ResolutionParams(board="esp32dev"))
        assert resolution.frameworks == ("espidf",)

        resolution = resolve(catalog, ResolutionParams(board="uno"))
        assert resolution.frameworks == ("arduino",)
        assert resolution.mcu == "ATMEGA328P"
        assert resolution.target == "avr-unknown-gnu-atmega328"

    def test_unknown_board(self, catalog):
        """Test an unknown board raises BoardNotFound."""
        with pytest.raises(BoardNotFound) as exc_info:
            resolve(catalog, ResolutionParams(board="no-such-board"))
        assert exc_info.value.board == "no-such-board"
        assert exc_info.value.platform is None

    def test_mcu_is_case_insensitive(self, catalog):
        """Test a lower-case MCU matches and the board's spelling is kept."""
        resolution = resolve(catalog, ResolutionParams(board="esp32dev", mcu="esp32"))
        assert resolution.mcu == "ESP32"

    def test_platform_mismatch(self, catalog):
        """Test a configured platform the board does not have."""
        with pytest.raises(PlatformMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", platform="atmelavr"))
        error = exc_info.value
        assert error.sources == (Source.BOARD, Source.USER)
        assert error.left_value == "espressif32"
        assert error.right_value == "atmelavr"
        assert error.board == "esp32dev"

    def test_mcu_mismatch_with_board(self, catalog):
        """Test a configured MCU the board is not built around."""
        with pytest.raises(McuMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", mcu="atmega328p"))
        assert exc_info.value.sources == (Source.BOARD, Source.USER)
        assert exc_info.value.left_value == "ESP32"

    def test_mcu_mismatch_with_mcu_derived_target(self, catalog):
        """Test an MCU with its own target defaults is reported against the board."""
        with pytest.raises(McuMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", mcu="ESP32S3"))
        assert exc_info.value.sources == (Source.BOARD, Source.USER)
        assert exc_info.value.left_value == "ESP32"
        assert exc_info.value.right_value == "ESP32S3"
        assert exc_info.value.target is None

    def test_board_mismatch_with_explicit_target(self, catalog):
        """Test a board that contradicts a configured target is reported against the target."""
        with pytest.raises(McuMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", target="xtensa-esp32s3-espidf"))
        assert exc_info.value.sources == (Source.BOARD, Source.TARGET)
        assert exc_info.value.right_value == "ESP32S3"

    def test_frameworks_mismatch(self, catalog):
        """Test configured frameworks must all be supported by the board."""
        with pytest.raises(FrameworksMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", frameworks=["arduino", "mbed"]))
        assert exc_info.value.sources == (Source.BOARD, Source.USER)
        assert exc_info.value.left_value == ("espidf", "arduino")
        assert exc_info.value.right_value == ("arduino", "mbed")


class TestResolveByBoardWithTarget:
    """Test suite for board resolution cross-checked against a target triple."""

    def test_target_defaults_pick_framework(self, catalog):
        """Test the first target framework supported by the board is the default."""
        resolution = resolve(
            catalog, ResolutionParams(board="esp32dev", target="xtensa-esp32-espidf")
        )
        assert resolution.frameworks == ("espidf",)
        assert resolution.target == "xtensa-esp32-espidf"

    def test_target_mcu_mismatch(self, catalog):
        """Test a target for another MCU is rejected."""
        with pytest.raises(McuMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", target="xtensa-esp32s2-espidf"))
        error = exc_info.value
        assert error.sources == (Source.BOARD, Source.TARGET)
        assert error.left_value == "ESP32"
        assert error.right_value == "ESP32S2"
        assert error.target == "xtensa-esp32s2-espidf"

    def test_target_platform_mismatch(self, catalog):
        """Test a target for another platform is rejected."""
        with pytest.raises(PlatformMismatch) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev", target="xtensa-esp8266-none-elf"))
        assert exc_info.value.left_value == "espressif32"
        assert exc_info.value.right_value == "espressif8266"

    def test_configured_platform_against_target(self, catalog):
        """Test a configured platform contradicting the target is rejected."""
        with pytest.raises(PlatformMismatch):
            resolve(
                catalog,
                ResolutionParams(board="esp32dev", platform="atmelavr", target="xtensa-esp32-espidf"),
            )

    def test_target_without_defaults_is_kept(self, catalog):
        """Test a triple with no defaults is kept when resolution is not mandatory."""
        resolution = resolve(
            catalog,
            ResolutionParams(board="nucleo_l476rg", target="thumbv7em-none-eabihf"),
        )
        assert resolution.target == "thumbv7em-none-eabihf"
        assert resolution.platform == "ststm32"

    def test_mandatory_unknown_target(self, catalog):
        """Test a triple with no defaults is fatal when resolution is mandatory."""
        with pytest.raises(UnsupportedTarget) as exc_info:
            resolve(
                catalog,
                ResolutionParams(board="nucleo_l476rg", target="thumbv7em-none-eabihf"),
                mandatory_target_resolution=True,
            )
        assert exc_info.value.target == "thumbv7em-none-eabihf"

    def test_mandatory_without_target(self, catalog):
        """Test mandatory resolution needs a target or a derivable MCU."""
        with pytest.raises(UnsupportedTarget) as exc_info:
            resolve(catalog, ResolutionParams(board="esp32dev"), mandatory_target_resolution=True)
        assert exc_info.value.target is None

    def test_mandatory_with_underivable_mcu(self, catalog):
        """Test mandatory resolution fails for an MCU with no triple."""
        with pytest.raises(CannotDeriveTarget):
            resolve(
                catalog,
                ResolutionParams(board="pico", platform="rp2040", mcu="RP2040"),
                mandatory_target_resolution=True,
            )

    def test_mandatory_with_mcu_derived_target(self, catalog):
        """Test the configured MCU can provide the target for mandatory resolution."""
        resolution = resolve(
            catalog,
            ResolutionParams(board="esp32dev", mcu="ESP32", frameworks=["arduino"]),
            mandatory_target_resolution=True,
        )
        assert resolution.target == "xtensa-esp32-espidf"

    def test_no_derivable_target(self, catalog):
        """Test a board whose MCU has no triple cannot be resolved without a target."""
        with pytest.raises(CannotDeriveTarget) as exc_info:
            resolve(catalog, ResolutionParams(board="pico", platform="rp2040"))
        assert exc_info.value.mcu == "RP2040"


class TestBoardDisambiguation:
    """Test suite for board ids listed under several platforms."""

    def test_ambiguous_board(self, catalog):
        """Test a duplicated board without hints lists the colliding platforms."""
        with pytest.raises(AmbiguousBoard) as exc_info:
            resolve(catalog, ResolutionParams(board="pico"))
        assert exc_info.value.board == "pico"
        assert exc_info.value.platforms == ("raspberrypi", "rp2040")

    def test_platform_disambiguates(self, catalog):
        """Test a configured platform selects one record."""
        resolution = resolve(
            catalog,
            ResolutionParams(board="pico", platform="rp2040", target="thumbv6m-none-eabi"),
        )
        assert resolution.platform == "rp2040"
        assert resolution.frameworks == ("arduino",)
        assert resolution.target == "thumbv6m-none-eabi"

    def test_platform_without_record(self, catalog):
        """Test a platform none of the records has raises BoardNotFound."""
        with pytest.raises(BoardNotFound) as exc_info:
            resolve(catalog, ResolutionParams(board="pico", platform="espressif32"))
        assert exc_info.value.platform == "espressif32"

    def test_target_disambiguates(self):
        """Test the platform of the target defaults selects one record."""
        catalog = StaticCatalog(boards=[
            BoardRecord(id="devkit", platform="espressif32", mcu="ESP32", frameworks=("arduino", "espidf")),
            BoardRecord(id="devkit", platform="espressif8266", mcu="ESP8266",
                        frameworks=("arduino", "esp8266-rtos-sdk")),
        ])
        resolution = resolve(
            catalog, ResolutionParams(board="devkit", target="xtensa-esp8266-none-elf")
        )
        assert resolution.platform == "espressif8266"
        assert resolution.mcu == "ESP8266"
        assert resolution.frameworks == ("esp8266-rtos-sdk",)

    def test_duplicate_board_and_platform(self):
        """Test two records with the same board and platform are an error, not a pick."""
        catalog = StaticCatalog(boards=[
            BoardRecord(id="devkit", platform="espressif32", mcu="ESP32", frameworks=("arduino",)),
            BoardRecord(id="devkit", platform="espressif32", mcu="ESP32S3", frameworks=("arduino",)),
            BoardRecord(id="devkit", platform="espressif8266", mcu="ESP8266", frameworks=("arduino",)),
        ])
        with pytest.raises(CatalogInconsistency) as exc_info:
            resolve(catalog, ResolutionParams(board="devkit", platform="espressif32"))
        assert exc_info.value.count == 2


class TestResolverProperties:
    """Test suite for idempotence and round-trips."""

    @pytest.mark.parametrize(
        "params",
        [
            ResolutionParams(board="esp32dev", frameworks=["arduino"]),
            ResolutionParams(board="esp32dev", target="xtensa-esp32-espidf"),
            ResolutionParams(board="uno"),
            ResolutionParams(board="nodemcuv2", frameworks=["simba"]),
            ResolutionParams(board="nucleo_l476rg", frameworks=["stm32cube"]),
        ],
    )
    def test_round_trip(self, catalog, params):
        """Test re-supplying a resolution's values yields the same resolution."""
        first = resolve(catalog, params)
        second = resolve(catalog, first.to_params())
        assert second == first

    def test_idempotent_success(self, catalog):
        """Test two calls with the same params agree."""
        resolver = Resolver(catalog, ResolutionParams(board="esp32dev"))
        assert resolver.resolve() == resolver.resolve()

    def test_idempotent_error(self, catalog):
        """Test two failing calls raise the same error."""
        resolver = Resolver(catalog, ResolutionParams(board="pico"))
        messages = []
        for _ in range(2):
            with pytest.raises(AmbiguousBoard) as exc_info:
                resolver.resolve()
            messages.append(str(exc_info.value))
        assert messages[0] == messages[1]

    def test_params_not_mutated(self, catalog):
        """Test the resolver leaves its params untouched."""
        params = ResolutionParams(board="esp32dev")
        resolver = Resolver(catalog, params)
        resolver.resolve()
        assert resolver.params == ResolutionParams(board="esp32dev")
