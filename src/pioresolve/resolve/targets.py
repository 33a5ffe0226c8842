"""
Derivation tables for compiler target triples.

Two static tables live here:

- TARGET_DEFAULTS maps a target triple to the default platform, MCU and
  frameworks PlatformIO uses for it.
- MCU_TARGET_RULES maps an MCU identifier to a target triple. The rules are
  evaluated in order against the lower-cased MCU and the first match wins,
  so the order of the list is part of the table. Downstream tooling relies on
  these exact values; keep them in sync with the project scaffolding.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .errors import CannotDeriveTarget, UnsupportedTarget
from .resolution import TargetDefaults

_ESP32_FRAMEWORKS = ("espidf", "arduino", "simba", "pumbaa")

TARGET_DEFAULTS: Dict[str, TargetDefaults] = {
    "xtensa-esp32-none-elf": TargetDefaults("espressif32", "ESP32", _ESP32_FRAMEWORKS),
    "xtensa-esp32-espidf": TargetDefaults("espressif32", "ESP32", _ESP32_FRAMEWORKS),
    "xtensa-esp32s2-none-elf": TargetDefaults("espressif32", "ESP32S2", _ESP32_FRAMEWORKS),
    "xtensa-esp32s2-espidf": TargetDefaults("espressif32", "ESP32S2", _ESP32_FRAMEWORKS),
    "xtensa-esp32s3-none-elf": TargetDefaults("espressif32", "ESP32S3", _ESP32_FRAMEWORKS),
    "xtensa-esp32s3-espidf": TargetDefaults("espressif32", "ESP32S3", _ESP32_FRAMEWORKS),
    # Both RISC-V triples map to the C3 until other RISC-V parts get their own rows
    "riscv32imc-esp-espidf": TargetDefaults("espressif32", "ESP32C3", ("espidf", "arduino")),
    "riscv32imac-esp-espidf": TargetDefaults("espressif32", "ESP32C3", ("espidf", "arduino")),
    "xtensa-esp8266-none-elf": TargetDefaults(
        "espressif8266",
        "ESP8266",
        ("esp8266-rtos-sdk", "esp8266-nonos-sdk", "arduino", "simba"),
    ),
}


@dataclass(frozen=True)
class TargetRule:
    """One row of the MCU to target triple table."""

    patterns: Tuple[str, ...]
    target: str
    prefix: bool = True
    family: str = ""

    def matches(self, mcu: str) -> bool:
        """Check a lower-cased MCU identifier against this rule."""
        if self.prefix:
            return any(mcu.startswith(pattern) for pattern in self.patterns)
        return mcu in self.patterns


def _prefix(patterns: Tuple[str, ...], target: str, family: str) -> TargetRule:
    return TargetRule(patterns=patterns, target=target, prefix=True, family=family)


def _exact(patterns: Tuple[str, ...], target: str, family: str) -> TargetRule:
    return TargetRule(patterns=patterns, target=target, prefix=False, family=family)


MCU_TARGET_RULES: Tuple[TargetRule, ...] = (
    _prefix(("32mx", "32mz"), "mipsel-unknown-none", "PIC32"),
    _prefix(("msp430",), "msp430-none-elf", "MSP430"),
    _prefix(("at90", "atmega", "attiny"), "avr-unknown-gnu-atmega328", "Microchip AVR"),
    _prefix(("efm32",), "thumbv7em-none-eabi", "ARM Cortex-M4"),
    _prefix(("lpc",), "thumbv6m-none-eabi", "ARM Cortex-M0"),
    _exact(("esp32",), "xtensa-esp32-espidf", "ESP32"),
    _exact(("esp32s2",), "xtensa-esp32s2-espidf", "ESP32S2"),
    _exact(("esp32s3",), "xtensa-esp32s3-espidf", "ESP32S3"),
    _exact(("esp32c3", "esp32c6"), "riscv32imc-esp-espidf", "ESP32CX"),
    _exact(("esp8266",), "xtensa-esp8266-none-elf", "ESP8266"),
    _prefix(("stm32f7", "stm32h7"), "thumbv7em-none-eabihf", "ARM Cortex-M7F"),
    _prefix(("gd32vf103",), "riscv32imac-unknown-none-elf", "RISC-V IMAC"),
    _prefix(
        ("stm32f3", "stm32f4", "stm32g4", "stm32l4", "stm32l4+"),
        "thumbv7em-none-eabihf",
        "ARM Cortex-M4F",
    ),
    _prefix(("stm32g0", "stm32l0", "stm32f0"), "thumbv6m-none-eabi", "ARM Cortex-M0/M0+"),
    _prefix(("nrf51",), "thumbv6m-none-eabi", "ARM Cortex-M0/M0+"),
    _prefix(("nrf52",), "thumbv7em-none-eabihf", "ARM Cortex-M4F"),
)


def target_defaults(target: str) -> TargetDefaults:
    """
    Get the default platform, MCU and frameworks for a target triple.

    Args:
        target: Target triple (e.g., 'xtensa-esp32-espidf')

    Returns:
        TargetDefaults for the triple

    Raises:
        UnsupportedTarget: If the triple has no entry (exact match only)
    """
    defaults = TARGET_DEFAULTS.get(target)
    if defaults is None:
        raise UnsupportedTarget(target)
    return defaults


def find_target_rule(mcu: str) -> Optional[TargetRule]:
    """Return the first rule matching the MCU, or None."""
    mcu = mcu.lower()
    for rule in MCU_TARGET_RULES:
        if rule.matches(mcu):
            return rule
    return None


def derive_target(mcu: str) -> str:
    """
    Derive the target triple for an MCU.

    Args:
        mcu: MCU identifier in any case (e.g., 'ESP32', 'STM32L476RG')

    Returns:
        Target triple

    Raises:
        CannotDeriveTarget: If no rule matches the MCU
    """
    rule = find_target_rule(mcu)
    if rule is None:
        raise CannotDeriveTarget(mcu)
    return rule.target
