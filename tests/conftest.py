"""
Shared fixtures for pioresolve tests.

The catalog below is a trimmed copy of what `pio boards --json-output` and
`pio platform frameworks --json-output` report, plus a board id ("pico")
listed under two platforms.
"""

import pytest

from pioresolve.catalog import BoardRecord, FrameworkRecord, StaticCatalog

BOARDS = [
    BoardRecord(id="esp32dev", platform="espressif32", mcu="ESP32", frameworks=("espidf", "arduino"),
                name="Espressif ESP32 Dev Module", vendor="Espressif", fcpu=240000000, ram=327680, rom=4194304),
    BoardRecord(id="esp32-c3-devkitm-1", platform="espressif32", mcu="ESP32C3", frameworks=("arduino", "espidf"),
                name="Espressif ESP32-C3-DevKitM-1", vendor="Espressif", fcpu=160000000),
    BoardRecord(id="uno", platform="atmelavr", mcu="ATMEGA328P", frameworks=("arduino", "simba"),
                name="Arduino Uno", vendor="Arduino", fcpu=16000000, ram=2048, rom=32256),
    BoardRecord(id="nanoatmega328", platform="atmelavr", mcu="ATMEGA328P", frameworks=("arduino",),
                name="Arduino Nano ATmega328", vendor="Arduino"),
    BoardRecord(id="megaatmega2560", platform="atmelavr", mcu="ATMEGA2560", frameworks=("arduino",),
                name="Arduino Mega or Mega 2560 ATmega2560 (Mega 2560)", vendor="Arduino"),
    BoardRecord(id="nodemcuv2", platform="espressif8266", mcu="ESP8266",
                frameworks=("arduino", "esp8266-rtos-sdk", "esp8266-nonos-sdk", "simba"),
                name="NodeMCU 1.0 (ESP-12E Module)", vendor="NodeMCU"),
    BoardRecord(id="nucleo_l476rg", platform="ststm32", mcu="STM32L476RGT6",
                frameworks=("arduino", "cmsis", "mbed", "stm32cube"),
                name="ST Nucleo L476RG", vendor="ST"),
    BoardRecord(id="pico", platform="raspberrypi", mcu="RP2040", frameworks=("arduino", "mbed"),
                name="Raspberry Pi Pico", vendor="Raspberry Pi"),
    BoardRecord(id="pico", platform="rp2040", mcu="RP2040", frameworks=("arduino",),
                name="Raspberry Pi Pico", vendor="Raspberry Pi"),
]

FRAMEWORKS = [
    FrameworkRecord(name="arduino", platforms=(
        "atmelavr", "espressif32", "espressif8266", "ststm32", "raspberrypi", "rp2040",
    )),
    FrameworkRecord(name="espidf", platforms=("espressif32",)),
    FrameworkRecord(name="simba", platforms=("atmelavr", "espressif32", "espressif8266")),
    FrameworkRecord(name="pumbaa", platforms=("espressif32",)),
    FrameworkRecord(name="esp8266-rtos-sdk", platforms=("espressif8266",)),
    FrameworkRecord(name="esp8266-nonos-sdk", platforms=("espressif8266",)),
    FrameworkRecord(name="cmsis", platforms=("ststm32",)),
    FrameworkRecord(name="stm32cube", platforms=("ststm32",)),
    FrameworkRecord(name="mbed", platforms=("ststm32", "raspberrypi")),
]


@pytest.fixture
def catalog():
    """Catalog with boards for several platforms and one duplicated board id."""
    return StaticCatalog(boards=BOARDS, frameworks=FRAMEWORKS)


@pytest.fixture
def snapshot_dict():
    """The same catalog as a snapshot document (PlatformIO JSON keys)."""
    return {
        "boards": [
            {"id": b.id, "name": b.name, "platform": b.platform, "mcu": b.mcu,
             "fcpu": b.fcpu, "ram": b.ram, "rom": b.rom, "frameworks": list(b.frameworks),
             "vendor": b.vendor, "url": b.url}
            for b in BOARDS
        ],
        "frameworks": [
            {"name": f.name, "title": f.name.capitalize(), "description": "",
             "platforms": list(f.platforms)}
            for f in FRAMEWORKS
        ],
    }
