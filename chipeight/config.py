"""Machine constants, display colours and the keypad layout."""

from __future__ import annotations

from types import MappingProxyType


def color_to_uint32(r: int, g: int, b: int, a: int) -> int:
    """Pack an RGBA colour into one 32-bit RGBA8888 value."""
    for channel in (r, g, b, a):
        if not 0 <= channel <= 0xFF:
            raise ValueError(f"colour channel out of range: {channel}")
    return (r << 24) | (g << 16) | (b << 8) | a


WINDOW_TITLE = "Chip-8 Emulator"

PIXEL_COLOR_ON = (97, 184, 174, 255)  # light
PIXEL_COLOR_OFF = (19, 23, 38, 255)  # dark

PIXEL_ON_UINT32 = color_to_uint32(*PIXEL_COLOR_ON)
PIXEL_OFF_UINT32 = color_to_uint32(*PIXEL_COLOR_OFF)

PIXEL_WIDTH = 64
PIXEL_HEIGHT = 32
DISPLAY_SCALE = 10

WINDOW_WIDTH = DISPLAY_SCALE * PIXEL_WIDTH
WINDOW_HEIGHT = DISPLAY_SCALE * PIXEL_HEIGHT

MEMORY_SIZE = 4096
MEMORY_START_ADDRESS = 0x000
MEMORY_END_ADDRESS = 0xFFF
FONT_START_ADDRESS = 0x50
PROGRAM_START_ADDRESS = 0x200
STACK_DEPTH = 16

CPU_CYCLE_HZ = 1000
TIMER_CYCLE_HZ = 60

AUDIO_RATE_HZ = 44100
AUDIO_BUFFER_SIZE = 1024
BEEP_TONE_HZ = 440.0
BEEP_AMPLITUDE = 0.05

KEY_MAPPING = MappingProxyType(
    {
        "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
        "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
        "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
        "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
    }
)


def keypad_key(name: str) -> int | None:
    """Return the keypad value bound to a host key name, or None if unbound."""
    return KEY_MAPPING.get(name.lower())