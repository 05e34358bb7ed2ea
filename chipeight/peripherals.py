"""Display buffer, keypad state and beep tone generation."""

from __future__ import annotations

import math

from . import config


class PixelError(ValueError):
    """Raised for a pixel position outside the display."""


def beep_samples(length: int) -> bytes:
    """Return ``length`` bytes of the beep tone, each the low byte of a 16-bit sample."""
    step = 2.0 * math.pi * config.BEEP_TONE_HZ / config.AUDIO_RATE_HZ
    return bytes(
        int(config.BEEP_AMPLITUDE * math.sin(step * i) * 32767) & 0xFF
        for i in range(length)
    )


class Peripherals:
    """Pixel buffer and keypad state shared between the CPU and a frontend."""

    def __init__(self) -> None:
        self.pixel_buffer = [0] * (config.PIXEL_WIDTH * config.PIXEL_HEIGHT)
        self.key_state = [False] * 16
        self.input_flag = False
        self.last_key = 0

    @staticmethod
    def _index(x: int, y: int, action: str) -> int:
        if not (0 <= x < config.PIXEL_WIDTH and 0 <= y < config.PIXEL_HEIGHT):
            raise PixelError(f"Invalid pixel {action} (x:{x}, y:{y})")
        return y * config.PIXEL_WIDTH + x

    def clear_pixel_buffer(self) -> None:
        """Turn every pixel off."""
        self.pixel_buffer[:] = [config.PIXEL_OFF_UINT32] * len(self.pixel_buffer)

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        """Turn the pixel at (x, y) on or off."""
        index = self._index(x, y, "set")
        self.pixel_buffer[index] = config.PIXEL_ON_UINT32 if on else config.PIXEL_OFF_UINT32

    def check_pixel(self, x: int, y: int) -> bool:
        """Return True if the pixel at (x, y) is on."""
        return self.pixel_buffer[self._index(x, y, "check")] == config.PIXEL_ON_UINT32

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < 16:
            raise ValueError(f"keypad key out of range: {key}")

    def press_key(self, key: int) -> None:
        """Record a key press and flag a new input."""
        self._check_key(key)
        self.key_state[key] = True
        self.input_flag = True
        self.last_key = key

    def release_key(self, key: int) -> None:
        """Record a key release."""
        self._check_key(key)
        self.key_state[key] = False