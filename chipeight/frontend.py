"""Window, keyboard and audio frontend built on pygame."""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from . import config  # noqa: E402
from .peripherals import Peripherals, beep_samples  # noqa: E402


def _unpack_rgba(value: int) -> tuple[int, int, int, int]:
    return ((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


class PygameFrontend:
    """Shows the pixel buffer in a window, feeds key events in and plays the beep."""

    def __init__(self, peripherals: Peripherals) -> None:
        self.peripherals = peripherals
        self._beeping = False
        self._closed = False

        try:
            pygame.display.init()
            self._window = pygame.display.set_mode(
                (config.WINDOW_WIDTH, config.WINDOW_HEIGHT)
            )
        except pygame.error as exc:
            raise RuntimeError(f"Failed to create window: {exc}") from exc
        pygame.display.set_caption(config.WINDOW_TITLE)
        self._canvas = pygame.Surface((config.PIXEL_WIDTH, config.PIXEL_HEIGHT))

        try:
            pygame.mixer.init(
                frequency=config.AUDIO_RATE_HZ,
                size=-16,
                channels=1,
                buffer=config.AUDIO_BUFFER_SIZE,
            )
            # One device buffer holds AUDIO_BUFFER_SIZE 16-bit samples.
            self._tone = pygame.mixer.Sound(
                buffer=beep_samples(config.AUDIO_BUFFER_SIZE * 2)
            )
        except pygame.error as exc:
            pygame.display.quit()
            raise RuntimeError(f"Failed to create audio: {exc}") from exc

        self.render()

    @property
    def beeping(self) -> bool:
        """True while the beep tone is playing."""
        return self._beeping

    def render(self) -> None:
        """Draw the peripherals' pixel buffer to the window."""
        width = config.PIXEL_WIDTH
        for index, value in enumerate(self.peripherals.pixel_buffer):
            self._canvas.set_at((index % width, index // width), _unpack_rgba(value))
        scaled = pygame.transform.scale(self._canvas, self._window.get_size())
        self._window.blit(scaled, (0, 0))
        pygame.display.flip()

    def process_input(self) -> bool:
        """Handle pending events; return True if the user asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return True
            if event.type == pygame.KEYDOWN:
                if getattr(event, "repeat", 0):
                    continue
                key = config.keypad_key(pygame.key.name(event.key))
                if key is not None:
                    self.peripherals.press_key(key)
            elif event.type == pygame.KEYUP:
                key = config.keypad_key(pygame.key.name(event.key))
                if key is not None:
                    self.peripherals.release_key(key)
        return False

    def beep(self, enable: bool) -> None:
        """Start or stop the beep tone."""
        if enable and not self._beeping:
            self._tone.play(loops=-1)
            self._beeping = True
        elif not enable and self._beeping:
            self._tone.stop()
            self._beeping = False

    def close(self) -> None:
        """Shut down audio and the window."""
        if self._closed:
            return
        self._closed = True
        self.beep(False)
        pygame.mixer.quit()
        pygame.display.quit()

    def __enter__(self) -> "PygameFrontend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()