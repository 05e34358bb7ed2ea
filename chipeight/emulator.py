"""Main emulation loop tying the CPU, memory, timers and frontend together."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from . import config
from .cpu import CPU
from .peripherals import Peripherals
from .ram import RAM, PathLike
from .timer import Timer

_log = logging.getLogger(__name__)


class Frontend(Protocol):
    def render(self) -> None: ...

    def process_input(self) -> bool: ...

    def beep(self, enable: bool) -> None: ...

    def close(self) -> None: ...


def _default_frontend(peripherals: Peripherals) -> Frontend:
    from .frontend import PygameFrontend

    return PygameFrontend(peripherals)


class Emulator:
    """A complete CHIP-8 machine driven by a frontend."""

    def __init__(
        self,
        frontend_factory: Callable[[Peripherals], Frontend] | None = None,
        random_source: Callable[[], int] | None = None,
    ) -> None:
        self.peripherals = Peripherals()
        self.ram = RAM()
        self.delay_timer = Timer()
        self.sound_timer = Timer()
        self.cpu = CPU(
            self.peripherals,
            self.ram,
            self.delay_timer,
            self.sound_timer,
            random_source=random_source,
        )
        self.frontend = (frontend_factory or _default_frontend)(self.peripherals)

    def load_rom(self, path: PathLike, start_address: int = config.PROGRAM_START_ADDRESS) -> None:
        """Load a ROM image into memory at ``start_address``."""
        self.ram.load_file(path, start_address)

    def tick_timers(self) -> None:
        """Do the work due at the timer rate: redraw, count down, drive the buzzer."""
        if self.cpu.draw_flag:
            self.frontend.render()
            self.cpu.draw_flag = False
        self.delay_timer.tick()
        self.sound_timer.tick()
        self.frontend.beep(not self.sound_timer.in_timeout())

    def run(self) -> None:
        """Run until the frontend reports a quit request."""
        _log.debug("Emulation started!")
        cpu_period = 1.0 / config.CPU_CYCLE_HZ
        timer_period = 1.0 / config.TIMER_CYCLE_HZ
        last_timer = time.perf_counter()

        while True:
            start = time.perf_counter()
            if self.frontend.process_input():
                break
            self.cpu.cycle()

            since_timer = start - last_timer
            if since_timer >= timer_period:
                _log.debug("FPS: %f", 1.0 / since_timer)
                self.tick_timers()
                last_timer = start

            elapsed = time.perf_counter() - start
            ms_to_wait = (cpu_period - elapsed) * 1000.0
            if ms_to_wait >= 1.0:
                time.sleep(int(min(ms_to_wait, 2.0)) / 1000.0)

    def close(self) -> None:
        """Release the frontend."""
        self.frontend.close()

    def __enter__(self) -> "Emulator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()