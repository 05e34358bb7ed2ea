"""Command-line entry point."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from . import config
from .emulator import Emulator

FONT_ROM_PATH = "roms/builtin/font.ch8"


def _error(message: str) -> int:
    print(f"[ERROR] {message}")
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ROM named by the first argument; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        return _error("Please enter the .ch8 file as an argument")

    rom_path = Path(args[0])
    if rom_path.suffix != ".ch8":
        return _error("Please ensure the first argument is a .ch8 file")

    try:
        with Emulator() as emulator:
            emulator.load_rom(FONT_ROM_PATH, config.FONT_START_ADDRESS)
            emulator.load_rom(rom_path)
            emulator.run()
    except OSError as exc:
        filename = exc.filename if exc.filename is not None else rom_path
        return _error(f"Failed to open file: {filename}")
    except (RuntimeError, IndexError, ValueError) as exc:
        return _error(str(exc))
    return 0


if __name__ == "__main__":
    sys.exit(main())