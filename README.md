# chipeight

A small CHIP-8 emulator. The emulated CPU runs at about 1000 instructions per
second. The display redraw and the delay and sound timers run at 60 Hz. A
pygame window shows the 64×32 screen scaled ten times. While the sound timer is
above zero, a 440 Hz tone plays.

## Installation

```
pip install .
```

## Running a ROM

```
chipeight path/to/game.ch8
```

The ROM file must have the `.ch8` extension. The emulator first loads a font
from `roms/builtin/font.ch8`, relative to the current directory, at address
`0x50`. It then loads the program at `0x200`. Close the window to quit.

If anything goes wrong, the command prints a line starting with `[ERROR]` and
exits with status 1. That covers a missing argument, a wrong extension, a file
that cannot be opened, a ROM too large for memory, an unknown opcode and a
call-stack overflow or underflow.

## Keypad

The 16-key CHIP-8 keypad is mapped onto the left-hand side of a QWERTY
keyboard:

```
Keyboard        CHIP-8
1 2 3 4         1 2 3 C
Q W E R   ->    4 5 6 D
A S D F         7 8 9 E
Z X C V         A 0 B F
```

`chipeight.config.keypad_key(name)` returns the keypad value for a host key
name, or `None` if the key is not mapped.

## Instruction behaviour

- `8xy1`, `8xy2` and `8xy3` reset VF to 0.
- `8xy6` and `8xyE` copy VY into VX before shifting, and put the bit shifted out into VF.
- `Bnnn` jumps to `nnn + V0`.
- `Fx55` and `Fx65` leave I pointing past the last byte they transfer.
- `Fx1E` sets VF to 1 when I + VX goes past `0xFF`. Otherwise it leaves VF unchanged.
- `Dxyn` wraps the starting position onto the screen and clips sprites at the right and bottom edges.
- `Fx0A` waits for a key press that happens after the instruction is reached.
- `Cxnn` uses a minimal-standard (48271) pseudo-random sequence by default.

## Using it as a library

Each part of the machine can be used on its own:

- `chipeight.ram.RAM` is the 4 KiB memory. It provides `read`, `write`, `erase`, `load_bytes`, `load_file` and `dump`. `dump` returns a text listing of the non-zero bytes. An address out of range raises `IndexError`.
- `chipeight.timer.Timer` is an 8-bit countdown timer. It has a `value` property, a `tick()` method that counts down to zero, and `in_timeout()`.
- `chipeight.peripherals.Peripherals` holds the pixel buffer and the key state. It provides `set_pixel`, `check_pixel`, `clear_pixel_buffer`, `press_key` and `release_key`. A position outside the screen raises `PixelError`.
- `chipeight.peripherals.beep_samples(length)` generates the bytes of the beep tone.
- `chipeight.cpu.CPU` runs one instruction each time `cycle()` is called. It raises `InvalidOpcodeError` or `StackError` on a bad program.
- `chipeight.emulator.Emulator` ties the parts together:
  - `load_rom` loads a program.
  - `tick_timers` does one 60 Hz step: redraw, count down the timers and drive the buzzer.
  - `run` loops until the front end asks to quit.
- `chipeight.frontend.PygameFrontend` is the default front end. It provides the window, the keyboard input and the sound.

`Emulator` accepts a `frontend_factory` in place of the pygame window, and a
`random_source` for `Cxnn`. Any object with `render()`, `process_input()`,
`beep(enable)` and `close()` can serve as the front end:

```python
from chipeight.emulator import Emulator

class Headless:
    def render(self): pass
    def process_input(self): return False
    def beep(self, enable): pass
    def close(self): pass

with Emulator(frontend_factory=lambda peripherals: Headless()) as emu:
    emu.ram.load_bytes(bytes([0x60, 0x2A]), 0x200)  # 602A: V0 = 0x2A
    emu.cpu.cycle()
    assert emu.cpu.v[0] == 0x2A
```

## What it does not do

The package does not ship the font ROM. You must supply
`roms/builtin/font.ch8` in the directory you run `chipeight` from. Without it,
the command stops with a "Failed to open file" error. There are no
command-line options for speed, colours or key bindings. These are fixed in
`chipeight.config`.

## Tests

```
pip install .[test]
pytest
```