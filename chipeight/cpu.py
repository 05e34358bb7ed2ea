"""Instruction decoding and execution for the CHIP-8 processor."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Callable, Iterator

from . import config
from .peripherals import Peripherals
from .ram import RAM
from .timer import Timer


class InvalidOpcodeError(RuntimeError):
    """Raised when the fetched instruction matches no known opcode."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"Invalid Opcode {opcode:04x}")
        self.opcode = opcode


class StackError(RuntimeError):
    """Raised on call-stack overflow or underflow."""


def _minstd_rand(seed: int = 1) -> Iterator[int]:
    """Yield the Park-Miller minimal standard sequence (multiplier 48271)."""
    state = seed
    while True:
        state = state * 48271 % 2147483647
        yield state


@dataclass(frozen=True)
class _Operands:
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    @classmethod
    def from_opcode(cls, opcode: int) -> "_Operands":
        return cls(
            x=(opcode & 0x0F00) >> 8,
            y=(opcode & 0x00F0) >> 4,
            n=opcode & 0x000F,
            nn=opcode & 0x00FF,
            nnn=opcode & 0x0FFF,
        )


@dataclass(frozen=True)
class _OpcodeInfo:
    pattern: int
    mask: int
    handler: Callable[["CPU", _Operands], None]
    auto_increment_pc: bool = True


class CPU:
    """The CHIP-8 processor: registers, call stack and instruction set."""

    def __init__(
        self,
        peripherals: Peripherals,
        ram: RAM,
        delay_timer: Timer,
        sound_timer: Timer,
        random_source: Callable[[], int] | None = None,
    ) -> None:
        self.peripherals = peripherals
        self.ram = ram
        self.delay_timer = delay_timer
        self.sound_timer = sound_timer

        self.stack: list[int] = []
        self.pc = config.PROGRAM_START_ADDRESS
        self.i = 0
        self.v = [0] * 16
        self.draw_flag = False
        self.waiting_for_key = False

        if random_source is None:
            random_source = functools.partial(next, _minstd_rand())
        self._random = random_source

    # ----- core cycle -----

    def cycle(self) -> None:
        """Fetch, decode and execute one instruction."""
        opcode = self._fetch_instruction()
        operands = _Operands.from_opcode(opcode)
        for info in self._OPCODE_HANDLERS:
            if opcode & info.mask == info.pattern:
                info.handler(self, operands)
                if info.auto_increment_pc:
                    self.pc = (self.pc + 2) & 0xFFFF
                return
        raise InvalidOpcodeError(opcode)

    def _fetch_instruction(self) -> int:
        return self.ram.read(self.pc) << 8 | self.ram.read(self.pc + 1)

    def _push_stack(self, address: int) -> None:
        if len(self.stack) >= config.STACK_DEPTH:
            raise StackError("Stack overflow!")
        self.stack.append(address)

    def _pop_stack(self) -> int:
        if not self.stack:
            raise StackError("Stack underflow!")
        return self.stack.pop()

    def _skip(self) -> None:
        self.pc = (self.pc + 2) & 0xFFFF

    # ----- register operations -----

    def _op_6xnn(self, op: _Operands) -> None:
        self.v[op.x] = op.nn

    def _op_7xnn(self, op: _Operands) -> None:
        self.v[op.x] = (self.v[op.x] + op.nn) & 0xFF

    def _op_8xy0(self, op: _Operands) -> None:
        self.v[op.x] = self.v[op.y]

    def _op_8xy1(self, op: _Operands) -> None:
        self.v[op.x] |= self.v[op.y]
        self.v[0xF] = 0

    def _op_8xy2(self, op: _Operands) -> None:
        self.v[op.x] &= self.v[op.y]
        self.v[0xF] = 0

    def _op_8xy3(self, op: _Operands) -> None:
        self.v[op.x] ^= self.v[op.y]
        self.v[0xF] = 0

    def _op_8xy4(self, op: _Operands) -> None:
        overflow = self.v[op.x] > 0xFF - self.v[op.y]
        self.v[op.x] = (self.v[op.x] + self.v[op.y]) & 0xFF
        self.v[0xF] = 1 if overflow else 0

    def _op_8xy5(self, op: _Operands) -> None:
        underflow = self.v[op.x] < self.v[op.y]
        self.v[op.x] = (self.v[op.x] - self.v[op.y]) & 0xFF
        self.v[0xF] = 0 if underflow else 1

    def _op_8xy7(self, op: _Operands) -> None:
        underflow = self.v[op.x] > self.v[op.y]
        self.v[op.x] = (self.v[op.y] - self.v[op.x]) & 0xFF
        self.v[0xF] = 0 if underflow else 1

    def _op_8xy6(self, op: _Operands) -> None:
        value = self.v[op.y]
        self.v[op.x] = value >> 1
        self.v[0xF] = value & 0x1

    def _op_8xye(self, op: _Operands) -> None:
        value = self.v[op.y]
        self.v[op.x] = (value << 1) & 0xFF
        self.v[0xF] = (value & 0x80) >> 7

    # ----- control flow -----

    def _op_1nnn(self, op: _Operands) -> None:
        self.pc = op.nnn

    def _op_3xnn(self, op: _Operands) -> None:
        if self.v[op.x] == op.nn:
            self._skip()

    def _op_4xnn(self, op: _Operands) -> None:
        if self.v[op.x] != op.nn:
            self._skip()

    def _op_5xy0(self, op: _Operands) -> None:
        if self.v[op.x] == self.v[op.y]:
            self._skip()

    def _op_9xy0(self, op: _Operands) -> None:
        if self.v[op.x] != self.v[op.y]:
            self._skip()

    def _op_bnnn(self, op: _Operands) -> None:
        self.pc = op.nnn + self.v[0]

    # ----- memory and display -----

    def _op_annn(self, op: _Operands) -> None:
        self.i = op.nnn

    def _op_cxnn(self, op: _Operands) -> None:
        self.v[op.x] = self._random() & op.nn

    def _op_dxyn(self, op: _Operands) -> None:
        self.v[0xF] = 0
        draw_y = self.v[op.y] % config.PIXEL_HEIGHT

        for byte_idx in range(op.n):
            if draw_y >= config.PIXEL_HEIGHT:
                break
            sprite_byte = self.ram.read((self.i + byte_idx) & 0xFFFF)
            draw_x = self.v[op.x] % config.PIXEL_WIDTH

            for bit_idx in range(7, -1, -1):
                if draw_x >= config.PIXEL_WIDTH:
                    break
                if (sprite_byte >> bit_idx) & 0x1:
                    if self.peripherals.check_pixel(draw_x, draw_y):
                        self.v[0xF] = 1
                        self.peripherals.set_pixel(draw_x, draw_y, False)
                    else:
                        self.peripherals.set_pixel(draw_x, draw_y, True)
                draw_x += 1
            draw_y += 1

        self.draw_flag = True

    # ----- subroutines -----

    def _op_2nnn(self, op: _Operands) -> None:
        self._push_stack(self.pc)
        self.pc = op.nnn

    def _op_00ee(self, op: _Operands) -> None:
        self.pc = self._pop_stack()

    # ----- input -----

    def _op_ex9e(self, op: _Operands) -> None:
        if self.peripherals.key_state[self.v[op.x]]:
            self._skip()

    def _op_exa1(self, op: _Operands) -> None:
        if not self.peripherals.key_state[self.v[op.x]]:
            self._skip()

    def _op_fx0a(self, op: _Operands) -> None:
        if not self.waiting_for_key:
            self.waiting_for_key = True
            # Only presses made while waiting count.
            self.peripherals.input_flag = False
        elif self.peripherals.input_flag:
            self.waiting_for_key = False
            self.peripherals.input_flag = False
            self.v[op.x] = self.peripherals.last_key
            self._skip()

    # ----- timers and utility -----

    def _op_fx07(self, op: _Operands) -> None:
        self.v[op.x] = self.delay_timer.value

    def _op_fx15(self, op: _Operands) -> None:
        self.delay_timer.value = self.v[op.x]

    def _op_fx18(self, op: _Operands) -> None:
        self.sound_timer.value = self.v[op.x]

    def _op_fx1e(self, op: _Operands) -> None:
        overflow = self.i > 0xFF - self.v[op.x]
        self.i = (self.i + self.v[op.x]) & 0xFFFF
        if overflow:
            self.v[0xF] = 1

    def _op_fx29(self, op: _Operands) -> None:
        # Each font character occupies five bytes.
        self.i = config.FONT_START_ADDRESS + op.x * 5

    def _op_fx33(self, op: _Operands) -> None:
        value = self.v[op.x]
        self.ram.write(self.i, value // 100)
        self.ram.write(self.i + 1, value // 10 % 10)
        self.ram.write(self.i + 2, value % 10)

    def _op_fx55(self, op: _Operands) -> None:
        for register in range(op.x + 1):
            self.ram.write(self.i, self.v[register])
            self.i = (self.i + 1) & 0xFFFF

    def _op_fx65(self, op: _Operands) -> None:
        for register in range(op.x + 1):
            self.v[register] = self.ram.read(self.i)
            self.i = (self.i + 1) & 0xFFFF

    # ----- system -----

    def _op_00e0(self, op: _Operands) -> None:
        self.peripherals.clear_pixel_buffer()
        self.draw_flag = True

    # Ordered most common first; the first matching entry wins.
    _OPCODE_HANDLERS = (
        _OpcodeInfo(0x6000, 0xF000, _op_6xnn),
        _OpcodeInfo(0x7000, 0xF000, _op_7xnn),
        _OpcodeInfo(0x8000, 0xF00F, _op_8xy0),
        _OpcodeInfo(0x8004, 0xF00F, _op_8xy4),
        _OpcodeInfo(0x8005, 0xF00F, _op_8xy5),
        _OpcodeInfo(0x8001, 0xF00F, _op_8xy1),
        _OpcodeInfo(0x8002, 0xF00F, _op_8xy2),
        _OpcodeInfo(0x8003, 0xF00F, _op_8xy3),
        _OpcodeInfo(0x8007, 0xF00F, _op_8xy7),
        _OpcodeInfo(0x8006, 0xF00F, _op_8xy6),
        _OpcodeInfo(0x800E, 0xF00F, _op_8xye),
        _OpcodeInfo(0x1000, 0xF000, _op_1nnn, False),
        _OpcodeInfo(0x3000, 0xF000, _op_3xnn),
        _OpcodeInfo(0x4000, 0xF000, _op_4xnn),
        _OpcodeInfo(0x5000, 0xF00F, _op_5xy0),
        _OpcodeInfo(0x9000, 0xF00F, _op_9xy0),
        _OpcodeInfo(0xB000, 0xF000, _op_bnnn, False),
        _OpcodeInfo(0xA000, 0xF000, _op_annn),
        _OpcodeInfo(0xD000, 0xF000, _op_dxyn),
        _OpcodeInfo(0xC000, 0xF000, _op_cxnn),
        _OpcodeInfo(0x2000, 0xF000, _op_2nnn, False),
        _OpcodeInfo(0x00EE, 0xFFFF, _op_00ee),
        _OpcodeInfo(0xE09E, 0xF0FF, _op_ex9e),
        _OpcodeInfo(0xE0A1, 0xF0FF, _op_exa1),
        _OpcodeInfo(0xF00A, 0xF0FF, _op_fx0a, False),
        _OpcodeInfo(0xF007, 0xF0FF, _op_fx07),
        _OpcodeInfo(0xF015, 0xF0FF, _op_fx15),
        _OpcodeInfo(0xF018, 0xF0FF, _op_fx18),
        _OpcodeInfo(0xF01E, 0xF0FF, _op_fx1e),
        _OpcodeInfo(0xF029, 0xF0FF, _op_fx29),
        _OpcodeInfo(0xF033, 0xF0FF, _op_fx33),
        _OpcodeInfo(0xF055, 0xF0FF, _op_fx55),
        _OpcodeInfo(0xF065, 0xF0FF, _op_fx65),
        _OpcodeInfo(0x00E0, 0xFFFF, _op_00e0),
    )