"""Emulated main memory."""

from __future__ import annotations

import os
from typing import Union

from . import config

PathLike = Union[str, "os.PathLike[str]"]


class RAM:
    """Byte-addressable memory of ``config.MEMORY_SIZE`` bytes."""

    def __init__(self) -> None:
        self._memory = bytearray(config.MEMORY_SIZE)

    @staticmethod
    def _check(address: int) -> None:
        if not 0 <= address < config.MEMORY_SIZE:
            raise IndexError("Address out of range")

    def read(self, address: int) -> int:
        """Return the byte stored at ``address``."""
        self._check(address)
        return self._memory[address]

    def write(self, address: int, value: int) -> None:
        """Store the low eight bits of ``value`` at ``address``."""
        self._check(address)
        self._memory[address] = value & 0xFF

    def erase(self) -> None:
        """Fill the whole memory with zeros."""
        self._memory[:] = bytes(config.MEMORY_SIZE)

    def load_bytes(self, data: bytes, address: int = 0) -> None:
        """Copy ``data`` into memory starting at ``address``."""
        if address < 0 or len(data) + address - config.MEMORY_START_ADDRESS > config.MEMORY_SIZE:
            raise IndexError(
                "data cannot be written -- requested write location results "
                "in writes exceeding memory size"
            )
        self._memory[address : address + len(data)] = data

    def load_file(self, path: PathLike, address: int = 0) -> None:
        """Load the contents of the file at ``path`` into memory at ``address``."""
        with open(path, "rb") as handle:
            data = handle.read()
        try:
            self.load_bytes(data, address)
        except IndexError:
            raise IndexError(
                f'File "{os.fspath(path)}" cannot be written -- requested write '
                "location results in writes exceeding memory size"
            ) from None

    def dump(self, address: int, length: int) -> str:
        """Return a listing of the non-zero bytes in ``[address, address + length)``."""
        lines = [f"Memdump -- Addr {address:04x}, {length} bytes"]
        for current in range(address, address + length):
            value = self.read(current - config.MEMORY_START_ADDRESS)
            if value:
                lines.append(f"{current:04X}: {value:02X}")
        return "\n".join(lines) + "\n"