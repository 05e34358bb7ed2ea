"""Eight-bit countdown timer."""

from __future__ import annotations


class Timer:
    """A countdown timer holding an 8-bit value that stops at zero."""

    def __init__(self, value: int = 0) -> None:
        self._value = 0
        self.value = value

    @property
    def value(self) -> int:
        return self._value

    @value.setter
    def value(self, new_value: int) -> None:
        self._value = new_value & 0xFF

    def tick(self) -> None:
        """Decrement the timer unless it has already reached zero."""
        if self._value > 0:
            self._value -= 1

    def in_timeout(self) -> bool:
        """Return True when the timer has run out."""
        return self._value == 0

    def __repr__(self) -> str:
        return f"Timer(value={self._value})"