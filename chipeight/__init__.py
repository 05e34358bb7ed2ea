"""A CHIP-8 emulator: memory, timers, CPU, and a pygame window, keypad and buzzer."""

__version__ = "1.0.0"