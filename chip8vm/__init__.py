"""CHIP-8 emulator package."""

from chip8vm.state import EmulatorState, StackState, create_state, reset
from chip8vm.emulator import (
    execute, fetch, cycle, run_cycles, tick_timers, load_rom,
    set_keypad, press_key, release_key, sound_active,
)
from chip8vm.decode import (
    DecodedInstruction, Opcode, INSTRUCTION_NAMES, decode, disassemble, mnemonic
)
from chip8vm.errors import (
    EmulatorError, AddressOutOfRangeError, StackOverflowError,
    StackUnderflowError, RomTooLargeError,
)
from chip8vm.constants import *
from chip8vm.rendering import framebuffer, display_to_rgb, create_color_scheme, save_frame

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "reset",
    "fetch",
    "execute",
    "cycle",
    "run_cycles",
    "tick_timers",
    "load_rom",
    "set_keypad",
    "press_key",
    "release_key",
    "sound_active",
    "DecodedInstruction",
    "Opcode",
    "INSTRUCTION_NAMES",
    "decode",
    "disassemble",
    "mnemonic",
    "EmulatorError",
    "AddressOutOfRangeError",
    "StackOverflowError",
    "StackUnderflowError",
    "RomTooLargeError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "PIXEL_ON",
    "PIXEL_OFF",
    "framebuffer",
    "display_to_rgb",
    "create_color_scheme",
    "save_frame",
]
