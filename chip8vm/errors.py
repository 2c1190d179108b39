"""CHIP-8 engine errors."""


class EmulatorError(Exception):
    """Base class for faults raised by the execution engine."""


class AddressOutOfRangeError(EmulatorError):
    """Raised when pc, I or a memory access leaves the 4K address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = address
        self.length = length
        if length > 1:
            message = f"address range 0x{address:X}..0x{address + length - 1:X} out of range"
        else:
            message = f"address 0x{address:X} out of range"
        super().__init__(message)


class StackOverflowError(EmulatorError):
    """Raised on a call with all 16 stack slots in use."""


class StackUnderflowError(EmulatorError):
    """Raised on a return with an empty stack."""


class RomTooLargeError(EmulatorError):
    """Raised when a ROM does not fit between 0x200 and the end of memory."""
