"""CHIP-8 ALU operations (8xxx)."""

from typing import Callable, Optional

from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction, Opcode
from chip8vm.constants import FLAG_REGISTER

# (vx, vy) -> (result, flag); a flag of None leaves VF untouched
AluOperation = Callable[[int, int], tuple[int, Optional[int]]]


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when VX > VY."""
    return (vx - vy) & 0xFF, int(vx > vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when VY > VX."""
    return (vy - vx) & 0xFF, int(vy > vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS: dict[Opcode, AluOperation] = {
    Opcode.LD_REG: alu_set,
    Opcode.OR: alu_or,
    Opcode.AND: alu_and,
    Opcode.XOR: alu_xor,
    Opcode.ADD_REG: alu_add,
    Opcode.SUB: alu_sub_xy,
    Opcode.SHR: alu_shift_right,
    Opcode.SUBN: alu_sub_yx,
    Opcode.SHL: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher.

    Both operands are read before any write. VF is written before VX, so when
    X is F the result overwrites the flag.
    """
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)

    new_V = state.V
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    new_V = new_V.at[instruction.x].set(result)
    return state.replace(V=new_V)
