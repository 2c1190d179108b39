"""CHIP-8 instruction decoding."""

from enum import IntEnum
from typing import Optional

from chex import dataclass


class Opcode(IntEnum):
    """Instruction tags, valued by their key in the dispatch tables."""
    CLS = 0x00E0
    RET = 0x00EE
    JP = 0x1000
    CALL = 0x2000
    SE_IMM = 0x3000
    SNE_IMM = 0x4000
    SE_REG = 0x5000
    LD_IMM = 0x6000
    ADD_IMM = 0x7000
    LD_REG = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD_REG = 0x8004
    SUB = 0x8005
    SHR = 0x8006
    SUBN = 0x8007
    SHL = 0x800E
    SNE_REG = 0x9000
    LD_I = 0xA000
    JP_V0 = 0xB000
    RND = 0xC000
    DRW = 0xD000
    SKP = 0xE09E
    SKNP = 0xE0A1
    LD_VX_DT = 0xF007
    LD_VX_K = 0xF00A
    LD_DT_VX = 0xF015
    LD_ST_VX = 0xF018
    ADD_I_VX = 0xF01E
    LD_F_VX = 0xF029
    LD_B_VX = 0xF033
    LD_MEM_VX = 0xF055
    LD_VX_MEM = 0xF065


# Most specific mask first; a tier only matches the opcodes registered in it.
MASK_TIERS = (
    (0xF0FF, frozenset({
        Opcode.CLS, Opcode.RET, Opcode.SKP, Opcode.SKNP,
        Opcode.LD_VX_DT, Opcode.LD_VX_K, Opcode.LD_DT_VX, Opcode.LD_ST_VX,
        Opcode.ADD_I_VX, Opcode.LD_F_VX, Opcode.LD_B_VX,
        Opcode.LD_MEM_VX, Opcode.LD_VX_MEM,
    })),
    (0xF00F, frozenset({
        Opcode.SE_REG, Opcode.LD_REG, Opcode.OR, Opcode.AND, Opcode.XOR,
        Opcode.ADD_REG, Opcode.SUB, Opcode.SHR, Opcode.SUBN, Opcode.SHL,
        Opcode.SNE_REG,
    })),
    (0xF000, frozenset({
        Opcode.JP, Opcode.CALL, Opcode.SE_IMM, Opcode.SNE_IMM, Opcode.LD_IMM,
        Opcode.ADD_IMM, Opcode.LD_I, Opcode.JP_V0, Opcode.RND, Opcode.DRW,
    })),
)

INSTRUCTION_NAMES = {
    Opcode.CLS: "CLS",
    Opcode.RET: "RET",
    Opcode.JP: "JP addr",
    Opcode.CALL: "CALL addr",
    Opcode.SE_IMM: "SE Vx, byte",
    Opcode.SNE_IMM: "SNE Vx, byte",
    Opcode.SE_REG: "SE Vx, Vy",
    Opcode.LD_IMM: "LD Vx, byte",
    Opcode.ADD_IMM: "ADD Vx, byte",
    Opcode.LD_REG: "LD Vx, Vy",
    Opcode.OR: "OR Vx, Vy",
    Opcode.AND: "AND Vx, Vy",
    Opcode.XOR: "XOR Vx, Vy",
    Opcode.ADD_REG: "ADD Vx, Vy",
    Opcode.SUB: "SUB Vx, Vy",
    Opcode.SHR: "SHR Vx",
    Opcode.SUBN: "SUBN Vx, Vy",
    Opcode.SHL: "SHL Vx",
    Opcode.SNE_REG: "SNE Vx, Vy",
    Opcode.LD_I: "LD I, addr",
    Opcode.JP_V0: "JP V0, addr",
    Opcode.RND: "RND Vx, byte",
    Opcode.DRW: "DRW Vx, Vy, nibble",
    Opcode.SKP: "SKP Vx",
    Opcode.SKNP: "SKNP Vx",
    Opcode.LD_VX_DT: "LD Vx, DT",
    Opcode.LD_VX_K: "LD Vx, K",
    Opcode.LD_DT_VX: "LD DT, Vx",
    Opcode.LD_ST_VX: "LD ST, Vx",
    Opcode.ADD_I_VX: "ADD I, Vx",
    Opcode.LD_F_VX: "LD F, Vx",
    Opcode.LD_B_VX: "LD B, Vx",
    Opcode.LD_MEM_VX: "LD [I], Vx",
    Opcode.LD_VX_MEM: "LD Vx, [I]",
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    family: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)
    op: Optional[Opcode] = None  # None when no table matches


def lookup_opcode(instruction: int) -> Optional[Opcode]:
    """Resolve the opcode tag of a raw instruction word."""
    for mask, opcodes in MASK_TIERS:
        key = instruction & mask
        if key in opcodes:
            return Opcode(key)
    return None


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=instruction,
        family=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF,
        op=lookup_opcode(instruction),
    )


def mnemonic(instruction: int) -> Optional[str]:
    """Mnemonic template for an instruction word, or None if unrecognized."""
    op = lookup_opcode(int(instruction) & 0xFFFF)
    return INSTRUCTION_NAMES[op] if op is not None else None


def disassemble(instruction: int) -> str:
    """Render an instruction word with its operands filled in.

    Unrecognized words are rendered as a data directive, e.g. ``DW 0x5551``.
    """
    decoded = decode(instruction)
    if decoded.op is None:
        return f"DW 0x{decoded.raw:04X}"
    return (
        INSTRUCTION_NAMES[decoded.op]
        .replace("Vx", f"V{decoded.x:X}")
        .replace("Vy", f"V{decoded.y:X}")
        .replace("addr", f"0x{decoded.nnn:03X}")
        .replace("byte", f"0x{decoded.nn:02X}")
        .replace("nibble", f"{decoded.n}")
    )
