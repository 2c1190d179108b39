"""Tests for instruction decoding and mnemonics."""

import pytest
from chip8vm import decode, disassemble, mnemonic, Opcode, INSTRUCTION_NAMES


def test_decode_fields():
    decoded = decode(0xD12F)
    assert decoded.raw == 0xD12F
    assert decoded.family == 0xD
    assert decoded.x == 0x1
    assert decoded.y == 0x2
    assert decoded.n == 0xF
    assert decoded.nn == 0x2F
    assert decoded.nnn == 0x12F
    assert decoded.op == Opcode.DRW


@pytest.mark.parametrize("instruction, op", [
    (0x00E0, Opcode.CLS),
    (0x00EE, Opcode.RET),
    (0x1234, Opcode.JP),
    (0x2ABC, Opcode.CALL),
    (0x3A10, Opcode.SE_IMM),
    (0x4A10, Opcode.SNE_IMM),
    (0x5AB0, Opcode.SE_REG),
    (0x6A10, Opcode.LD_IMM),
    (0x7A10, Opcode.ADD_IMM),
    (0x8AB0, Opcode.LD_REG),
    (0x8AB1, Opcode.OR),
    (0x8AB2, Opcode.AND),
    (0x8AB3, Opcode.XOR),
    (0x8AB4, Opcode.ADD_REG),
    (0x8AB5, Opcode.SUB),
    (0x8AB6, Opcode.SHR),
    (0x8AB7, Opcode.SUBN),
    (0x8ABE, Opcode.SHL),
    (0x9AB0, Opcode.SNE_REG),
    (0xA123, Opcode.LD_I),
    (0xB123, Opcode.JP_V0),
    (0xCA0F, Opcode.RND),
    (0xDAB5, Opcode.DRW),
    (0xEA9E, Opcode.SKP),
    (0xEAA1, Opcode.SKNP),
    (0xFA07, Opcode.LD_VX_DT),
    (0xFA0A, Opcode.LD_VX_K),
    (0xFA15, Opcode.LD_DT_VX),
    (0xFA18, Opcode.LD_ST_VX),
    (0xFA1E, Opcode.ADD_I_VX),
    (0xFA29, Opcode.LD_F_VX),
    (0xFA33, Opcode.LD_B_VX),
    (0xFA55, Opcode.LD_MEM_VX),
    (0xFA65, Opcode.LD_VX_MEM),
])
def test_every_opcode_resolves(instruction, op):
    assert decode(instruction).op == op


@pytest.mark.parametrize("instruction", [
    0x5551,  # 5XY? with nonzero low nibble
    0x9AB1,
    0x8AB8,
    0x8ABF,
    0x0123,  # machine-code SYS call
    0xE0FF,
    0xFA00,
    0xFA66,
])
def test_unrecognized_instructions(instruction):
    assert decode(instruction).op is None
    assert mnemonic(instruction) is None


def test_instruction_names_cover_every_opcode():
    assert set(INSTRUCTION_NAMES) == set(Opcode)
    assert INSTRUCTION_NAMES[0x00E0] == "CLS"
    assert INSTRUCTION_NAMES[0x8004] == "ADD Vx, Vy"


def test_mnemonic():
    assert mnemonic(0x00EE) == "RET"
    assert mnemonic(0xF365) == "LD Vx, [I]"


@pytest.mark.parametrize("instruction, text", [
    (0x00E0, "CLS"),
    (0x1ABC, "JP 0xABC"),
    (0x6A42, "LD VA, 0x42"),
    (0x8124, "ADD V1, V2"),
    (0xB300, "JP V0, 0x300"),
    (0xD125, "DRW V1, V2, 5"),
    (0xF033, "LD B, V0"),
    (0x5551, "DW 0x5551"),
])
def test_disassemble(instruction, text):
    assert disassemble(instruction) == text
