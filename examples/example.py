"""Headless CHIP-8 run: draw the digits of 234 and save the screen."""

import sys

import jax

from chip8vm import create_state, load_rom, run_cycles, disassemble, save_frame, framebuffer, PIXEL_ON

PROGRAM = [
    0x60EA,  # LD V0, 234
    0xA300,  # LD I, 0x300
    0xF033,  # LD B, V0
    0xF265,  # LD V2, [I]   V0..V2 = 2, 3, 4
    0x6300,  # LD V3, 0     x
    0x6400,  # LD V4, 0     y
    0xF029,  # LD F, V0
    0xD345,  # DRW V3, V4, 5
    0x7305,  # ADD V3, 5
    0xF129,  # LD F, V1
    0xD345,
    0x7305,
    0xF229,  # LD F, V2
    0xD345,
    0x121C,  # JP 0x21C (halt)
]


def assemble(words):
    return bytes(b for word in words for b in (word >> 8, word & 0xFF))


if __name__ == "__main__":
    output = sys.argv[1] if len(sys.argv) > 1 else "digits.png"

    for address, word in enumerate(PROGRAM):
        print(f"0x{0x200 + 2 * address:03X}: {word:04X}  {disassemble(word)}")

    state = load_rom(create_state(jax.random.PRNGKey(0)), assemble(PROGRAM))
    state = run_cycles(state, 64, show_progress=True)

    lit = int((framebuffer(state) == PIXEL_ON).sum())
    print(f"{lit} pixels lit, pc=0x{int(state.pc):03X}")

    save_frame(state, output, scale=8, color_scheme="amber")
    print(f"Saved {output}")
