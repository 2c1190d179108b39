"""Tests for miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
import pytest
from chip8vm import execute, AddressOutOfRangeError, FONT_START


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = execute(fresh_state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestBCD:
    """Test BCD conversion."""

    @pytest.mark.parametrize("value, digits", [
        (234, [2, 3, 4]),
        (156, [1, 5, 6]),
        (0, [0, 0, 0]),
        (7, [0, 0, 7]),
        (255, [2, 5, 5]),
    ])
    def test_bcd_conversion(self, fresh_state, value, digits):
        state = execute(fresh_state, 0x6000 | value)
        state = execute(state, 0xA300)
        state = execute(state, 0xF033)

        assert state.memory[0x300:0x303].tolist() == digits

    def test_bcd_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0xAFFE)
        with pytest.raises(AddressOutOfRangeError):
            execute(state, 0xF033)


class TestFont:
    """Test font character addressing."""

    def test_font_all_characters(self, fresh_state):
        """Test font addressing for all hex digits."""
        state = fresh_state

        for digit in range(16):
            state = execute(state, 0x6000 | digit)  # V0 = digit
            state = execute(state, 0xF029)  # I = font address

            assert state.I == FONT_START + digit * 5, f"Font address wrong for digit {digit:X}"

    def test_font_loaded_at_startup(self, fresh_state):
        assert fresh_state.memory[0x050:0x055].tolist() == [0xF0, 0x90, 0x90, 0x90, 0xF0]
        assert fresh_state.memory[0x09B:0x0A0].tolist() == [0xF0, 0x80, 0xF0, 0x80, 0x80]


class TestAddToIndex:
    """Test FX1E."""

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xA300)
        state = execute(state, 0xF01E)

        assert state.I == 0x310
        assert state.V[15] == 0

    def test_add_to_index_leaves_vf(self, fresh_state):
        state = execute(fresh_state, 0x6F33)
        state = execute(state, 0xAF00)
        state = execute(state, 0xFF1E)  # I += VF

        assert state.I == 0xF33
        assert state.V[15] == 0x33

    def test_add_to_index_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xAF80)
        with pytest.raises(AddressOutOfRangeError):
            execute(state, 0xF01E)


class TestMemoryOperations:
    """Test store/load register operations."""

    def test_store_load_round_trip(self, fresh_state):
        """FX55 / FX65 restore V0..V5 exactly; I is unchanged."""
        state = fresh_state
        values = [0x01, 0x22, 0x33, 0xFE, 0x80, 0x7F]
        for i, value in enumerate(values):
            state = execute(state, 0x6000 | (i << 8) | value)
        state = execute(state, 0x6699)  # V6 must not be stored
        state = execute(state, 0xA400)

        state = execute(state, 0xF555)
        assert state.I == 0x400
        assert state.memory[0x400:0x406].tolist() == values
        assert state.memory[0x406] == 0

        state = state.replace(V=jnp.zeros_like(state.V))
        state = execute(state, 0xF565)

        assert state.V[:6].tolist() == values
        assert state.V[6] == 0
        assert state.I == 0x400

    def test_store_single_register(self, fresh_state):
        """FX55 with X = 0 stores only V0."""
        state = execute(fresh_state, 0x60AB)
        state = execute(state, 0x61CD)
        state = execute(state, 0xA500)
        state = execute(state, 0xF055)

        assert state.memory[0x500] == 0xAB
        assert state.memory[0x501] == 0

    def test_load_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0xAFFA)
        with pytest.raises(AddressOutOfRangeError):
            execute(state, 0xFF65)


class TestWaitForKey:
    """Test FX0A."""

    def test_wait_for_key_blocking(self, fresh_state):
        """No key held: pc rewinds so the instruction repeats."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0xF00A)

        assert state.pc == initial_pc - 2
        assert state.V[0] == 0

    def test_wait_for_key_pressed(self, fresh_state):
        """A held key is stored and execution continues."""
        state = fresh_state.replace(keypad=fresh_state.keypad.at[7].set(True))
        initial_pc = state.pc

        state = execute(state, 0xF30A)

        assert state.V[3] == 7
        assert state.pc == initial_pc

    def test_wait_for_key_highest_wins(self, fresh_state):
        """With several keys held the highest index is stored."""
        keypad = fresh_state.keypad.at[2].set(True).at[9].set(True).at[4].set(True)
        state = fresh_state.replace(keypad=keypad)

        state = execute(state, 0xF10A)

        assert state.V[1] == 9
