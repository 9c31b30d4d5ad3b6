# tests/arch/chip8/test_state.py
"""
CHIP-8のマシン状態、フォールト記録、フォントの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.state import (
    Chip8CpuState, Fault, FaultKind, DISPLAY_WIDTH, DISPLAY_HEIGHT, PROGRAM_START, MAX_PROGRAM_SIZE,
)
from retro_chip8.arch.chip8.font import FONT, FONT_HEIGHT, glyph

class TestChip8CpuState:
    # @intent:test_case_init 初期状態が全てゼロで、PCが0x200であることを検証します。
    def test_initial_state(self):
        state = Chip8CpuState()
        assert state.pc == PROGRAM_START == 0x200
        assert state.v == [0] * 16
        assert state.i == 0
        assert state.stack == []
        assert (state.delay_timer, state.sound_timer) == (0, 0)
        assert len(state.display) == DISPLAY_WIDTH * DISPLAY_HEIGHT == 2048
        assert not any(state.display)
        assert state.keys == [False] * 16
        assert state.pending_key_target is None
        assert state.fault is None
        assert not state.is_halted
        assert not state.is_waiting_for_key

    def test_instances_do_not_share_lists(self):
        a, b = Chip8CpuState(), Chip8CpuState()
        a.v[0] = 1
        a.display[0] = True
        assert b.v[0] == 0
        assert b.display[0] is False

    def test_vf_accessor(self):
        state = Chip8CpuState()
        state.vf = 0x101
        assert state.v[15] == 0x01
        assert state.vf == 0x01

    def test_pixel_and_clear(self):
        state = Chip8CpuState()
        state.display[1 * DISPLAY_WIDTH + 3] = True
        assert state.pixel(3, 1)
        assert not state.pixel(1, 3)
        state.clear_display()
        assert not any(state.display)

    def test_display_rows(self):
        state = Chip8CpuState()
        state.display[0] = True
        state.display[DISPLAY_WIDTH - 1] = True
        rows = state.display_rows()
        assert len(rows) == DISPLAY_HEIGHT
        assert rows[0] == "#" + "." * 62 + "#"
        assert rows[1] == "." * 64

    def test_max_program_size(self):
        assert MAX_PROGRAM_SIZE == 0xE00

class TestFault:
    # @intent:test_case_format フォールトが種類、16進アドレス、16進命令語の1行で表現されることを検証します。
    @pytest.mark.parametrize("kind, text", [
        (FaultKind.INVALID_OPCODE, "invalid opcode at 0x200 (opcode: 0x5121)"),
        (FaultKind.INVALID_KEY, "invalid key at 0x200 (opcode: 0x5121)"),
        (FaultKind.INVALID_HEX_DIGIT, "invalid hex digit at 0x200 (opcode: 0x5121)"),
        (FaultKind.STACK_UNDERFLOW, "stack underflow at 0x200 (opcode: 0x5121)"),
    ])
    def test_str(self, kind, text):
        assert str(Fault(kind=kind, address=0x200, opcode=0x5121)) == text

    def test_address_zero_padded(self):
        assert str(Fault(FaultKind.STACK_UNDERFLOW, 0x00A, 0x00EE)) == "stack underflow at 0x00a (opcode: 0x00ee)"

    def test_fault_is_immutable(self):
        fault = Fault(FaultKind.INVALID_OPCODE, 0x200, 0xFFFF)
        with pytest.raises(AttributeError):
            fault.address = 0x300

class TestFont:
    def test_font_table_size(self):
        assert len(FONT) == 16 * FONT_HEIGHT == 80

    def test_glyphs(self):
        assert glyph(0x0) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
        assert glyph(0x1) == bytes([0x20, 0x60, 0x20, 0x20, 0x70])
        assert glyph(0xF) == bytes([0xF0, 0x80, 0xF0, 0x80, 0x80])
