# retro_chip8/arch/chip8/instructions/maps.py
"""
命令語と命令実装のマッピング定義。

命令語の上位4ビットで16通りのグループを選び、グループ0x0/0x8/0xE/0xFは
下位バイトまたは下位ニブルでさらに振り分けます。
"""
from . import control
from . import alu
from . import load
from . import display
from . import keypad

INVALID = "INVALID"

# @intent:map 単一の命令しか持たないグループ（上位ニブル → 命令名）。
GROUP_MAP = {
    0x1: "JUMP",
    0x2: "CALL",
    0x3: "SKIP_EQ_IMM",
    0x4: "SKIP_NE_IMM",
    0x6: "LOAD_IMM",
    0x7: "ADD_IMM",
    0xA: "LOAD_ADDR",
    0xB: "JUMP_OFFSET",
    0xC: "RANDOM",
    0xD: "DRAW_SPRITE",
}

# @intent:map 下位ニブルが0でなければならないグループ（5xy0, 9xy0）。
REGISTER_COMPARE_MAP = {
    0x5: "SKIP_EQ_REG",
    0x9: "SKIP_NE_REG",
}

# @intent:map グループ0x0: 下位12bit全体で判定。
SYSTEM_MAP = {
    0x0E0: "CLEAR_SCREEN",
    0x0EE: "RETURN",
}

# @intent:map グループ0x8: 下位ニブルで判定。
ALU_MAP = {
    0x0: "MOVE",
    0x1: "OR",
    0x2: "AND",
    0x3: "XOR",
    0x4: "ADD_REG",
    0x5: "SUB_REG",
    0x6: "SHIFT_RIGHT",
    0x7: "SUBN_REG",
    0xE: "SHIFT_LEFT",
}

# @intent:map グループ0xE: 下位バイトで判定。
KEY_MAP = {
    0x9E: "SKIP_KEY_PRESSED",
    0xA1: "SKIP_KEY_NOT_PRESSED",
}

# @intent:map グループ0xF: 下位バイトで判定。
MISC_MAP = {
    0x07: "GET_DELAY",
    0x0A: "WAIT_KEY",
    0x15: "SET_DELAY",
    0x18: "SET_SOUND",
    0x1E: "ADD_TO_ADDR",
    0x29: "FONT_ADDR",
    0x33: "STORE_BCD",
    0x55: "STORE_REGS",
    0x65: "LOAD_REGS",
}

# @intent:responsibility 命令語から命令名を決定します。該当しない場合はINVALIDを返します。
def lookup_name(opcode: int) -> str:
    group = (opcode >> 12) & 0xF
    if group in GROUP_MAP:
        return GROUP_MAP[group]
    if group in REGISTER_COMPARE_MAP:
        return REGISTER_COMPARE_MAP[group] if opcode & 0x000F == 0 else INVALID
    if group == 0x0:
        return SYSTEM_MAP.get(opcode & 0x0FFF, INVALID)
    if group == 0x8:
        return ALU_MAP.get(opcode & 0x000F, INVALID)
    if group == 0xE:
        return KEY_MAP.get(opcode & 0x00FF, INVALID)
    return MISC_MAP.get(opcode & 0x00FF, INVALID)

# @intent:map 命令名から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    "RETURN": control.execute_return,
    "JUMP": control.execute_jump,
    "CALL": control.execute_call,
    "SKIP_EQ_IMM": control.execute_skip_eq_imm,
    "SKIP_NE_IMM": control.execute_skip_ne_imm,
    "SKIP_EQ_REG": control.execute_skip_eq_reg,
    "SKIP_NE_REG": control.execute_skip_ne_reg,
    "JUMP_OFFSET": control.execute_jump_offset,
    INVALID: control.execute_invalid,

    # ALU
    "LOAD_IMM": alu.execute_load_imm,
    "ADD_IMM": alu.execute_add_imm,
    "MOVE": alu.execute_move,
    "OR": alu.execute_or,
    "AND": alu.execute_and,
    "XOR": alu.execute_xor,
    "ADD_REG": alu.execute_add_reg,
    "SUB_REG": alu.execute_sub_reg,
    "SHIFT_RIGHT": alu.execute_shift_right,
    "SUBN_REG": alu.execute_subn_reg,
    "SHIFT_LEFT": alu.execute_shift_left,
    "RANDOM": alu.execute_random,

    # Load/Store
    "LOAD_ADDR": load.execute_load_addr,
    "GET_DELAY": load.execute_get_delay,
    "SET_DELAY": load.execute_set_delay,
    "SET_SOUND": load.execute_set_sound,
    "ADD_TO_ADDR": load.execute_add_to_addr,
    "FONT_ADDR": load.execute_font_addr,
    "STORE_BCD": load.execute_store_bcd,
    "STORE_REGS": load.execute_store_regs,
    "LOAD_REGS": load.execute_load_regs,

    # Display
    "CLEAR_SCREEN": display.execute_clear_screen,
    "DRAW_SPRITE": display.execute_draw_sprite,

    # Keypad
    "SKIP_KEY_PRESSED": keypad.execute_skip_key_pressed,
    "SKIP_KEY_NOT_PRESSED": keypad.execute_skip_key_not_pressed,
    "WAIT_KEY": keypad.execute_wait_key,
}
