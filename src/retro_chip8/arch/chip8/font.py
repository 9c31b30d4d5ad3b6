# retro_chip8/arch/chip8/font.py
"""
組み込みの16進数字フォント。

各グリフは4x5ピクセルで、1行を1バイトの上位4ビットで表します。
数字dのグリフはアドレス 5d から 5バイトを占めます。
"""

FONT_ADDRESS = 0x000
FONT_HEIGHT = 5

# @intent:constant 0-Fのグリフビットマップ。
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


def glyph(digit: int) -> bytes:
    """数字 `digit` (0-15) のグリフ5バイトを返します。"""
    start = digit * FONT_HEIGHT
    return FONT[start:start + FONT_HEIGHT]
