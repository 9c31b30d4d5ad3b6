from dataclasses import dataclass, field
from typing import Optional

from retro_chip8.common.types import KeyMap

# @intent:constant 物理キー(QWERTY)から論理キー0x0-0xFへの既定の対応。
#                  1 2 3 4 / q w e r / a s d f / z x c v の4x4ブロックを使います。
DEFAULT_KEYMAP: KeyMap = {
    "x": 0x0, "1": 0x1, "2": 0x2, "3": 0x3,
    "q": 0x4, "w": 0x5, "e": 0x6, "a": 0x7,
    "s": 0x8, "d": 0x9, "z": 0xA, "c": 0xB,
    "4": 0xC, "r": 0xD, "f": 0xE, "v": 0xF,
}

@dataclass
class HostConfig:
    cycles_per_frame: int = 16
    timer_hz: int = 60
    scale: int = 12
    color_on: str = "#393E41"
    color_off: str = "#F6F7EB"
    tone_hz: int = 441
    sample_rate: int = 44100
    amplitude: int = 28000
    seed: Optional[int] = None
    log_level: str = "INFO"
    keymap: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
