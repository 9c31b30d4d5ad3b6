# tests/conftest.py
"""
CHIP-8テスト共通のフィクスチャ。
"""
from random import Random

import pytest

from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu


def assemble(*words: int) -> bytes:
    """16bit命令語の並びをビッグエンディアンのバイト列に変換します。"""
    return b"".join(word.to_bytes(2, "big") for word in words)


# @intent:fixture 命令語を0x200からロードしたCPUを生成するファクトリ。乱数はシード固定。
@pytest.fixture
def make_cpu():
    def _make(*words: int, seed: int = 0) -> Chip8Cpu:
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        cpu = Chip8Cpu(bus, rng=Random(seed))
        cpu.load_program(assemble(*words))
        return cpu
    return _make
