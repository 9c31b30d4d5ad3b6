# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。

CHIP-8のROMはビッグエンディアンの16bit命令語を並べただけの生のバイト列で、
そのまま0x200からロードされます。
"""
import logging

from retro_chip8.common.errors import RomTooLargeError
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import MAX_PROGRAM_SIZE

logger = logging.getLogger(__name__)

class RomLoader:
    """
    ROMファイルを読み込み、CPUのメモリへロードするローダー。
    """
    # @intent:responsibility ROMファイル全体をバイナリとして読み込みます。
    # @intent:post-condition プログラム領域に収まらない場合はRomTooLargeErrorを送出し、切り詰めはしません。
    def read_rom(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomTooLargeError(len(data))
        logger.info("Read ROM %s (%d bytes)", file_path, len(data))
        return data

    def load_rom(self, file_path: str, cpu: Chip8Cpu) -> bytes:
        data = self.read_rom(file_path)
        cpu.load_program(data)
        return data
