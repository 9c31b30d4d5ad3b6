# tests/loader/test_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import pytest

from retro_chip8.loader.loader import RomLoader
from retro_chip8.common.errors import RomTooLargeError

# @intent:test_suite ROMファイルの読み込みと、サイズ超過ROMの拒否を検証します。

class TestRomLoader:
    def test_read_rom(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x60\x05\x70\x03")
        assert RomLoader().read_rom(str(rom)) == b"\x60\x05\x70\x03"

    def test_load_rom_into_cpu(self, tmp_path, make_cpu):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x60\x05\x70\x03")
        cpu = make_cpu()
        RomLoader().load_rom(str(rom), cpu)
        cpu.step()
        cpu.step()
        assert cpu.registers[0] == 8

    def test_max_size_accepted(self, tmp_path):
        rom = tmp_path / "max.ch8"
        rom.write_bytes(bytes(0xE00))
        assert len(RomLoader().read_rom(str(rom))) == 0xE00

    # @intent:test_case_oversize 切り詰めずに拒否することを検証します。
    def test_oversized_rom_rejected(self, tmp_path, make_cpu):
        rom = tmp_path / "big.ch8"
        rom.write_bytes(bytes(0xE01))
        cpu = make_cpu()
        with pytest.raises(RomTooLargeError, match=r"ROM too big! \(3585 bytes\)") as excinfo:
            RomLoader().load_rom(str(rom), cpu)
        assert excinfo.value.size == 0xE01
        assert isinstance(excinfo.value, ValueError)
        assert cpu.memory[0x200:] == bytes(0xE00)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RomLoader().read_rom(str(tmp_path / "missing.ch8"))
