# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest
from retro_chip8.transport.bus import Bus, RAM, BusAccess, BusAccessType, MEMORY_SIZE

# @intent:test_suite 共通バスとRAMデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    # @intent:test_case_init 既定で4KBのゼロ初期化されたRAMが確保されることを検証します。
    def test_ram_default_size(self):
        ram = RAM()
        assert ram.get_size() == MEMORY_SIZE == 0x1000
        assert ram.dump() == bytes(0x1000)

    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    def test_ram_read_write_within_bounds(self):
        ram = RAM(4)
        ram.write(0, 0x12)
        ram.write(3, 0x78)
        assert ram.read(0) == 0x12
        assert ram.read(3) == 0x78

    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(IndexError, match="Address 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(IndexError):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

    # @intent:test_case_load ブロックロードと、範囲外へのロードの拒否を検証します。
    def test_ram_load_block(self):
        ram = RAM(8)
        ram.load(2, b"\x01\x02\x03")
        assert ram.dump() == b"\x00\x00\x01\x02\x03\x00\x00\x00"
        with pytest.raises(IndexError):
            ram.load(6, b"\x01\x02\x03")

    def test_ram_clear(self):
        ram = RAM(4)
        ram.load(0, b"\xFF\xFF\xFF\xFF")
        ram.clear()
        assert ram.dump() == bytes(4)

class TestBus:
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return bus

    def test_register_device_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError, match="does not match"):
            bus.register_device(0x000, 0xFFF, RAM(0x800))

    def test_register_device_invalid_range(self):
        bus = Bus()
        with pytest.raises(ValueError, match="Invalid address range"):
            bus.register_device(0x100, 0x0FF, RAM(1))

    def test_register_device_wrong_type(self):
        bus = Bus()
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x003, bytearray(4))

    def test_unmapped_address(self, bus):
        with pytest.raises(IndexError, match="not mapped"):
            bus.read(0x1000)

    # @intent:test_case_activity 読み書きがログに記録され、取得時にクリアされることを検証します。
    def test_activity_log(self, bus):
        bus.write(0x300, 0xAB)
        assert bus.read(0x300) == 0xAB
        log = bus.get_and_clear_activity_log()
        assert log == [
            BusAccess(address=0x300, data=0xAB, access_type=BusAccessType.WRITE),
            BusAccess(address=0x300, data=0xAB, access_type=BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_backdoor peekとloadはログに残らないことを検証します。
    def test_peek_and_load_are_not_logged(self, bus):
        bus.load(0x200, b"\x60\x05")
        assert bus.peek(0x200) == 0x60
        assert bus.peek(0x201) == 0x05
        assert bus.get_and_clear_activity_log() == []

    def test_dump_and_clear(self, bus):
        bus.load(0x000, b"\xF0\x90")
        bus.write(0x010, 0x01)
        dump = bus.dump()
        assert len(dump) == 0x1000
        assert dump[0:2] == b"\xF0\x90"
        bus.clear()
        assert bus.dump() == bytes(0x1000)
        assert bus.get_and_clear_activity_log() == []
