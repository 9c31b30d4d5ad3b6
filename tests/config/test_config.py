# tests/config/test_config.py
"""
retro_chip8.configパッケージ（YAML設定の読み込みとシステム構築）の単体テスト。
"""
from random import Random

import pytest

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import HostConfig, DEFAULT_KEYMAP
from retro_chip8.config.builder import SystemBuilder

class TestConfigLoader:
    def test_defaults_for_empty_document(self):
        config = ConfigLoader().load_from_string("")
        assert config == HostConfig()
        assert config.cycles_per_frame == 16
        assert config.timer_hz == 60
        assert config.keymap == DEFAULT_KEYMAP

    def test_default_keymap_covers_all_keys(self):
        assert sorted(DEFAULT_KEYMAP.values()) == list(range(16))

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "host.yaml"
        path.write_text(
            "cycles_per_frame: 20\n"
            "scale: 8\n"
            "seed: '0x10'\n"
            "color_on: '#FFFFFF'\n"
            "log_level: debug\n"
            "keymap:\n"
            "  Space: 0x5\n"
            "  '1': 1\n"
            "unknown_key: ignored\n"
        )
        config = ConfigLoader().load_from_file(str(path))
        assert config.cycles_per_frame == 20
        assert config.scale == 8
        assert config.seed == 16
        assert config.color_on == "#FFFFFF"
        assert config.log_level == "DEBUG"
        assert config.keymap == {"space": 5, "1": 1}

    @pytest.mark.parametrize("text", [
        "cycles_per_frame: 0",
        "timer_hz: -60",
        "scale: abc",
        "keymap:\n  x: 16",
        "keymap: [x, y]",
        "amplitude: 40000",
        "seed: true",
        "- not a mapping",
        "cycles_per_frame: [1, 2",
        "log_level: basic_format",
        "log_level: DEBUGG",
    ])
    def test_invalid_values(self, text):
        with pytest.raises(ValueError):
            ConfigLoader().load_from_string(text)

class TestSystemBuilder:
    def test_build_system(self):
        cpu, bus = SystemBuilder().build_system(HostConfig(), b"\x60\x05")
        assert bus.dump()[0x200:0x202] == b"\x60\x05"
        cpu.step()
        assert cpu.registers[0] == 5

    # @intent:test_case_seed シードを指定すると乱数命令の結果が再現可能になることを検証します。
    def test_seeded_random(self):
        config = HostConfig(seed=1234)
        cpu, _ = SystemBuilder().build_system(config, b"\xC0\xFF")
        cpu.step()
        assert cpu.registers[0] == Random(1234).getrandbits(8)

    def test_build_without_program(self):
        cpu, bus = SystemBuilder().build_system(HostConfig())
        assert bus.dump()[0x200:] == bytes(0xE00)
        assert cpu.get_state().pc == 0x200

class TestConfigErrors:
    # @intent:test_case_malformed_yaml YAMLの構文エラーがValueErrorとして報告されることを検証します。
    def test_malformed_yaml_file(self, tmp_path):
        path = tmp_path / "host.yaml"
        path.write_text("cycles_per_frame: [1, 2\n")
        with pytest.raises(ValueError, match="Malformed YAML config"):
            ConfigLoader().load_from_file(str(path))

    @pytest.mark.parametrize("level", ["critical", "error", "warning", "info", "debug"])
    def test_log_levels_accepted(self, level):
        assert ConfigLoader().load_from_string(f"log_level: {level}").log_level == level.upper()

    def test_unknown_log_level_message(self):
        with pytest.raises(ValueError, match="log_level must be one of"):
            ConfigLoader().load_from_string("log_level: verbose")
