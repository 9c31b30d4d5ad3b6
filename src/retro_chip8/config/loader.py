import yaml
from typing import Dict, Any

from .models import HostConfig, DEFAULT_KEYMAP

# @intent:constant 正の整数でなければならない設定項目。
_POSITIVE_INT_FIELDS = ("cycles_per_frame", "timer_hz", "scale", "tone_hz", "sample_rate")

# @intent:constant log_levelに指定できるloggingのレベル名。
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

class ConfigLoader:
    def load_from_file(self, path: str) -> HostConfig:
        with open(path, 'r') as f:
            data = self._safe_load(f)
        return self.parse_config(data or {})

    def load_from_string(self, text: str) -> HostConfig:
        return self.parse_config(self._safe_load(text) or {})

    # @intent:post-condition YAMLの構文エラーはValueErrorとして報告します。
    def _safe_load(self, stream: Any) -> Any:
        try:
            return yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML config: {e}") from e

    # @intent:responsibility 辞書からHostConfigを構築します。未知のキーは無視します。
    def parse_config(self, data: Dict[str, Any]) -> HostConfig:
        if not isinstance(data, dict):
            raise ValueError("Config root must be a mapping.")
        defaults = HostConfig()
        values: Dict[str, Any] = {}

        for name in _POSITIVE_INT_FIELDS:
            value = self._parse_int(data.get(name, getattr(defaults, name)))
            if value <= 0:
                raise ValueError(f"{name} must be a positive integer: {value}")
            values[name] = value

        values["amplitude"] = self._parse_int(data.get("amplitude", defaults.amplitude))
        if not 0 <= values["amplitude"] <= 0x7FFF:
            raise ValueError(f"amplitude must fit in a signed 16-bit sample: {values['amplitude']}")

        seed = data.get("seed")
        values["seed"] = None if seed is None else self._parse_int(seed)
        values["color_on"] = str(data.get("color_on", defaults.color_on))
        values["color_off"] = str(data.get("color_off", defaults.color_off))
        values["log_level"] = str(data.get("log_level", defaults.log_level)).upper()
        if values["log_level"] not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}: {values['log_level']}")
        values["keymap"] = self._parse_keymap(data.get("keymap"))

        return HostConfig(**values)

    def _parse_keymap(self, data: Any) -> Dict[str, int]:
        if data is None:
            return dict(DEFAULT_KEYMAP)
        if not isinstance(data, dict):
            raise ValueError("keymap must be a mapping of key name to key index.")
        keymap = {}
        for name, value in data.items():
            index = self._parse_int(value)
            if not 0 <= index <= 0xF:
                raise ValueError(f"Invalid key index for '{name}': {index}")
            keymap[str(name).lower()] = index
        return keymap

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
