# retro_chip8/ui/keymap.py
"""
物理キーと論理キー(0x0-0xF)の対応付け。

設定ファイルのキー名（"x", "1", "space", "up" など）をQt.Keyのコードに解決します。
"""
from typing import Dict

from PySide6.QtCore import Qt

from retro_chip8.common.types import KeyMap

# @intent:utility_function キー名をQt.Keyの属性名に変換します（"x" -> "Key_X", "space" -> "Key_Space"）。
def qt_key_attribute(name: str) -> str:
    if len(name) == 1:
        return f"Key_{name.upper()}"
    return f"Key_{name[0].upper()}{name[1:].lower()}"

def _key_code(key) -> int:
    return key.value if hasattr(key, "value") else int(key)

# @intent:responsibility 設定のキーマップを Qtキーコード -> 論理キー の辞書に変換します。
# @intent:post-condition 解決できないキー名はValueErrorになります。
def resolve_keymap(keymap: KeyMap) -> Dict[int, int]:
    resolved = {}
    for name, index in keymap.items():
        key = getattr(Qt.Key, qt_key_attribute(name), None)
        if key is None:
            raise ValueError(f"Unknown key name in keymap: '{name}'")
        resolved[_key_code(key)] = index
    return resolved
