# chip8_tracer/io/keypad.py
"""
16キーの入力状態を保持するキーパッド。
ホスト側のキー名（"Q"、"1"など）からCHIP-8のキー番号への変換も担います。
"""
from typing import Dict, List, Mapping, Optional, Sequence

from chip8_tracer.arch.chip8.state import KEY_COUNT
from chip8_tracer.config.models import REFERENCE_KEY_MAP


# @intent:responsibility KeySourceとして、外部入力から更新される16キーの押下状態を提供します。
class Keypad:
    def __init__(self, key_map: Optional[Mapping[str, int]] = None):
        source = key_map if key_map is not None else REFERENCE_KEY_MAP
        self._key_map: Dict[str, int] = {name.upper(): index for name, index in source.items()}
        self._states: List[bool] = [False] * KEY_COUNT

    def key_states(self) -> Sequence[bool]:
        return list(self._states)

    def press(self, key: int) -> None:
        self._states[self._check_key(key)] = True

    def release(self, key: int) -> None:
        self._states[self._check_key(key)] = False

    def _check_key(self, key: int) -> int:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key index {key} is outside 0x0-0xF.")
        return key

    def release_all(self) -> None:
        self._states = [False] * KEY_COUNT

    # @intent:responsibility ホストのキー名をCHIP-8のキー番号に変換します。割り当てがなければNone。
    def map_host_key(self, name: str) -> Optional[int]:
        return self._key_map.get(name.upper())

    # @intent:return キーが割り当てられていればTrue。
    def press_host_key(self, name: str) -> bool:
        key = self.map_host_key(name)
        if key is None:
            return False
        self.press(key)
        return True

    def release_host_key(self, name: str) -> bool:
        key = self.map_host_key(name)
        if key is None:
            return False
        self.release(key)
        return True
