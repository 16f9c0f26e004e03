# chip8_tracer/ui/keys.py
"""
Qtのキーコードからホストキー名への変換。
"""
from typing import Optional

# @intent:responsibility 印字可能なASCII範囲のキーコードを大文字のキー名に変換します。
# @intent:rationale Qtの英数字キーコードはASCIIの大文字コードと一致するため、chr()で名前を得られます。
def host_key_name(key: int) -> Optional[str]:
    if 0x20 < key <= 0x7E:
        return chr(key).upper()
    return None
