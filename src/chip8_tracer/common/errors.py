"""
実行時フォールトの定義。

従来のCHIP-8インタプリタでは未定義動作となるスタックの溢れや範囲外メモリアクセスを、
呼び出し元が捕捉できる型付きの例外として表現します。
"""
from typing import Optional


# @intent:responsibility 全ての実行時フォールトの基底クラスです。
class Chip8Fault(Exception):
    """
    命令実行中に検出されたフォールト。
    pcにはフォールトを起こした命令のアドレスが（判明していれば）格納されます。
    """
    def __init__(self, message: str, pc: Optional[int] = None):
        super().__init__(message)
        self.pc = pc

    def __str__(self) -> str:
        message = super().__str__()
        if self.pc is None:
            return message
        return f"{message} (at PC {self.pc:#05x})"


class StackOverflow(Chip8Fault):
    """16段を超えるCALL。"""


class StackUnderflow(Chip8Fault):
    """空のスタックに対するRET。"""


# @intent:rationale IndexErrorも継承し、バス由来の範囲外アクセスを従来通り IndexError として扱えるようにします。
class MemoryAccessFault(Chip8Fault, IndexError):
    """4KBのアドレス空間外へのアクセス。"""


class InvalidKeyFault(Chip8Fault):
    """キー番号として0x0-0xFの範囲外の値を参照したSKP/SKNP。"""
