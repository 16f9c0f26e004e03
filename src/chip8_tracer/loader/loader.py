# chip8_tracer/loader/loader.py
"""
ROMローダーモジュール。
生のバイト列をそのままメモリの0x200以降へ配置します。
"""
import warnings
from typing import Union

from chip8_tracer.common.errors import MemoryAccessFault
from chip8_tracer.transport.bus import Bus, MEMORY_SIZE
from chip8_tracer.arch.chip8.state import PROGRAM_START

class RomLoader:
    """
    CHIP-8のROMイメージ（ヘッダなしの生バイナリ）をバスにロードするローダー。
    """
    # @intent:responsibility ファイルからROMを読み込みます。
    # @intent:rationale 読み込めないファイルや長さ0のファイルは空のROMとして扱い、警告のみ出します。
    def load_rom(self, file_path: str, bus: Bus, address: int = PROGRAM_START) -> int:
        """
        ファイルの内容をaddress以降へロードし、ロードしたバイト数を返します。
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            warnings.warn(f"Could not read ROM '{file_path}': {e}. Continuing with an empty ROM.")
            return 0

        if not data:
            warnings.warn(f"ROM '{file_path}' is empty.")
            return 0
        return self.load_bytes(data, bus, address)

    # @intent:responsibility バイト列をaddress以降へロードします。
    # @intent:pre-condition データ全体がアドレス空間に収まること。収まらない場合は何も書き込まずにMemoryAccessFaultを送出します。
    def load_bytes(self, data: Union[bytes, bytearray], bus: Bus, address: int = PROGRAM_START) -> int:
        if address < 0 or address + len(data) > MEMORY_SIZE:
            raise MemoryAccessFault(
                f"ROM of {len(data)} bytes does not fit at {address:#05x} "
                f"(only {max(MEMORY_SIZE - address, 0)} bytes available)."
            )
        for offset, byte_data in enumerate(data):
            bus.load(address + offset, byte_data)
        return len(data)
