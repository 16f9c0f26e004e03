# chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用し、バスアクセスログを汚さないようにpeekで読み込みます。
"""
from typing import List, Tuple

from chip8_tracer.transport.bus import Bus, MEMORY_SIZE
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = start_addr + length

    while current_addr < end_addr:
        # 2バイト目がアドレス空間外なら終了
        if current_addr + 1 >= MEMORY_SIZE:
            break

        word = (bus.peek(current_addr) << 8) | bus.peek(current_addr + 1)
        operation = decode_opcode(Opcode(word))

        hex_bytes = " ".join(f"{b:02X}" for b in operation.operand_bytes)
        mnemonic_str = operation.mnemonic
        if operation.operands:
            mnemonic_str += " " + ", ".join(operation.operands)

        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += operation.length

    return result
