# chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.state import Chip8CpuState
from .maps import DECODE_MAP, EXECUTE_MAP, SUB_SELECTORS

# @intent:utility_function 二段階テーブルから命令クラスに対応するエントリを引きます。見つからなければNone。
def lookup(table: dict, opcode: Opcode) -> Optional[object]:
    entry = table.get(opcode.msb)
    if isinstance(entry, dict):
        return entry.get(SUB_SELECTORS[opcode.msb](opcode))
    return entry

# @intent:responsibility CHIP-8の命令語をデコードします。
def decode_opcode(opcode: Opcode) -> Operation:
    """
    命令語をデコードし、Operationオブジェクトを返します。
    該当する命令がない場合はニーモニック"UNKNOWN"のOperationを返します。
    """
    raw_bytes = [(opcode.word >> 8) & 0xFF, opcode.word & 0xFF]
    entry = lookup(DECODE_MAP, opcode)
    if entry is None:
        return Operation(opcode_hex=opcode.hex, mnemonic="UNKNOWN", operands=[f"${opcode.hex}"],
                         operand_bytes=raw_bytes, cycle_count=1, length=2)

    mnemonic, templates = entry
    fields = {"x": opcode.x, "y": opcode.y, "n": opcode.n, "nnn": opcode.nnn, "kk": opcode.kk}
    operands = [template.format(**fields) for template in templates]
    return Operation(opcode_hex=opcode.hex, mnemonic=mnemonic, operands=operands,
                     operand_bytes=raw_bytes, cycle_count=1, length=2)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:rationale 該当しないサブセレクタは状態を変えずに無視します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> None:
    """
    デコードされた命令を実行し、CPUの状態を変更します。
    """
    high, low = operation.operand_bytes
    opcode = Opcode((high << 8) | low)
    executor = lookup(EXECUTE_MAP, opcode)
    if executor:
        executor(state, bus, opcode)
