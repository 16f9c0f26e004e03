import pytest

from chip8_tracer.arch.chip8.opcode import Opcode
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from .helpers import build_cpu

# @intent:test_suite 命令語のフィールド分解を検証します。

class TestOpcode:
    def test_field_extraction(self):
        op = Opcode(0xD123)
        assert op.msb == 0xD000
        assert op.x == 0x1
        assert op.y == 0x2
        assert op.n == 0x3
        assert op.nnn == 0x123
        assert op.kk == 0x23

    def test_register_fields_stay_in_range(self):
        op = Opcode(0xFFFF)
        assert op.x == 0xF
        assert op.y == 0xF
        assert op.hex == "FFFF"

    def test_immutability(self):
        op = Opcode(0x1234)
        with pytest.raises(AttributeError):
            op.word = 0x4321

class TestDecodeAndExecute:
    # @intent:test_case_execute デコード結果の生バイトから命令語を組み立てて実行することを検証します。
    def test_execute_decoded_operation(self):
        cpu, bus = build_cpu()
        operation = decode_opcode(Opcode(0x6A42))
        assert operation.operand_bytes == [0x6A, 0x42]

        execute_instruction(operation, cpu.get_state(), bus)
        assert cpu.get_state().v[0xA] == 0x42
