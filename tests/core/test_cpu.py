# tests/core/test_cpu.py
"""
chip8_tracer.core.cpuモジュールの単体テスト。
"""
import pytest
from typing import Dict, List, Tuple

from chip8_tracer.core.state import CpuState
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.transport.bus import Bus, BusAccessType, RAM
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo

# @intent:test_suite 抽象CPUのテンプレートメソッド（フェッチ→デコード→実行→Snapshot）を検証します。

class DummyCpu(AbstractCpu):
    """1バイト命令を読み、0x20へ0xFFを書き込むだけのテスト用CPU。"""
    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=0x0000, sp=0x0000)

    def _fetch(self) -> int:
        opcode = self._bus.read(self._state.pc)
        self._state.pc += 1
        return opcode

    def _decode(self, opcode: int) -> Operation:
        if opcode == 0x00:
            return Operation(opcode_hex="00", mnemonic="NOP", cycle_count=1, length=1)
        return Operation(opcode_hex=f"{opcode:02X}", mnemonic="UNKNOWN", operands=[f"${opcode:02X}"],
                         cycle_count=1, length=1)

    def _execute(self, operation: Operation) -> None:
        self._bus.write(0x0020, 0xFF)

    def get_register_map(self) -> Dict[str, int]:
        return {"PC": self._state.pc, "SP": self._state.sp}

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [RegisterLayoutInfo("Test Group", [RegisterInfo("PC", 16), RegisterInfo("SP", 16)])]

    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return [(start_addr + i, "00", "NOP") for i in range(length)]

class TestCpuState:
    def test_cpu_state_init_default(self):
        state = CpuState()
        assert state.pc == 0
        assert state.sp == 0

class TestAbstractCpu:
    @pytest.fixture
    def cpu(self):
        bus = Bus()
        bus.register_device(0x0000, 0x00FF, RAM(0x100))
        return DummyCpu(bus)

    def test_abstract_cpu_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            AbstractCpu(Bus())

    # @intent:test_case_step step()がPCを進め、バスアクティビティを含むSnapshotを返すことを検証します。
    def test_step_returns_snapshot(self, cpu):
        cpu.get_bus().load(0x0000, 0x42)
        snapshot = cpu.step()

        assert snapshot.state.pc == 0x0001
        assert snapshot.operation.mnemonic == "UNKNOWN"
        assert snapshot.metadata.symbol_info == "UNKNOWN $42"
        assert snapshot.metadata.cycle_count == 1
        assert [a.access_type for a in snapshot.bus_activity] == [BusAccessType.READ, BusAccessType.WRITE]
        assert snapshot.written_addresses() == [0x0020]

    # @intent:test_case_log 前回ステップ以前のログがSnapshotに混入しないことを検証します。
    def test_step_discards_stale_activity(self, cpu):
        cpu.get_bus().read(0x0050)
        snapshot = cpu.step()
        assert all(a.address != 0x0050 for a in snapshot.bus_activity)

    def test_reset_restores_initial_state(self, cpu):
        cpu.step()
        cpu.step()
        assert cpu.get_cycle_count() == 2
        cpu.reset()
        assert cpu.get_state().pc == 0
        assert cpu.get_cycle_count() == 0
