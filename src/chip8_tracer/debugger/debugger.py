# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    ブレークポイントがヒットするための条件を定義するデータクラス。
    register_nameは Chip8Cpu.get_register_map() のキー（"V0"-"VF", "I", "PC", "SP", "DT", "ST"）です。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用
    enabled: bool = True

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    """
    def __init__(self, cpu: Chip8Cpu, history_limit: int = 1000):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = self._cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        # @intent:responsibility 直近の実行履歴（状態の複製付き）を保持します。
        self._history: List[Snapshot] = []
        self._history_limit = history_limit
        # 履歴の最古エントリの直前の状態。逆実行はここまで戻れます。
        self._base_state = self._cpu.get_state().copy()
        self._base_cycle_count = self._cpu.get_cycle_count()

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    # @intent:responsibility 履歴を破棄し、現在の状態を逆実行の起点にします。
    # @intent:rationale デバッガを経由せずにCPUが進んだ後は、既存の履歴ではメモリを正しく復元できません。
    def clear_history(self) -> None:
        self._history = []
        self._last_snapshot = None
        self._base_state = self._cpu.get_state().copy()
        self._base_cycle_count = self._cpu.get_cycle_count()

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    def is_running(self) -> bool:
        return self._running

    def _is_pc_breakpoint(self, pc: int) -> bool:
        return any(
            bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc
            for bp in self._breakpoints
        )

    def _check_other_breakpoints(self, snapshot: Snapshot, registers: Dict[str, int]) -> bool:
        """
        Snapshotとレジスタ値に基づいてPC_MATCH以外のブレークポイントをチェックします。
        """
        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return True
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in registers and name in self._previous_registers:
                    if registers[name] != self._previous_registers[name]:
                        return True
        return False

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        履歴には実行直後の状態の複製を保存します。
        """
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        recorded = replace(snapshot, state=self._cpu.get_state().copy())
        self._last_snapshot = recorded

        self._history.append(recorded)
        if len(self._history) > self._history_limit:
            overflow = len(self._history) - self._history_limit
            newest_dropped = self._history[overflow - 1]
            self._base_state = newest_dropped.state.copy()
            self._base_cycle_count = newest_dropped.metadata.cycle_count
            del self._history[:overflow]

        return recorded

    def run(self, max_steps: Optional[int] = None) -> int:
        """
        ブレークポイント、max_steps、またはstop()のいずれかまで実行を継続し、実行した命令数を返します。
        """
        self._running = True
        steps = 0

        # 現在のPCにあるブレークポイントから再開する場合は、まず1命令進める
        if self._is_pc_breakpoint(self._cpu.get_state().pc):
            self.step_instruction()
            steps += 1

        while self._running:
            if max_steps is not None and steps >= max_steps:
                break

            current_pc = self._cpu.get_state().pc
            if self._is_pc_breakpoint(current_pc):
                print(f"Breakpoint hit at PC: {current_pc:#05x}")
                break

            snapshot = self.step_instruction()
            steps += 1

            if self._check_other_breakpoints(snapshot, self._cpu.get_register_map()):
                print(f"Breakpoint hit at PC: {snapshot.state.pc:#05x}")
                break

        self._running = False
        return steps

    def step_back(self) -> Optional[Snapshot]:
        """
        実行履歴を1つ戻り、CPUとメモリの状態を復元します。
        履歴が尽きた場合は記録開始時点（または最古の履歴の直前）の状態に戻し、Noneを返します。
        """
        if not self._history:
            return None

        snapshot_to_revert = self._history.pop()

        # 書き込みを逆順に取り消す (loadはログに残らない)
        bus = self._cpu.get_bus()
        for access in reversed(snapshot_to_revert.bus_activity):
            if access.access_type == BusAccessType.WRITE and access.previous_data is not None:
                bus.load(access.address, access.previous_data)

        if self._history:
            previous_snapshot = self._history[-1]
            self._cpu.restore_state(previous_snapshot.state, previous_snapshot.metadata.cycle_count)
            self._last_snapshot = previous_snapshot
            return previous_snapshot

        self._cpu.restore_state(self._base_state, self._base_cycle_count)
        self._last_snapshot = None
        return None

    def run_back(self) -> int:
        """
        ブレークポイントか履歴の先頭に達するまで逆方向へ戻り、戻った命令数を返します。
        """
        self._running = True
        steps = 0

        while self._running:
            if not self._history:
                print("Reached start of history.")
                break

            snapshot = self.step_back()
            steps += 1

            if snapshot is not None and self._is_pc_breakpoint(snapshot.state.pc):
                print(f"Reverse breakpoint hit at PC: {snapshot.state.pc:#05x}")
                break

        self._running = False
        return steps

    def stop(self) -> None:
        self._running = False
