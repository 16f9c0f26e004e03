# chip8_tracer/runtime/driver.py
"""
フレーム単位の実行ドライバ。

1フレーム = 命令N回 + タイマー1回 + (必要なら) 画面の書き出し1回。
タイマーは命令ごとではなくフレームごとに1回だけ進みます。
"""
import time
from typing import Callable, Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.interfaces import FrameSink, KeySource

# @intent:responsibility CPUを一定の相対ペースで駆動し、入力の取り込みと画面の書き出しを仲介します。
class FrameDriver:
    def __init__(self, cpu: Chip8Cpu, cycles_per_frame: int = 10,
                 key_source: Optional[KeySource] = None,
                 frame_sink: Optional[FrameSink] = None):
        if cycles_per_frame <= 0:
            raise ValueError("cycles_per_frame must be positive.")
        self._cpu = cpu
        self._cycles_per_frame = cycles_per_frame
        self._key_source = key_source
        self._frame_sink = frame_sink
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def set_frame_sink(self, frame_sink: Optional[FrameSink]) -> None:
        self._frame_sink = frame_sink

    def set_key_source(self, key_source: Optional[KeySource]) -> None:
        self._key_source = key_source

    # @intent:responsibility 1フレーム分を実行し、実行した命令数を返します。
    # @intent:rationale フォールトはここで捕捉せず、呼び出し元へそのまま伝播させます。
    def run_frame(self) -> int:
        executed = 0
        for _ in range(self._cycles_per_frame):
            if self._key_source is not None:
                self._cpu.set_key_states(self._key_source.key_states())
            self._cpu.step()
            executed += 1

        self._cpu.tick_timers()

        if self._frame_sink is not None:
            pixels = self._cpu.export_frame(self._frame_sink.encode_pixel)
            if pixels is not None:
                self._frame_sink.present(pixels)

        self._frame_count += 1
        return executed

    # @intent:responsibility 指定フレーム数を実行します。frame_intervalが正ならモノトニック時計の締め切りに合わせて待機します。
    # @intent:rationale 固定のsleepではなく締め切り基準で待つため、フレーム処理時間が周期に累積しません。
    def run(self, frames: int, frame_interval: float = 0.0,
            clock: Callable[[], float] = time.monotonic,
            sleep: Callable[[float], None] = time.sleep) -> int:
        executed = 0
        deadline = clock()
        for _ in range(frames):
            executed += self.run_frame()
            if frame_interval > 0:
                deadline += frame_interval
                remaining = deadline - clock()
                if remaining > 0:
                    sleep(remaining)
                else:
                    # 処理が周期に追いつかない場合は締め切りを現在時刻へ合わせ直す
                    deadline = clock()
        return executed
