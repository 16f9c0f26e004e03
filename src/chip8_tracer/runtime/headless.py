# chip8_tracer/runtime/headless.py
"""
ウィンドウを使わずにROMを実行するコマンドラインランナー。
最後のフレームをテキスト（'#' = 点灯, '.' = 消灯）で標準出力へ表示します。
"""
import argparse
import sys
from typing import List, Optional, Sequence

from chip8_tracer.arch.chip8.state import SCREEN_WIDTH
from chip8_tracer.common.errors import Chip8Fault
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.runtime.driver import FrameDriver


# @intent:responsibility FrameSinkとして、受け取ったフレームを文字列の行に変換して保持します。
class TextFrameSink:
    def __init__(self, lit: str = "#", unlit: str = "."):
        self._lit = lit
        self._unlit = unlit
        self.lines: List[str] = []
        self.frames_presented = 0

    def encode_pixel(self, cell: int) -> str:
        return self._lit if cell else self._unlit

    def present(self, pixels: List[str]) -> None:
        self.lines = [
            "".join(pixels[row:row + SCREEN_WIDTH])
            for row in range(0, len(pixels), SCREEN_WIDTH)
        ]
        self.frames_presented += 1

    def render(self) -> str:
        return "\n".join(self.lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-headless", description="Run a CHIP-8 ROM without a window.")
    parser.add_argument("rom", help="path to the ROM image")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--frames", type=int, default=60, help="number of frames to run (default: 60)")
    parser.add_argument("--seed", type=int, help="random seed for RND")
    parser.add_argument("--realtime", action="store_true", help="pace frames at the configured interval")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    if args.seed is not None:
        config.random_seed = args.seed

    try:
        cpu, _ = SystemBuilder().build_system(config, rom_path=args.rom)
    except Chip8Fault as fault:
        print(f"Could not load {args.rom}: {fault}")
        return 1

    sink = TextFrameSink()
    driver = FrameDriver(cpu, config.timing.cycles_per_frame, frame_sink=sink)
    interval = config.timing.frame_interval_ms / 1000.0 if args.realtime else 0.0

    try:
        driver.run(args.frames, frame_interval=interval)
    except Chip8Fault as fault:
        print(f"Fault after {driver.frame_count} frame(s): {fault}")
        return 1

    print(sink.render())
    print(f"{driver.frame_count} frame(s), {cpu.get_cycle_count()} instruction(s), PC={cpu.get_state().pc:#05x}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
