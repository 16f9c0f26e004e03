from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_tracer.arch.chip8.state import PROGRAM_START

# @intent:constant リファレンスのホストキー配置。
#   1 2 3 4      1 2 3 C
#   Q W E R  ->  4 5 6 D
#   A S D F      7 8 9 E
#   Z X C V      A 0 B F
REFERENCE_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class TimingConfig:
    cycles_per_frame: int = 10
    frame_interval_ms: int = 16

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class SystemConfig:
    rom: Optional[str] = None
    load_address: int = PROGRAM_START
    random_seed: Optional[int] = None
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    key_map: Dict[str, int] = field(default_factory=lambda: dict(REFERENCE_KEY_MAP))
