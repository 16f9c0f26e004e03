"""
CHIP-8命令テスト用の共通セットアップ。
"""
import random
from typing import Sequence

from chip8_tracer.transport.bus import Bus, RAM, MEMORY_SIZE
from chip8_tracer.arch.chip8.cpu import Chip8Cpu


class FixedRandom(random.Random):
    """randrangeが常に同じ値を返す乱数源。"""
    def __init__(self, value: int):
        super().__init__(0)
        self._value = value

    def randrange(self, *args, **kwargs):
        return self._value


def build_cpu(rng: random.Random = None):
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
    cpu = Chip8Cpu(bus, rng=rng)
    return cpu, bus


def write_program(bus: Bus, words: Sequence[int], address: int = 0x200) -> None:
    for index, word in enumerate(words):
        bus.load(address + index * 2, (word >> 8) & 0xFF)
        bus.load(address + index * 2 + 1, word & 0xFF)
