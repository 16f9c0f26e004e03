import random
from typing import Optional, Tuple
from chip8_tracer.transport.bus import Bus, RAM, MEMORY_SIZE
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.loader.loader import RomLoader
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続し、ROMをロードします。
class SystemBuilder:
    def build_system(self, config: SystemConfig, rom_path: Optional[str] = None) -> Tuple[Chip8Cpu, Bus]:
        """
        rom_pathが指定された場合は設定ファイルのromより優先します。
        """
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        rng = random.Random(config.random_seed)
        cpu = Chip8Cpu(bus, rng=rng)

        path = rom_path or config.rom
        if path:
            loaded = RomLoader().load_rom(path, bus, config.load_address)
            print(f"Loaded {loaded} bytes from {path} at {config.load_address:#05x}")
        cpu.get_state().pc = config.load_address

        return cpu, bus
