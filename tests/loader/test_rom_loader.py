# tests/loader/test_rom_loader.py
"""
chip8_tracer.loader.loaderモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import MemoryAccessFault
from chip8_tracer.transport.bus import Bus, RAM, MEMORY_SIZE
from chip8_tracer.loader.loader import RomLoader

# @intent:test_suite 生バイナリROMの配置とエラー時の振る舞いを検証します。

@pytest.fixture
def bus():
    bus = Bus()
    bus.register_device(0x000, MEMORY_SIZE - 1, RAM())
    return bus

# @intent:test_case_load ROMの内容が0x200以降へそのまま配置されることを検証します。
def test_load_rom_at_program_start(tmp_path, bus):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(bytes([0x00, 0xE0, 0x12, 0x00]))

    loaded = RomLoader().load_rom(str(rom), bus)

    assert loaded == 4
    assert [bus.peek(0x200 + i) for i in range(4)] == [0x00, 0xE0, 0x12, 0x00]
    assert bus.get_and_clear_activity_log() == []

def test_load_rom_at_custom_address(tmp_path, bus):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b"\xAB")
    RomLoader().load_rom(str(rom), bus, address=0x600)
    assert bus.peek(0x600) == 0xAB

# @intent:test_case_missing 読み込めないファイルは警告を出し空のROMとして扱うことを検証します。
def test_missing_file_warns_and_loads_nothing(tmp_path, bus):
    with pytest.warns(UserWarning, match="Could not read ROM"):
        loaded = RomLoader().load_rom(str(tmp_path / "missing.ch8"), bus)
    assert loaded == 0
    assert bus.peek(0x200) == 0

def test_empty_file_warns(tmp_path, bus):
    rom = tmp_path / "empty.ch8"
    rom.write_bytes(b"")
    with pytest.warns(UserWarning, match="is empty"):
        assert RomLoader().load_rom(str(rom), bus) == 0

# @intent:test_case_overflow アドレス空間に収まらないROMは何も書き込まずに拒否されることを検証します。
def test_rom_too_large_is_rejected(bus):
    data = bytes([0xFF]) * (MEMORY_SIZE - 0x200 + 1)
    with pytest.raises(MemoryAccessFault, match="does not fit"):
        RomLoader().load_bytes(data, bus)
    assert bus.peek(0x200) == 0

def test_rom_filling_memory_exactly(bus):
    data = bytes([0x01]) * (MEMORY_SIZE - 0x200)
    assert RomLoader().load_bytes(data, bus) == len(data)
    assert bus.peek(MEMORY_SIZE - 1) == 0x01
