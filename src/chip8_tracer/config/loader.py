import re
import yaml
from typing import Dict, Any, Optional
from .models import SystemConfig, TimingConfig, DisplayConfig, REFERENCE_KEY_MAP

_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

        timing_data = data.get("timing", {}) or {}
        timing = TimingConfig(
            cycles_per_frame=self._parse_positive(timing_data.get("cycles_per_frame", 10), "timing.cycles_per_frame"),
            frame_interval_ms=self._parse_positive(timing_data.get("frame_interval_ms", 16), "timing.frame_interval_ms"),
        )

        display_data = data.get("display", {}) or {}
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", 10), "display.scale"),
            foreground=self._parse_color(display_data.get("foreground", "#FFFFFF")),
            background=self._parse_color(display_data.get("background", "#000000")),
        )

        key_map = dict(REFERENCE_KEY_MAP)
        if "key_map" in data:
            key_map = self._parse_key_map(data["key_map"])

        seed = data.get("random_seed")
        return SystemConfig(
            rom=data.get("rom"),
            load_address=self._parse_int(data.get("load_address", 0x200)),
            random_seed=self._parse_int(seed) if seed is not None else None,
            timing=timing,
            display=display,
            key_map=key_map,
        )

    def _parse_key_map(self, value: Any) -> Dict[str, int]:
        if not isinstance(value, dict):
            raise ValueError(f"key_map must be a mapping, got {value!r}")
        key_map = {}
        for host_key, chip8_key in value.items():
            index = self._parse_int(chip8_key)
            if not 0x0 <= index <= 0xF:
                raise ValueError(f"Key index {index:#x} for host key '{host_key}' is outside 0x0-0xF")
            key_map[str(host_key).upper()] = index
        return key_map

    def _parse_positive(self, value: Any, name: str) -> int:
        number = self._parse_int(value)
        if number <= 0:
            raise ValueError(f"{name} must be positive, got {number}")
        return number

    def _parse_color(self, value: Any) -> str:
        if not isinstance(value, str) or not _COLOR_PATTERN.match(value):
            raise ValueError(f"Invalid color format (expected #RRGGBB): {value!r}")
        return value.upper()

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
