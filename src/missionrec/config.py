"""Configuration loading, saving, and management."""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

import tomli_w

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from missionrec.constants import DEFAULT_COMPRESS_LEVEL, DEFAULT_MP4_BIT_RATE, DEFAULT_MP4_FPS
from missionrec.spec import RecordingSpec


@dataclass
class RecordingDefaults:
    record_mp4: bool = False
    mp4_fps: int = DEFAULT_MP4_FPS
    mp4_bit_rate: int = DEFAULT_MP4_BIT_RATE
    record_observations: bool = True
    record_rewards: bool = True
    record_commands: bool = True
    compress_level: int = DEFAULT_COMPRESS_LEVEL


@dataclass
class StorageDefaults:
    data_dir: str = ""
    temp_root: str = ""


@dataclass
class MissionRecConfig:
    recording: RecordingDefaults = field(default_factory=RecordingDefaults)
    storage: StorageDefaults = field(default_factory=StorageDefaults)

    @classmethod
    def load(cls, config_path: Path | None = None) -> MissionRecConfig:
        """Load config from TOML file, falling back to defaults for missing keys."""
        config = cls()
        if config_path is None or not config_path.exists():
            return config

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        for section_field in fields(config):
            section = getattr(config, section_field.name)
            for k, v in data.get(section_field.name, {}).items():
                if hasattr(section, k):
                    setattr(section, k, v)

        return config

    def save(self, config_path: Path) -> None:
        """Write the config as TOML, creating the data directory if needed."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_bytes(tomli_w.dumps(self._to_dict()).encode("utf-8"))

    def get(self, key: str) -> Any:
        """Get a config value by dotted key (e.g., 'recording.mp4_fps')."""
        obj, name = self._resolve(key)
        return getattr(obj, name)

    def set(self, key: str, value: Any) -> None:
        """Set a config value by dotted key."""
        obj, name = self._resolve(key)

        # Coerce value to match the field type
        current = getattr(obj, name)
        coerced = _coerce_value(value, current, key)
        _validate_value(key, coerced)
        setattr(obj, name, coerced)

    def build_spec(self, destination: Path, temp_root: Optional[Path] = None) -> RecordingSpec:
        """Create a RecordingSpec with the channels enabled in this config."""
        rec = self.recording
        spec = RecordingSpec.create(destination, temp_root=temp_root)
        if rec.record_mp4:
            spec.record_mp4(rec.mp4_fps, rec.mp4_bit_rate)
        if rec.record_observations:
            spec.record_observations()
        if rec.record_rewards:
            spec.record_rewards()
        if rec.record_commands:
            spec.record_commands()
        return spec

    def _resolve(self, key: str) -> tuple[Any, str]:
        section, _, name = key.partition(".")
        if not name:
            raise KeyError(f"Invalid key format: {key!r}. Use 'section.key' (e.g., 'recording.mp4_fps')")
        obj = getattr(self, section, None)
        if obj is None or section not in {f.name for f in fields(self)}:
            raise KeyError(f"Unknown config section: {section!r}")
        if not hasattr(obj, name):
            raise KeyError(f"Unknown config key: {key!r}")
        return obj, name

    def _to_dict(self) -> dict:
        """Nested {section: {key: value}} dict, as written to TOML."""
        return asdict(self)


_BOOL_WORDS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}


def _coerce_value(value: Any, current: Any, key: str) -> Any:
    """Parse a string from the command line into the type of the current value."""
    if not isinstance(value, str) or isinstance(current, str):
        return value
    if isinstance(current, bool):
        if value.lower() not in _BOOL_WORDS:
            raise ValueError(f"Cannot convert {value!r} to bool for key {key!r}")
        return _BOOL_WORDS[value.lower()]
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Cannot convert {value!r} to int for key {key!r}") from None
    return value


def _validate_value(key: str, value: Any) -> None:
    """Validate a config value."""
    if key == "recording.mp4_fps" and value <= 0:
        raise ValueError(f"mp4_fps must be positive, got {value}")
    if key == "recording.mp4_bit_rate" and value <= 0:
        raise ValueError(f"mp4_bit_rate must be positive, got {value}")
    if key == "recording.compress_level" and not (0 <= value <= 9):
        raise ValueError(f"compress_level must be 0-9, got {value}")
