"""Recording spec: what a mission recording captures and where it ends up."""

from __future__ import annotations

import tempfile
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from missionrec.constants import (
    COMMANDS_FILENAME,
    MISSION_INIT_FILENAME,
    MP4_FILENAME,
    OBSERVATIONS_FILENAME,
    RECORDS_SUBDIR,
    REWARDS_FILENAME,
)


@dataclass
class RecordingSpec:
    """Describes a recording session.

    A default-constructed spec is inert: ``is_recording`` is False and a
    session built from it never touches the filesystem.

    Channel paths are only descriptors for whoever writes the channel files;
    the session itself archives whatever ends up under ``temp_dir``.
    """
    is_recording: bool = False
    temp_dir: Optional[Path] = None
    destination: Optional[Path] = None

    is_recording_mp4: bool = False
    mp4_path: Optional[Path] = None
    mp4_bit_rate: int = 0
    mp4_fps: int = 0

    is_recording_observations: bool = False
    observations_path: Optional[Path] = None

    is_recording_rewards: bool = False
    rewards_path: Optional[Path] = None

    is_recording_commands: bool = False
    commands_path: Optional[Path] = None

    mission_init_path: Optional[Path] = None

    def __post_init__(self):
        if self.temp_dir is not None:
            self.temp_dir = Path(self.temp_dir)
        if self.destination is not None:
            self.destination = Path(self.destination)

    @classmethod
    def create(cls, destination: Path, temp_root: Optional[Path] = None) -> RecordingSpec:
        """Build a recording spec with a fresh, uniquely named temp directory.

        The directory itself is created by the session, not here.
        """
        root = Path(temp_root) if temp_root else Path(tempfile.gettempdir())
        temp_dir = root / RECORDS_SUBDIR / uuid.uuid4().hex
        return cls(
            is_recording=True,
            temp_dir=temp_dir,
            destination=Path(destination),
            mission_init_path=temp_dir / MISSION_INIT_FILENAME,
        )

    def set_destination(self, destination: Path) -> RecordingSpec:
        self.destination = Path(destination)
        self.is_recording = True
        return self

    def record_mp4(self, frames_per_second: int, bit_rate: int) -> RecordingSpec:
        """Enable the video channel."""
        if frames_per_second <= 0:
            raise ValueError(f"frames_per_second must be positive, got {frames_per_second}")
        if bit_rate <= 0:
            raise ValueError(f"bit_rate must be positive, got {bit_rate}")
        self.is_recording_mp4 = True
        self.mp4_fps = frames_per_second
        self.mp4_bit_rate = bit_rate
        self.mp4_path = self._channel_path(MP4_FILENAME)
        return self

    def record_observations(self) -> RecordingSpec:
        self.is_recording_observations = True
        self.observations_path = self._channel_path(OBSERVATIONS_FILENAME)
        return self

    def record_rewards(self) -> RecordingSpec:
        self.is_recording_rewards = True
        self.rewards_path = self._channel_path(REWARDS_FILENAME)
        return self

    def record_commands(self) -> RecordingSpec:
        self.is_recording_commands = True
        self.commands_path = self._channel_path(COMMANDS_FILENAME)
        return self

    def _channel_path(self, filename: str) -> Path:
        if self.temp_dir is None:
            raise ValueError("Cannot enable a channel on a spec without a temp directory")
        return self.temp_dir / filename
