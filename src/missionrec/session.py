"""Recording session lifecycle: package, compress, persist and clean up."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from missionrec.archive import ArchiveBuilder, CompressingWriter
from missionrec.collector import collect_files
from missionrec.constants import DEFAULT_COMPRESS_LEVEL
from missionrec.spec import RecordingSpec

logger = logging.getLogger(__name__)


@dataclass
class FinalizeResult:
    """Outcome of a call to RecordingSession.finalize()."""
    performed: bool = False
    archive_path: Optional[Path] = None
    archived: list[str] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    cleaned_up: bool = False


class RecordingSession:
    """Owns a RecordingSpec and turns its temp directory into an archive.

    ``finalize()`` runs at most once. Use the session as a context manager (or
    call ``close()``) so the temp directory is always packaged and removed;
    errors during that implicit finalize are logged, never raised.
    """

    def __init__(self, spec: Optional[RecordingSpec] = None, compresslevel: int = DEFAULT_COMPRESS_LEVEL):
        self.spec = spec if spec is not None else RecordingSpec()
        self.compresslevel = compresslevel
        if self.spec.is_recording:
            if self.spec.temp_dir is None:
                raise ValueError("A recording spec needs a temp directory")
            self.spec.temp_dir.mkdir(parents=True, exist_ok=True)
        self.finalized = False

    def finalize(self) -> FinalizeResult:
        """Archive everything under the temp directory to the destination.

        A no-op when not recording or already finalized. The temp directory
        is removed whether or not archiving succeeded.

        Raises:
            MissingSourceDirectoryError: if the temp directory has disappeared.
        """
        if not self.spec.is_recording or self.finalized:
            return FinalizeResult()

        result = FinalizeResult(performed=True)
        temp_dir = self.spec.temp_dir
        try:
            files = collect_files(temp_dir)
            if files:
                self._write_archive(files, result)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)
            result.cleaned_up = not temp_dir.exists()
            if not result.cleaned_up:
                logger.warning("Could not remove temp directory %s", temp_dir)
            self.finalized = True
        return result

    def _write_archive(self, files: list[Path], result: FinalizeResult) -> None:
        with ArchiveBuilder(self.spec.temp_dir) as builder:
            for path in files:
                builder.add(path)
            result.archived = list(builder.entries)
            result.skipped = list(builder.skipped)

            if not builder.entries:
                logger.warning("No files could be archived from %s; nothing written", self.spec.temp_dir)
                return

            stream = builder.finish()
            writer = CompressingWriter(self.spec.destination, compresslevel=self.compresslevel)
            if writer.write(stream):
                result.archive_path = writer.destination
                logger.info("Wrote %d file(s) to %s", len(builder.entries), writer.destination)

    def close(self) -> None:
        """Finalize if still pending, logging instead of raising any error."""
        if self.finalized:
            return
        try:
            self.finalize()
        except Exception:
            logger.exception("Exception in closing of recording session")

    def transfer(self) -> RecordingSession:
        """Move this session's ownership into a new session.

        The source is left inert, so closing it later does nothing.
        """
        target = RecordingSession.__new__(RecordingSession)
        target.spec = self.spec
        target.compresslevel = self.compresslevel
        target.finalized = self.finalized
        self._reset()
        return target

    def assign_from(self, other: RecordingSession) -> RecordingSession:
        """Take over ``other``'s recording, leaving ``other`` inert.

        Any recording this session still owns is closed first.
        """
        if other is self:
            return self
        self.close()
        self.spec = other.spec
        self.compresslevel = other.compresslevel
        self.finalized = other.finalized
        other._reset()
        return self

    def _reset(self) -> None:
        self.spec = RecordingSpec()
        self.finalized = True

    def __enter__(self) -> RecordingSession:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __del__(self):
        # Construction failed before the session took ownership.
        if "finalized" in self.__dict__:
            self.close()

    @property
    def is_recording(self) -> bool:
        return self.spec.is_recording

    @property
    def is_recording_mp4(self) -> bool:
        return self.spec.is_recording_mp4

    @property
    def is_recording_observations(self) -> bool:
        return self.spec.is_recording_observations

    @property
    def is_recording_rewards(self) -> bool:
        return self.spec.is_recording_rewards

    @property
    def is_recording_commands(self) -> bool:
        return self.spec.is_recording_commands

    @property
    def temp_dir(self) -> Optional[Path]:
        return self.spec.temp_dir

    @property
    def destination(self) -> Optional[Path]:
        return self.spec.destination

    @property
    def mp4_path(self) -> Optional[Path]:
        return self.spec.mp4_path

    @property
    def mp4_bit_rate(self) -> int:
        return self.spec.mp4_bit_rate

    @property
    def mp4_frames_per_second(self) -> int:
        return self.spec.mp4_fps

    @property
    def observations_path(self) -> Optional[Path]:
        return self.spec.observations_path

    @property
    def rewards_path(self) -> Optional[Path]:
        return self.spec.rewards_path

    @property
    def commands_path(self) -> Optional[Path]:
        return self.spec.commands_path

    @property
    def mission_init_path(self) -> Optional[Path]:
        return self.spec.mission_init_path
