"""Exceptions raised by missionrec."""


class MissionRecordError(Exception):
    """Base class for mission recording errors."""


class MissingSourceDirectoryError(MissionRecordError, FileNotFoundError):
    """The session's temporary directory is gone when it is about to be archived."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Attempt to archive non-existent directory: {path}")


class ArchiveReadError(MissionRecordError):
    """A recording archive could not be opened or read back."""
