"""Package mission recording sessions into compressed archives."""

from missionrec.errors import ArchiveReadError, MissingSourceDirectoryError, MissionRecordError
from missionrec.session import FinalizeResult, RecordingSession
from missionrec.spec import RecordingSpec

__version__ = "0.1.0"

__all__ = [
    "ArchiveReadError",
    "FinalizeResult",
    "MissingSourceDirectoryError",
    "MissionRecordError",
    "RecordingSession",
    "RecordingSpec",
    "__version__",
]
