"""Tar assembly and gzip persistence for finished recordings."""

from __future__ import annotations

import gzip
import logging
import shutil
import tarfile
import tempfile
from pathlib import Path, PurePath
from typing import BinaryIO, Optional, Union

from missionrec.constants import DEFAULT_COMPRESS_LEVEL
from missionrec.errors import ArchiveReadError

logger = logging.getLogger(__name__)

# Tar data is kept in memory up to this size, then spilled to a temp file.
SPOOL_MAX_BYTES = 16 * 1024 * 1024


def entry_name(root: PurePath, path: Union[PurePath, str]) -> str:
    """Archive member name for ``path``: relative to ``root``, forward slashes.

    Raises ValueError if ``path`` is not inside ``root``.
    """
    if not isinstance(path, PurePath):
        path = Path(path)
    return path.relative_to(root).as_posix()


class ArchiveBuilder:
    """Accumulates files into an uncompressed tar stream.

    Files that cannot be added are logged and skipped so one bad file never
    costs the rest of the recording.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self.entries: list[str] = []
        self.skipped: list[Path] = []
        self._buffer = tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_BYTES)
        self._tar: Optional[tarfile.TarFile] = tarfile.open(
            fileobj=self._buffer, mode="w", dereference=True
        )

    def add(self, path: Path) -> bool:
        """Append one file. Returns False if it was skipped."""
        if self._tar is None:
            raise RuntimeError("Archive already finished")
        start, offset = self._buffer.tell(), self._tar.offset
        try:
            name = entry_name(self.root, path)
            self._tar.add(str(path), arcname=name, recursive=False)
        except (OSError, ValueError, tarfile.TarError) as e:
            logger.warning("Unable to archive %s: %s", path, e)
            # Drop any header or partial data written before the failure.
            self._buffer.seek(start)
            self._buffer.truncate(start)
            self._tar.offset = offset
            self.skipped.append(Path(path))
            return False
        self.entries.append(name)
        return True

    def finish(self) -> BinaryIO:
        """Write the tar end-of-archive blocks and return the stream rewound."""
        if self._tar is not None:
            self._tar.close()
            self._tar = None
        self._buffer.seek(0)
        return self._buffer

    def close(self) -> None:
        if self._tar is not None:
            self._tar.close()
            self._tar = None
        self._buffer.close()

    def __enter__(self) -> ArchiveBuilder:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class CompressingWriter:
    """Streams a finished tar through gzip into the destination file."""

    def __init__(self, destination: Optional[Path], compresslevel: int = DEFAULT_COMPRESS_LEVEL):
        self.destination = Path(destination) if destination is not None else None
        self.compresslevel = compresslevel

    def write(self, stream: BinaryIO) -> bool:
        """Compress ``stream`` into the destination.

        Returns False, after logging a warning, if the destination cannot be
        opened for writing. Errors after the file is open propagate.
        """
        if self.destination is None:
            logger.warning("Unable to write recording to output file: no destination set")
            return False
        try:
            out = open(self.destination, "wb")
        except OSError as e:
            logger.warning("Unable to write recording to output file %s: %s", self.destination, e)
            return False

        with out:
            with gzip.GzipFile(fileobj=out, mode="wb", compresslevel=self.compresslevel) as gz:
                shutil.copyfileobj(stream, gz)
        return True


def list_archive(path: Path) -> list[str]:
    """Return the member names of a recording archive, in archive order."""
    try:
        with tarfile.open(path, "r:gz") as tar:
            return [m.name for m in tar.getmembers() if m.isfile()]
    except (OSError, EOFError, tarfile.TarError) as e:
        raise ArchiveReadError(f"Cannot read archive {path}: {e}") from e
