"""Recursive file enumeration under a recording's temp directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from missionrec.errors import MissingSourceDirectoryError

logger = logging.getLogger(__name__)


def collect_files(root: Path) -> list[Path]:
    """Return every regular file beneath ``root``, descending into subdirectories.

    Traversal uses an explicit stack rather than recursion. Subdirectories or
    entries that vanish or cannot be read during the walk are logged and
    skipped, so everything readable is still returned.

    Raises:
        MissingSourceDirectoryError: if ``root`` does not exist.
    """
    root = Path(root)
    if not root.exists():
        raise MissingSourceDirectoryError(root)

    files: list[Path] = []
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except FileNotFoundError:
            if directory == root:
                raise MissingSourceDirectoryError(root)
            logger.debug("Directory vanished during collection: %s", directory)
            continue
        except OSError as e:
            logger.warning("Unable to read directory %s: %s", directory, e)
            continue

        for entry in entries:
            try:
                if entry.is_dir():
                    pending.append(Path(entry.path))
                elif entry.is_file():
                    files.append(Path(entry.path))
            except FileNotFoundError:
                logger.debug("Entry vanished during collection: %s", entry.path)
            except OSError as e:
                logger.warning("Unable to inspect %s: %s", entry.path, e)

    return files
