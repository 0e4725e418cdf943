"""Cross-platform path resolution for missionrec data directories."""

import os
from pathlib import Path

from platformdirs import user_data_dir

from missionrec.constants import APP_NAME, DATA_DIR_ENV, RECORDS_SUBDIR


def get_data_dir(config_override: str = "") -> Path:
    """Resolve the missionrec data directory.

    Priority: config_override > MISSIONREC_DATA_DIR env var > platform default.
    """
    return Path(config_override or os.environ.get(DATA_DIR_ENV) or user_data_dir(APP_NAME))


def get_temp_root(data_dir: Path, config_override: str = "") -> Path:
    """Directory under which session temp directories are created."""
    if config_override:
        return Path(config_override)
    return data_dir / "tmp"


def get_records_dir(temp_root: Path) -> Path:
    """Parent of the per-session temp directories inside a temp root."""
    return temp_root / RECORDS_SUBDIR


def get_archives_dir(data_dir: Path) -> Path:
    return data_dir / "archives"


def get_config_path(data_dir: Path) -> Path:
    return data_dir / "config.toml"


def ensure_dirs(data_dir: Path) -> None:
    """Create all required subdirectories if they don't exist."""
    get_archives_dir(data_dir).mkdir(parents=True, exist_ok=True)
