"""Shared test fixtures."""

import tarfile
from pathlib import Path

import pytest

from missionrec.spec import RecordingSpec


def populate(root: Path, files: dict) -> None:
    """Write ``{relative_name: bytes}`` under root, creating subdirectories."""
    for name, data in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


def read_archive(path: Path) -> dict:
    """Return ``{member_name: bytes}`` for every file in a .tar.gz."""
    with tarfile.open(path, "r:gz") as tar:
        return {
            m.name: tar.extractfile(m).read()
            for m in tar.getmembers()
            if m.isfile()
        }


@pytest.fixture
def recording_spec(tmp_path):
    """An enabled spec whose temp directory and archive live under tmp_path."""
    return RecordingSpec.create(tmp_path / "out.tar.gz", temp_root=tmp_path / "tmp")


@pytest.fixture
def tmp_data_dir(tmp_path, monkeypatch):
    """Point MISSIONREC_DATA_DIR at an isolated directory."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("MISSIONREC_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture(name="populate")
def populate_fixture():
    return populate


@pytest.fixture(name="read_archive")
def read_archive_fixture():
    return read_archive
