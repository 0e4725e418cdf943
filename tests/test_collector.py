"""Tests for recursive file collection."""

import contextlib
import os
from unittest.mock import patch

import pytest

from missionrec.collector import collect_files
from missionrec.errors import MissingSourceDirectoryError


def test_flat_directory(tmp_path, populate):
    populate(tmp_path, {"a.txt": b"a", "b.txt": b"b"})
    assert sorted(collect_files(tmp_path)) == [tmp_path / "a.txt", tmp_path / "b.txt"]


def test_nested_directories(tmp_path, populate):
    populate(tmp_path, {
        "top.txt": b"",
        "logs/commands.txt": b"",
        "video/frames/frame001.png": b"",
        "video/frames/frame002.png": b"",
    })
    files = collect_files(tmp_path)
    assert len(files) == 4
    assert len(set(files)) == 4
    assert {p.relative_to(tmp_path).as_posix() for p in files} == {
        "top.txt",
        "logs/commands.txt",
        "video/frames/frame001.png",
        "video/frames/frame002.png",
    }


def test_directories_are_not_listed(tmp_path):
    (tmp_path / "empty" / "deeper").mkdir(parents=True)
    assert collect_files(tmp_path) == []


def test_empty_root(tmp_path):
    assert collect_files(tmp_path) == []


def test_missing_root_raises(tmp_path):
    with pytest.raises(MissingSourceDirectoryError) as exc_info:
        collect_files(tmp_path / "nope")
    assert isinstance(exc_info.value, FileNotFoundError)
    assert "nope" in str(exc_info.value)


def test_accepts_string_root(tmp_path, populate):
    populate(tmp_path, {"a.txt": b"a"})
    assert collect_files(str(tmp_path)) == [tmp_path / "a.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
def test_symlinked_file_is_collected(tmp_path, populate):
    populate(tmp_path, {"real/data.txt": b"x"})
    root = tmp_path / "root"
    root.mkdir()
    (root / "link.txt").symlink_to(tmp_path / "real" / "data.txt")
    assert collect_files(root) == [root / "link.txt"]


def test_subdirectory_vanishing_is_skipped(tmp_path, populate):
    populate(tmp_path, {"keep.txt": b"", "gone/lost.txt": b""})
    real_scandir = os.scandir

    def flaky_scandir(path):
        if os.fspath(path).endswith("gone"):
            raise FileNotFoundError(path)
        return real_scandir(path)

    with patch("missionrec.collector.os.scandir", side_effect=flaky_scandir):
        files = collect_files(tmp_path)

    assert files == [tmp_path / "keep.txt"]


def test_root_vanishing_raises(tmp_path):
    with patch("missionrec.collector.os.scandir", side_effect=FileNotFoundError):
        with pytest.raises(MissingSourceDirectoryError):
            collect_files(tmp_path)


def test_unreadable_subdirectory_is_skipped(tmp_path, populate, caplog):
    populate(tmp_path, {"good.txt": b"", "locked/secret.txt": b"", "open/ok.txt": b""})
    real_scandir = os.scandir

    def locked_scandir(path):
        if os.fspath(path).endswith("locked"):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    with patch("missionrec.collector.os.scandir", side_effect=locked_scandir):
        files = collect_files(tmp_path)

    assert sorted(files) == [tmp_path / "good.txt", tmp_path / "open" / "ok.txt"]
    assert "Unable to read directory" in caplog.text
    assert "locked" in caplog.text


class _Entry:
    def __init__(self, path, error=None):
        self.path = str(path)
        self._error = error

    def is_dir(self):
        if self._error:
            raise self._error
        return False

    def is_file(self):
        return True


def test_entry_stat_error_is_skipped(tmp_path, caplog):
    entries = [
        _Entry(tmp_path / "broken.txt", error=OSError(5, "Input/output error")),
        _Entry(tmp_path / "fine.txt"),
    ]

    with patch("missionrec.collector.os.scandir", return_value=contextlib.nullcontext(entries)):
        files = collect_files(tmp_path)

    assert files == [tmp_path / "fine.txt"]
    assert "Unable to inspect" in caplog.text
