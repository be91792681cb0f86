"""Tests for SystemTrash (send2trash is mocked; restore uses a fabricated trash)."""

import os
from unittest import mock
from urllib.parse import quote

import pytest

from filesurf import SystemTrash
from filesurf.trash import read_trash_info


def trash_item(trash_dir, stored_name, original_path, date, content="x", is_dir=False):
    """Create files/<stored_name> and info/<stored_name>.trashinfo."""
    files = trash_dir / "files"
    info = trash_dir / "info"
    files.mkdir(parents=True, exist_ok=True)
    info.mkdir(parents=True, exist_ok=True)
    payload = files / stored_name
    if is_dir:
        payload.mkdir()
        (payload / "inside.txt").write_text(content)
    else:
        payload.write_text(content)
    (info / f"{stored_name}.trashinfo").write_text(
        "[Trash Info]\n"
        f"Path={quote(str(original_path))}\n"
        f"DeletionDate={date}\n"
    )
    return payload


@pytest.fixture
def trash_dir(tmp_path):
    return tmp_path / "Trash"


class TestMoveToTrash:
    def test_calls_send2trash(self, tmp_path):
        f = tmp_path / "doomed.txt"
        f.write_text("bye")
        with mock.patch("filesurf.trash.send2trash") as send:
            r = SystemTrash().move_file_to_trash(str(f))
        assert r.is_ok
        send.assert_called_once_with(str(f))

    def test_missing_path(self, tmp_path):
        with mock.patch("filesurf.trash.send2trash") as send:
            r = SystemTrash().move_dir_to_trash(str(tmp_path / "missing"))
        assert not r.is_ok
        send.assert_not_called()

    def test_send2trash_error(self, tmp_path):
        f = tmp_path / "locked.txt"
        f.write_text("")
        with mock.patch("filesurf.trash.send2trash",
                        side_effect=PermissionError("no trash for you")):
            r = SystemTrash().move_file_to_trash(str(f))
        assert r.errors == ["no trash for you"]


class TestRestore:
    def test_restore_file(self, tmp_path, trash_dir):
        original = tmp_path / "docs" / "a b.txt"
        original.parent.mkdir()
        trash_item(trash_dir, "a b.txt", original, "2024-01-01T10:00:00", "old")
        r = SystemTrash([str(trash_dir)]).restore_file(str(original))
        assert r.is_ok, r.message
        assert original.read_text() == "old"
        assert os.listdir(trash_dir / "info") == []

    def test_restore_newest(self, tmp_path, trash_dir):
        original = tmp_path / "a.txt"
        trash_item(trash_dir, "a.txt", original, "2024-01-01T10:00:00", "older")
        trash_item(trash_dir, "a.2.txt", original, "2024-06-01T10:00:00", "newer")
        r = SystemTrash([str(trash_dir)]).restore_file(str(original))
        assert r.is_ok
        assert original.read_text() == "newer"
        assert (trash_dir / "files" / "a.txt").exists()

    def test_restore_dir(self, tmp_path, trash_dir):
        original = tmp_path / "folder"
        trash_item(trash_dir, "folder", original, "2024-01-01T10:00:00", is_dir=True)
        assert SystemTrash([str(trash_dir)]).restore_dir(str(original)).is_ok
        assert (original / "inside.txt").exists()

    def test_not_in_trash(self, tmp_path, trash_dir):
        r = SystemTrash([str(trash_dir)]).restore_file(str(tmp_path / "nope.txt"))
        assert not r.is_ok
        assert "in trash" in r.message

    def test_refuses_to_overwrite(self, tmp_path, trash_dir):
        original = tmp_path / "a.txt"
        trash_item(trash_dir, "a.txt", original, "2024-01-01T10:00:00", "trashed")
        original.write_text("current")
        r = SystemTrash([str(trash_dir)]).restore_file(str(original))
        assert not r.is_ok
        assert original.read_text() == "current"
        assert (trash_dir / "files" / "a.txt").exists()

    def test_relative_topdir_path(self, tmp_path):
        topdir_trash = tmp_path / ".Trash-1000"
        (tmp_path / "data").mkdir()
        trash_item(topdir_trash, "r.txt", "data/r.txt", "2024-01-01T10:00:00")
        item = read_trash_info(
            str(topdir_trash / "info" / "r.txt.trashinfo"), str(topdir_trash))
        assert item.original_path == str(tmp_path / "data" / "r.txt")

    def test_unreadable_info_skipped(self, trash_dir):
        (trash_dir / "info").mkdir(parents=True)
        bad = trash_dir / "info" / "bad.trashinfo"
        bad.write_text("not an ini file")
        assert read_trash_info(str(bad), str(trash_dir)) is None

    def test_home_trash_matches_send2trash(self, tmp_path, trash_dir, monkeypatch):
        original = tmp_path / "home.txt"
        trash_item(trash_dir, "home.txt", original, "2024-01-01T10:00:00", "home")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "elsewhere"))
        monkeypatch.setattr("send2trash.plat_other.HOMETRASH", str(trash_dir))
        r = SystemTrash().restore_file(str(original))
        assert r.is_ok, r.message
        assert original.read_text() == "home"
