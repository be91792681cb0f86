"""Tests for entries and collision-free name generation."""

import os

import pytest

from filesurf import (
    EntryKind,
    FileSystemEntry,
    can_be_renamed_collectively,
    get_available_name,
    get_available_names,
    get_copy_name,
    get_copy_names,
    get_name_multiple_dirs,
    is_valid_name,
)


def touch(path):
    path.write_text("")
    return path


class TestFileSystemEntry:
    def test_file_parts(self, tmp_path):
        e = FileSystemEntry.file(tmp_path / "report.final.pdf")
        assert e.name == "report.final.pdf"
        assert e.stem == "report.final"
        assert e.extension == ".pdf"
        assert e.parent == str(tmp_path)
        assert not e.is_dir

    def test_directory_has_no_extension(self, tmp_path):
        e = FileSystemEntry.directory(tmp_path / "photos.2024")
        assert e.extension == ""
        assert e.stem == "photos.2024"
        assert e.is_dir

    def test_path_is_normalized(self, tmp_path):
        e = FileSystemEntry.file(str(tmp_path) + "/x/../y.txt")
        assert e.path == os.path.join(str(tmp_path), "y.txt")
        assert os.path.isabs(e.path)

    def test_from_path_probes_kind(self, tree):
        assert FileSystemEntry.from_path(tree / "sub").kind is EntryKind.DIRECTORY
        assert FileSystemEntry.from_path(tree / "a.txt").kind is EntryKind.FILE

    def test_equality_ignores_kind(self, tmp_path):
        a = FileSystemEntry.file(tmp_path / "x")
        b = FileSystemEntry.directory(tmp_path / "x")
        assert a == b
        assert len({a, b}) == 1

    def test_root_has_no_parent(self):
        assert FileSystemEntry.directory(os.path.abspath(os.sep)).parent is None


class TestIsValidName:
    @pytest.mark.parametrize("name", ["a.txt", "My Folder", ".bashrc", "x (1)"])
    def test_valid(self, name):
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "a/b", "nul\0"])
    def test_invalid(self, name):
        assert not is_valid_name(name)


class TestGetAvailableName:
    def test_free_name_unchanged(self, tmp_path):
        assert get_available_name(str(tmp_path), "a.txt") == "a.txt"

    def test_first_free_index(self, tmp_path):
        touch(tmp_path / "a.txt")
        touch(tmp_path / "a (1).txt")
        assert get_available_name(str(tmp_path), "a.txt") == "a (2).txt"

    def test_directory_name_without_extension(self, tmp_path):
        (tmp_path / "photos").mkdir()
        assert get_available_name(str(tmp_path), "photos") == "photos (1)"

    def test_result_is_free(self, tmp_path):
        for n in range(5):
            touch(tmp_path / (f"a ({n}).txt" if n else "a.txt"))
        name = get_available_name(str(tmp_path), "a.txt")
        assert not (tmp_path / name).exists()

    def test_custom_exists_predicate(self):
        taken = {os.path.join("/virtual", "x.txt")}
        assert get_available_name("/virtual", "x.txt", exists=taken.__contains__) == "x (1).txt"


class TestGetNameMultipleDirs:
    def test_must_be_free_everywhere(self, tmp_path):
        one = tmp_path / "one"
        two = tmp_path / "two"
        one.mkdir()
        two.mkdir()
        touch(one / "f.txt")
        touch(two / "f (1).txt")
        assert get_name_multiple_dirs("f.txt", str(one), str(two)) == "f (2).txt"

    def test_free_everywhere_unchanged(self, tmp_path):
        assert get_name_multiple_dirs("f.txt", str(tmp_path), str(tmp_path)) == "f.txt"


class TestCopyNames:
    def test_copy_name(self, tmp_path):
        f = touch(tmp_path / "notes.txt")
        e = FileSystemEntry.file(f)
        assert get_copy_name(str(tmp_path), e) == "notes - Copy.txt"

    def test_copy_name_conflict(self, tmp_path):
        f = touch(tmp_path / "notes.txt")
        touch(tmp_path / "notes - Copy.txt")
        e = FileSystemEntry.file(f)
        assert get_copy_name(str(tmp_path), e) == "notes - Copy (1).txt"

    def test_batch_copy_names_distinct(self, tmp_path):
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        a = touch(tmp_path / "a" / "x.txt")
        b = touch(tmp_path / "b" / "x.txt")
        c = touch(tmp_path / "a" / "y")
        names = get_copy_names([FileSystemEntry.file(a), FileSystemEntry.file(b),
                                FileSystemEntry.file(c)])
        assert names == ["x - Copy.txt", "x - Copy.txt", "y - Copy"]

    def test_batch_copy_names_reserve_within_directory(self, tmp_path):
        d = tmp_path / "d"
        d.mkdir()
        e = FileSystemEntry.file(touch(d / "x.txt"))
        assert get_copy_names([e, e]) == ["x - Copy.txt", "x - Copy (1).txt"]


class TestGetAvailableNames:
    def test_empty(self, tmp_path):
        assert get_available_names(str(tmp_path), [], "pic.jpg") == []

    def test_indexed_from_one(self, tmp_path):
        entries = [FileSystemEntry.file(touch(tmp_path / f"{n}.png")) for n in "abc"]
        names = get_available_names(None, entries, "pic.png")
        assert names == ["pic (1).png", "pic (2).png", "pic (3).png"]

    def test_skips_taken_and_never_restarts(self, tmp_path):
        touch(tmp_path / "pic (1).png")
        touch(tmp_path / "pic (3).png")
        entries = [FileSystemEntry.file(touch(tmp_path / f"{n}.png")) for n in "abc"]
        names = get_available_names(str(tmp_path), entries, "pic.png")
        assert names == ["pic (2).png", "pic (4).png", "pic (5).png"]

    def test_names_distinct_and_free(self, tmp_path):
        for n in (1, 2, 5, 6):
            touch(tmp_path / f"doc ({n}).txt")
        entries = [FileSystemEntry.file(tmp_path / f"f{i}.txt") for i in range(6)]
        names = get_available_names(str(tmp_path), entries, "doc.txt")
        assert len(set(names)) == 6
        assert not any((tmp_path / name).exists() for name in names)

    def test_cursor_probes_each_index_once(self, tmp_path):
        probed = []

        def exists(path):
            probed.append(os.path.basename(path))
            return False

        entries = [FileSystemEntry.file(tmp_path / f"{i}.txt") for i in range(3)]
        get_available_names(str(tmp_path), entries, "n.txt", exists=exists)
        assert probed == ["n (1).txt", "n (2).txt", "n (3).txt"]

    def test_root_entry_without_directory(self):
        root = FileSystemEntry.directory(os.path.abspath(os.sep))
        with pytest.raises(ValueError):
            get_available_names(None, [root], "x")


class TestCanBeRenamedCollectively:
    def test_fewer_than_two(self, tmp_path):
        assert can_be_renamed_collectively([])
        assert can_be_renamed_collectively([FileSystemEntry.file(tmp_path / "a.txt")])

    def test_same_extension(self, tmp_path):
        entries = [FileSystemEntry.file(tmp_path / "a.txt"),
                   FileSystemEntry.file(tmp_path / "b.txt")]
        assert can_be_renamed_collectively(entries)

    def test_different_extension(self, tmp_path):
        entries = [FileSystemEntry.file(tmp_path / "a.txt"),
                   FileSystemEntry.file(tmp_path / "b.md")]
        assert not can_be_renamed_collectively(entries)

    def test_mixed_kinds(self, tmp_path):
        entries = [FileSystemEntry.file(tmp_path / "a"),
                   FileSystemEntry.directory(tmp_path / "b")]
        assert not can_be_renamed_collectively(entries)

    def test_directories(self, tmp_path):
        entries = [FileSystemEntry.directory(tmp_path / "a.x"),
                   FileSystemEntry.directory(tmp_path / "b.y")]
        assert can_be_renamed_collectively(entries)
