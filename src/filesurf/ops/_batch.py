"""Batch operations: trash, move, copy, duplicate and multi-rename."""

from __future__ import annotations

from collections.abc import Sequence

from .._paths import combine
from ..entries import FileSystemEntry
from ..fileio import LocalFileIO
from ..result import Result
from ..trash import SystemTrash
from ._base import BatchOperation


class MoveToTrash(BatchOperation):
    """Move entries to the trash; undo restores them to their original paths."""
    verb = "trash"

    def __init__(self, trash: SystemTrash, entries: Sequence[FileSystemEntry]):
        super().__init__(entries)
        self.trash = trash

    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.trash.move_dir_to_trash(entry.path)
        return self.trash.move_file_to_trash(entry.path)

    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.trash.restore_dir(entry.path)
        return self.trash.restore_file(entry.path)


class MoveTo(BatchOperation):
    """Move entries into *destination*; undo moves each back to its own parent."""
    verb = "move"
    undo_verb = "move back"

    def __init__(self, io: LocalFileIO, entries: Sequence[FileSystemEntry],
                 destination: str):
        super().__init__(entries)
        self.io = io
        self.destination = destination
        self._origins = [entry.parent or entry.path for entry in self.entries]

    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.io.move_dir_to(entry.path, self.destination)
        return self.io.move_file_to(entry.path, self.destination)

    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        moved = combine(self.destination, entry.name)
        if entry.is_dir:
            return self.io.move_dir_to(moved, self._origins[index])
        return self.io.move_file_to(moved, self._origins[index])


class CopyTo(BatchOperation):
    """Copy entries into *destination*; undo deletes the copies."""
    verb = "copy"
    undo_verb = "delete the copy of"

    def __init__(self, io: LocalFileIO, entries: Sequence[FileSystemEntry],
                 destination: str):
        super().__init__(entries)
        self.io = io
        self.destination = destination

    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.io.copy_dir_to(entry.path, self.destination)
        return self.io.copy_file_to(entry.path, self.destination)

    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        copied = combine(self.destination, entry.name)
        if entry.is_dir:
            return self.io.delete_dir(copied)
        return self.io.delete_file(copied)


def _check_names(entries: Sequence[FileSystemEntry], names: Sequence[str], what: str):
    if len(names) != len(entries):
        raise ValueError(
            f"Expected {len(entries)} {what}, got {len(names)}")


class DuplicateFiles(BatchOperation):
    """Copy each entry beside itself under a pre-generated name.

    Args:
        io: Raw I/O primitives.
        entries: Entries to duplicate.
        copy_names: Index-aligned names for the copies, usually from
            :func:`~filesurf.naming.get_copy_names`.

    Raises:
        ValueError: If *copy_names* and *entries* differ in length.
    """
    verb = "duplicate"
    undo_verb = "delete the duplicate of"

    def __init__(self, io: LocalFileIO, entries: Sequence[FileSystemEntry],
                 copy_names: Sequence[str]):
        super().__init__(entries)
        _check_names(self.entries, copy_names, "copy names")
        self.io = io
        self.copy_names = tuple(copy_names)

    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.io.duplicate_dir(entry.path, self.copy_names[index])
        return self.io.duplicate_file(entry.path, self.copy_names[index])

    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.parent is None:
            return Result.error(f'"{entry.path}" has no parent directory')
        copy = combine(entry.parent, self.copy_names[index])
        if entry.is_dir:
            return self.io.delete_dir(copy)
        return self.io.delete_file(copy)


class RenameMultiple(BatchOperation):
    """Rename each entry in place to a pre-generated name.

    Args:
        io: Raw I/O primitives.
        entries: Entries to rename.
        new_names: Index-aligned new names, usually from
            :func:`~filesurf.naming.get_available_names`.

    Raises:
        ValueError: If *new_names* and *entries* differ in length.
    """
    verb = "rename"
    undo_verb = "rename back"

    def __init__(self, io: LocalFileIO, entries: Sequence[FileSystemEntry],
                 new_names: Sequence[str]):
        super().__init__(entries)
        _check_names(self.entries, new_names, "new names")
        self.io = io
        self.new_names = tuple(new_names)

    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.is_dir:
            return self.io.rename_dir_at(entry.path, self.new_names[index])
        return self.io.rename_file_at(entry.path, self.new_names[index])

    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        if entry.parent is None:
            return Result.error(f'"{entry.path}" is a root directory')
        renamed = combine(entry.parent, self.new_names[index])
        if entry.is_dir:
            return self.io.rename_dir_at(renamed, entry.name)
        return self.io.rename_file_at(renamed, entry.name)
