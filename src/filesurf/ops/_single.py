"""Single-entry operations: rename and creation."""

from __future__ import annotations

from .._paths import combine
from ..entries import FileSystemEntry
from ..fileio import LocalFileIO
from ..result import Result
from ._base import UndoableOperation


class RenameOne(UndoableOperation):
    """Rename one entry in place; undo renames it back."""

    def __init__(self, io: LocalFileIO, entry: FileSystemEntry, new_name: str):
        self.io = io
        self.entry = entry
        self.new_name = new_name

    @property
    def new_path(self) -> str | None:
        if self.entry.parent is None:
            return None
        return combine(self.entry.parent, self.new_name)

    def invoke(self) -> Result:
        if self.entry.is_dir:
            return self.io.rename_dir_at(self.entry.path, self.new_name)
        return self.io.rename_file_at(self.entry.path, self.new_name)

    def undo(self) -> Result:
        if self.new_path is None:
            return Result.error(f'"{self.entry.path}" is a root directory')
        if self.entry.is_dir:
            return self.io.rename_dir_at(self.new_path, self.entry.name)
        return self.io.rename_file_at(self.new_path, self.entry.name)

    def __repr__(self) -> str:
        return f"RenameOne({self.entry.path!r} -> {self.new_name!r})"


class NewFileAt(UndoableOperation):
    """Create an empty file named *name* in *directory*; undo deletes it."""

    def __init__(self, io: LocalFileIO, directory: str, name: str):
        self.io = io
        self.directory = directory
        self.name = name
        self.path = combine(directory, name)

    def invoke(self) -> Result:
        return self.io.new_file_at(self.directory, self.name)

    def undo(self) -> Result:
        return self.io.delete_file(self.path)

    def __repr__(self) -> str:
        return f"NewFileAt({self.path!r})"


class NewDirAt(UndoableOperation):
    """Create an empty directory named *name* in *directory*; undo deletes it."""

    def __init__(self, io: LocalFileIO, directory: str, name: str):
        self.io = io
        self.directory = directory
        self.name = name
        self.path = combine(directory, name)

    def invoke(self) -> Result:
        return self.io.new_dir_at(self.directory, self.name)

    def undo(self) -> Result:
        return self.io.delete_dir(self.path)

    def __repr__(self) -> str:
        return f"NewDirAt({self.path!r})"
