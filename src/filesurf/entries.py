"""File and directory entries referenced by absolute path."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

from ._paths import file_name, normalize_path, parent_dir, path_key, split_name


class EntryKind(str, Enum):
    """Variant tag of a :class:`FileSystemEntry`: ``FILE`` or ``DIRECTORY``."""
    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True, eq=False)
class FileSystemEntry:
    """An immutable reference to a file or directory on disk.

    The path is normalized to an absolute path on construction.  Two entries
    are equal when their paths are equal under the platform comparer; the
    kind does not take part in equality.

    Attributes:
        path: Absolute, normalized path to the entry.
        kind: :class:`EntryKind` of the entry.
    """
    path: str
    kind: EntryKind = EntryKind.FILE

    def __post_init__(self):
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "kind", EntryKind(self.kind))

    @classmethod
    def file(cls, path: str | os.PathLike[str]) -> FileSystemEntry:
        return cls(os.fspath(path), EntryKind.FILE)

    @classmethod
    def directory(cls, path: str | os.PathLike[str]) -> FileSystemEntry:
        return cls(os.fspath(path), EntryKind.DIRECTORY)

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> FileSystemEntry:
        """Build an entry, probing the disk to pick its kind.

        Symlinks to directories count as files, matching how the lister
        reports them.  Missing paths are treated as files.
        """
        path = os.fspath(path)
        if os.path.isdir(path) and not os.path.islink(path):
            return cls.directory(path)
        return cls.file(path)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def name(self) -> str:
        return file_name(self.path)

    @property
    def stem(self) -> str:
        """Name without extension (the whole name for directories)."""
        if self.is_dir:
            return self.name
        return split_name(self.name)[0]

    @property
    def extension(self) -> str:
        """Extension including its leading dot; empty for directories."""
        if self.is_dir:
            return ""
        return split_name(self.name)[1]

    @property
    def parent(self) -> str | None:
        return parent_dir(self.path)

    def __eq__(self, other):
        if not isinstance(other, FileSystemEntry):
            return NotImplemented
        return path_key(self.path) == path_key(other.path)

    def __hash__(self):
        return hash(path_key(self.path))

    def __str__(self) -> str:
        return self.path
