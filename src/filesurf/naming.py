"""Collision-free name generation and name validation.

All functions take an optional *exists* predicate (defaulting to
:func:`os.path.lexists`) so callers can resolve names against something
other than the local disk.  Names are only guaranteed free at call time.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from itertools import count

from ._paths import combine, names_equal, path_key, split_name
from .entries import FileSystemEntry

__all__ = [
    "is_valid_name",
    "get_available_name",
    "get_name_multiple_dirs",
    "get_copy_name",
    "get_copy_names",
    "get_available_names",
    "can_be_renamed_collectively",
]

Exists = Callable[[str], bool]

_WINDOWS_INVALID = set('<>:"|?*')


def is_valid_name(name: str) -> bool:
    """Return True if *name* can be used for a single file or directory."""
    if not name or name.isspace() or name in (".", ".."):
        return False
    if "/" in name or "\0" in name:
        return False
    if os.name == "nt":
        if "\\" in name or name.endswith((" ", ".")):
            return False
        if any(ch in _WINDOWS_INVALID or ord(ch) < 0x20 for ch in name):
            return False
    return True


def _indexed(stem: str, index: int, extension: str) -> str:
    return f"{stem} ({index}){extension}"


def get_available_name(directory: str, name: str, *,
                       exists: Exists = os.path.lexists) -> str:
    """Return *name* if it is free in *directory*, else the first free ``"stem (n).ext"``.

    Args:
        directory: Directory the name must be free in.
        name: Desired file or directory name.
        exists: Path existence predicate.
    """
    return get_name_multiple_dirs(name, directory, exists=exists)


def get_name_multiple_dirs(name: str, *directories: str,
                           exists: Exists = os.path.lexists) -> str:
    """Like :func:`get_available_name`, but the name must be free in every one of *directories*."""
    def free(candidate: str) -> bool:
        return not any(exists(combine(d, candidate)) for d in directories)

    if free(name):
        return name
    stem, extension = split_name(name)
    for index in count(1):
        candidate = _indexed(stem, index, extension)
        if free(candidate):
            return candidate
    raise AssertionError("unreachable")  # pragma: no cover


def get_copy_name(directory: str, entry: FileSystemEntry, *,
                  exists: Exists = os.path.lexists) -> str:
    """Return a free ``"stem - Copy.ext"`` name for *entry* in *directory*."""
    return get_available_name(directory, _copy_name(entry), exists=exists)


def _copy_name(entry: FileSystemEntry) -> str:
    return f"{entry.stem} - Copy{entry.extension}"


def get_copy_names(entries: Sequence[FileSystemEntry], *,
                   exists: Exists = os.path.lexists) -> list[str]:
    """Return index-aligned copy names for duplicating *entries* beside themselves.

    Entries sharing a parent directory never receive the same copy name,
    even though none of the copies exist yet.
    """
    reserved: set[str] = set()

    def taken(path: str) -> bool:
        return path_key(path) in reserved or exists(path)

    names = []
    for entry in entries:
        directory = entry.parent or entry.path
        name = get_available_name(directory, _copy_name(entry), exists=taken)
        reserved.add(path_key(combine(directory, name)))
        names.append(name)
    return names


def get_available_names(directory: str | None,
                        entries: Sequence[FileSystemEntry],
                        pattern: str, *,
                        exists: Exists = os.path.lexists) -> list[str]:
    """Return distinct ``"stem (n).ext"`` names for renaming *entries* by *pattern*.

    Indices start at 1.  A cursor resumes each search one past the last
    probed index, so the names are pairwise distinct without re-reading the
    directory between assignments.

    Args:
        directory: Directory shared by the entries; ``None`` uses the parent
            of the first entry.
        entries: Entries to name, in order.  The result is index-aligned.
        pattern: Naming pattern; its extension is kept on every name.
        exists: Path existence predicate.

    Raises:
        ValueError: If *directory* is ``None`` and the first entry is a root.
    """
    if not entries:
        return []
    if directory is None:
        directory = entries[0].parent
        if directory is None:
            raise ValueError(f"Entry has no parent directory: {entries[0].path}")

    stem, extension = split_name(pattern)
    names = []
    cursor = 1
    for _entry in entries:
        index = cursor
        while True:
            candidate = _indexed(stem, index, extension)
            cursor = index + 1
            if not exists(combine(directory, candidate)):
                names.append(candidate)
                break
            index += 1
    return names


def can_be_renamed_collectively(entries: Sequence[FileSystemEntry]) -> bool:
    """True when *entries* can share one naming pattern.

    That is the case for fewer than two entries, or when every entry has the
    same kind and, for files, the same extension.
    """
    if len(entries) < 2:
        return True
    first = entries[0]
    for entry in entries[1:]:
        if entry.kind is not first.kind:
            return False
        if not first.is_dir and not names_equal(entry.extension, first.extension):
            return False
    return True

