"""Immediate-children listing of local directories."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass

from .result import Result

_HIDDEN = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)
_SYSTEM = getattr(stat, "FILE_ATTRIBUTE_SYSTEM", 0x4)


@dataclass(frozen=True)
class EntryInfo:
    """One listed child.

    Attributes:
        path: Absolute path of the child.
        is_dir: True for real directories (symlinks are reported as files).
        modified_ns: Last modification time in nanoseconds since the epoch.
        size: Size in bytes (0 for directories).
    """
    path: str
    is_dir: bool
    modified_ns: int
    size: int


def _attributes(entry: os.DirEntry) -> int:
    try:
        return getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
    except OSError:
        return 0


class LocalLister:
    """List the files or directories directly inside a local directory."""

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def list_dirs(self, path: str, *, include_hidden: bool = False,
                  include_system: bool = False) -> Result[list[EntryInfo]]:
        return self._list(path, True, include_hidden, include_system)

    def list_files(self, path: str, *, include_hidden: bool = False,
                   include_system: bool = False) -> Result[list[EntryInfo]]:
        return self._list(path, False, include_hidden, include_system)

    def _list(self, path: str, want_dirs: bool, include_hidden: bool,
              include_system: bool) -> Result[list[EntryInfo]]:
        try:
            found = []
            with os.scandir(path) as it:
                for entry in it:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    if is_dir != want_dirs:
                        continue
                    if not include_hidden or not include_system:
                        attrs = _attributes(entry)
                        if not include_hidden and (
                                entry.name.startswith(".") or attrs & _HIDDEN):
                            continue
                        if not include_system and attrs & _SYSTEM:
                            continue
                    st = entry.stat(follow_symlinks=False)
                    found.append(EntryInfo(
                        path=os.path.abspath(entry.path),
                        is_dir=is_dir,
                        modified_ns=st.st_mtime_ns,
                        size=0 if is_dir else st.st_size,
                    ))
        except OSError as exc:
            return Result.from_exception(exc)
        found.sort(key=lambda info: os.path.basename(info.path))
        return Result.ok(found)
