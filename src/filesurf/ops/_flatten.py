"""Flatten a directory into its parent."""

from __future__ import annotations

import logging
import os

from .._paths import combine, file_name, names_equal, normalize_path, parent_dir
from ..fileio import LocalFileIO
from ..listing import EntryInfo, LocalLister
from ..naming import Exists, get_available_name, get_name_multiple_dirs
from ..result import Result
from ._base import UndoableOperation

log = logging.getLogger("filesurf.ops")


class FlattenFolder(UndoableOperation):
    """Move the immediate contents of a directory into its parent, then delete it.

    Steps of :meth:`invoke`:

    1. Fail without side effects when the directory is a root.
    2. If the directory holds a child with its own name, that child would
       collide with the directory once moved up, so the directory is first
       renamed to a name free both in the parent and inside itself.
    3. List the immediate subdirectories and files (hidden and system
       entries included) and keep the listing for :meth:`undo`.
    4. Move every subdirectory, then every file, into the parent.
    5. Delete the directory only if every move succeeded.  Moves that did
       succeed are left in place otherwise.

    :meth:`undo` recreates the directory (under a substitute name when its
    original path is occupied by one of the moved children), moves every
    captured child back from the parent and finally restores the original
    name.  If the original path is occupied by something that is not one of
    the captured children, undo fails.

    Args:
        io: Raw I/O primitives.
        lister: Directory listing collaborator.
        dir_path: Directory to flatten.
        exists: Path existence predicate used for name resolution.
    """

    def __init__(self, io: LocalFileIO, lister: LocalLister, dir_path: str, *,
                 exists: Exists = os.path.lexists):
        self.io = io
        self.lister = lister
        self.dir_path = normalize_path(dir_path)
        self.dir_name = file_name(self.dir_path)
        self.parent = parent_dir(self.dir_path)
        self._exists = exists
        self._dirs: list[EntryInfo] = []
        self._files: list[EntryInfo] = []
        self._listed = False

    @property
    def contained(self) -> list[EntryInfo]:
        """Children captured by the last listing: directories first, then files."""
        return [*self._dirs, *self._files]

    def invoke(self) -> Result:
        if self.parent is None:
            return Result.error(f'Cannot flatten top level directory: "{self.dir_path}"')

        renamed = self._rename_if_conflict()
        if not renamed.is_ok:
            return renamed
        work_path = renamed.value

        dirs = self.lister.list_dirs(work_path, include_hidden=True, include_system=True)
        files = self.lister.list_files(work_path, include_hidden=True, include_system=True)
        if not dirs.is_ok or not files.is_ok:
            return Result.error(*dirs.errors, *files.errors)
        self._dirs = list(dirs.value)
        self._files = list(files.value)
        self._listed = True

        result = Result.ok()
        for info in self._dirs:
            result.merge(self.io.move_dir_to(info.path, self.parent))
        for info in self._files:
            result.merge(self.io.move_file_to(info.path, self.parent))
        if not result.is_ok:
            log.warning("Flatten of %s left partially applied: %s",
                        self.dir_path, result.message)
            return result
        return self.io.delete_dir(work_path)

    def _rename_if_conflict(self) -> Result[str]:
        if not self._exists(combine(self.dir_path, self.dir_name)):
            return Result.ok(self.dir_path)
        new_name = get_name_multiple_dirs(
            self.dir_name, self.parent, self.dir_path, exists=self._exists)
        result = self.io.rename_dir_at(self.dir_path, new_name)
        if not result.is_ok:
            return result
        log.debug("Renamed %s to %s before flattening", self.dir_path, new_name)
        return Result.ok(combine(self.parent, new_name))

    def undo(self) -> Result:
        if self.parent is None:
            return Result.error(f'Cannot create a top level directory: "{self.dir_path}"')
        if not self._listed:
            return Result.error("Nothing to undo")

        checked = self._check_conditions()
        if not checked.is_ok:
            return checked
        new_name = checked.value
        new_path = combine(self.parent, new_name)

        result = self.io.new_dir_at(self.parent, new_name)
        if not result.is_ok:
            return result
        for info in self._dirs:
            moved = combine(self.parent, file_name(info.path))
            result.merge(self.io.move_dir_to(moved, new_path))
        for info in self._files:
            moved = combine(self.parent, file_name(info.path))
            result.merge(self.io.move_file_to(moved, new_path))
        if not result.is_ok:
            return result

        if names_equal(new_name, self.dir_name):
            return Result.ok()
        return self.io.rename_dir_at(new_path, self.dir_name)

    def _check_conditions(self) -> Result[str]:
        if not self._exists(self.dir_path):
            return Result.ok(self.dir_name)
        if not any(names_equal(self.dir_name, file_name(info.path))
                   for info in self.contained):
            return Result.error(f'Path: "{self.dir_path}" already exists.')
        return Result.ok(get_available_name(self.parent, self.dir_name, exists=self._exists))

    def __repr__(self) -> str:
        return f"FlattenFolder({self.dir_path!r})"
