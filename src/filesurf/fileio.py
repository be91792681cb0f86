"""Raw file and directory primitives for the local disk.

Every primitive returns a :class:`~filesurf.result.Result`.  Validation and
precondition failures are detected before touching the disk; ``OSError``
raised by the underlying call is converted into an Error carrying its text.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable

from ._paths import combine, file_name, is_within, parent_dir, paths_equal
from .naming import is_valid_name
from .result import Result

log = logging.getLogger(__name__)


def _attempt(fn: Callable[[], object]) -> Result:
    try:
        fn()
    except OSError as exc:
        log.debug("I/O failure: %s", exc)
        return Result.from_exception(exc)
    return Result.ok()


def _is_dir(path: str) -> bool:
    return os.path.isdir(path) and not os.path.islink(path)


def _is_file(path: str) -> bool:
    return os.path.lexists(path) and not _is_dir(path)


def _create_empty_file(path: str) -> None:
    with open(path, "xb"):
        pass


def _copy_dir(src: str, dest: str) -> None:
    shutil.copytree(src, dest, symlinks=True)


class LocalFileIO:
    """File and directory primitives backed by :mod:`os` and :mod:`shutil`.

    Files and directories have separate methods so callers dispatch on the
    entry kind once.  Symlinks are handled as files and never followed.
    """

    # -- creation -------------------------------------------------------

    def new_file_at(self, dir_path: str, name: str) -> Result:
        if not is_valid_name(name):
            return Result.error(f'File name: "{name}" is invalid.')
        path = combine(dir_path, name)
        if os.path.lexists(path):
            return Result.error(f'File: "{path}" already exists')
        return _attempt(lambda: _create_empty_file(path))

    def new_dir_at(self, dir_path: str, name: str) -> Result:
        if not is_valid_name(name):
            return Result.error(f'Directory name: "{name}" is invalid.')
        path = combine(dir_path, name)
        if os.path.lexists(path):
            return Result.error(f'Directory: "{path}" already exists')
        return _attempt(lambda: os.mkdir(path))

    # -- rename ---------------------------------------------------------

    def rename_file_at(self, path: str, new_name: str) -> Result:
        if not is_valid_name(new_name):
            return Result.error(f'File name: "{new_name}" is invalid.')
        if not _is_file(path):
            return Result.error(f'Could not find file: "{path}"')
        return self._rename(path, new_name)

    def rename_dir_at(self, path: str, new_name: str) -> Result:
        if not is_valid_name(new_name):
            return Result.error(f'Directory name: "{new_name}" is invalid.')
        if not _is_dir(path):
            return Result.error(f'Could not find directory: "{path}"')
        return self._rename(path, new_name)

    def _rename(self, path: str, new_name: str) -> Result:
        parent = parent_dir(path)
        if parent is None:
            return Result.error(f'"{path}" is a root directory')
        if file_name(path) == new_name:
            return Result.ok()
        target = combine(parent, new_name)
        # a case-only rename targets the entry itself on case-insensitive disks
        if os.path.lexists(target) and not paths_equal(target, path):
            return Result.error(f'"{target}" already exists')
        return _attempt(lambda: os.rename(path, target))

    # -- move / copy ----------------------------------------------------

    def move_file_to(self, path: str, dest_dir: str) -> Result:
        if not _is_file(path):
            return Result.error(f'Could not find file: "{path}"')
        return self._transfer(path, dest_dir, shutil.move)

    def move_dir_to(self, path: str, dest_dir: str) -> Result:
        if not _is_dir(path):
            return Result.error(f'Could not find directory: "{path}"')
        if is_within(dest_dir, path):
            return Result.error(f'Cannot move "{path}" into itself')
        return self._transfer(path, dest_dir, shutil.move)

    def copy_file_to(self, path: str, dest_dir: str) -> Result:
        if not _is_file(path):
            return Result.error(f'Could not find file: "{path}"')
        return self._transfer(
            path, dest_dir, lambda s, d: shutil.copy2(s, d, follow_symlinks=False))

    def copy_dir_to(self, path: str, dest_dir: str) -> Result:
        if not _is_dir(path):
            return Result.error(f'Could not find directory: "{path}"')
        if is_within(dest_dir, path):
            return Result.error(f'Cannot copy "{path}" into itself')
        return self._transfer(path, dest_dir, _copy_dir)

    def _transfer(self, path: str, dest_dir: str,
                  fn: Callable[[str, str], object]) -> Result:
        if not _is_dir(dest_dir):
            return Result.error(f'Could not find directory: "{dest_dir}"')
        target = combine(dest_dir, file_name(path))
        if os.path.lexists(target):
            return Result.error(f'"{target}" already exists')
        return _attempt(lambda: fn(path, target))

    # -- duplicate ------------------------------------------------------

    def duplicate_file(self, path: str, copy_name: str) -> Result:
        if not _is_file(path):
            return Result.error(f'Could not find file: "{path}"')
        return self._duplicate(
            path, copy_name, lambda s, d: shutil.copy2(s, d, follow_symlinks=False))

    def duplicate_dir(self, path: str, copy_name: str) -> Result:
        if not _is_dir(path):
            return Result.error(f'Could not find directory: "{path}"')
        return self._duplicate(path, copy_name, _copy_dir)

    def _duplicate(self, path: str, copy_name: str,
                   fn: Callable[[str, str], object]) -> Result:
        if not is_valid_name(copy_name):
            return Result.error(f'Name: "{copy_name}" is invalid.')
        parent = parent_dir(path)
        if parent is None:
            return Result.error("Can't duplicate a root directory.")
        target = combine(parent, copy_name)
        if os.path.lexists(target):
            return Result.error(f'"{target}" already exists')
        return _attempt(lambda: fn(path, target))

    # -- delete ---------------------------------------------------------

    def delete_file(self, path: str) -> Result:
        if not _is_file(path):
            return Result.error(f'Could not find file: "{path}"')
        return _attempt(lambda: os.remove(path))

    def delete_dir(self, path: str) -> Result:
        if not _is_dir(path):
            return Result.error(f'Could not find directory: "{path}"')
        return _attempt(lambda: shutil.rmtree(path))
