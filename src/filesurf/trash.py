"""Desktop trash integration.

Entries are moved to the trash with ``send2trash``.  Restoring reads the
freedesktop.org trash layout directly: each trashed entry lives under
``files/`` and has a matching ``info/<name>.trashinfo`` recording its
original path and deletion date.
"""

from __future__ import annotations

import configparser
import logging
import os
import shutil
import sys
from dataclasses import dataclass
from urllib.parse import unquote

from send2trash import send2trash

from ._paths import normalize_path, parent_dir, paths_equal
from .result import Result

log = logging.getLogger(__name__)

_INFO_SECTION = "Trash Info"
_INFO_SUFFIX = ".trashinfo"


@dataclass(frozen=True)
class TrashedItem:
    """One entry found in a trash directory.

    Attributes:
        original_path: Absolute path the entry was deleted from.
        deletion_date: ISO-8601 deletion timestamp as recorded (sortable).
        info_path: Path of the ``.trashinfo`` file.
        files_path: Path of the trashed payload.
    """
    original_path: str
    deletion_date: str
    info_path: str
    files_path: str


def _home_trash() -> str:
    """The home trash send2trash writes to (resolved once, when it is imported)."""
    from send2trash.plat_other import HOMETRASH

    return HOMETRASH


def _mount_point(path: str) -> str:
    path = os.path.realpath(path)
    while not os.path.ismount(path):
        parent = os.path.dirname(path)
        if parent == path:
            break
        path = parent
    return path


def _topdir_trashes(original_path: str) -> list[str]:
    parent = parent_dir(original_path)
    if parent is None or not os.path.isdir(parent):
        return []
    top = _mount_point(parent)
    uid = str(os.getuid())
    return [os.path.join(top, ".Trash", uid), os.path.join(top, f".Trash-{uid}")]


def _topdir_of(trash_dir: str) -> str:
    """Volume top directory owning *trash_dir* (``$top/.Trash-$uid`` or ``$top/.Trash/$uid``)."""
    trash_dir = os.path.normpath(trash_dir)
    if os.path.basename(trash_dir).startswith(".Trash-"):
        return os.path.dirname(trash_dir)
    return os.path.dirname(os.path.dirname(trash_dir))


def read_trash_info(info_path: str, trash_dir: str) -> TrashedItem | None:
    """Parse one ``.trashinfo`` file; returns None for unreadable files."""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(info_path, encoding="utf-8") as fh:
            parser.read_file(fh)
        raw_path = parser.get(_INFO_SECTION, "Path")
        deleted = parser.get(_INFO_SECTION, "DeletionDate", fallback="")
    except (OSError, UnicodeDecodeError, configparser.Error) as exc:
        log.debug("Skipping unreadable trash info %s: %s", info_path, exc)
        return None

    original = unquote(raw_path)
    if not os.path.isabs(original):
        original = os.path.join(_topdir_of(trash_dir), original)

    stored = os.path.basename(info_path)[: -len(_INFO_SUFFIX)]
    return TrashedItem(
        original_path=normalize_path(original),
        deletion_date=deleted,
        info_path=info_path,
        files_path=os.path.join(trash_dir, "files", stored),
    )


class SystemTrash:
    """Move entries to the desktop trash and restore them by original path.

    Args:
        trash_dirs: Trash directories to search when restoring.  ``None``
            uses the home trash plus the top-directory trashes of the
            volume holding the entry being restored.
    """

    def __init__(self, trash_dirs: list[str] | None = None):
        self._trash_dirs = trash_dirs

    @property
    def can_restore(self) -> bool:
        if self._trash_dirs is not None:
            return True
        return os.name == "posix" and sys.platform != "darwin"

    def move_file_to_trash(self, path: str) -> Result:
        return self._send(path)

    def move_dir_to_trash(self, path: str) -> Result:
        return self._send(path)

    def _send(self, path: str) -> Result:
        if not os.path.lexists(path):
            return Result.error(f'Could not find "{path}"')
        try:
            send2trash(path)
        except OSError as exc:
            return Result.from_exception(exc)
        log.debug("Trashed %s", path)
        return Result.ok()

    def restore_file(self, original_path: str) -> Result:
        return self._restore(original_path)

    def restore_dir(self, original_path: str) -> Result:
        return self._restore(original_path)

    def _candidate_dirs(self, original_path: str) -> list[str]:
        if self._trash_dirs is not None:
            return list(self._trash_dirs)
        return [_home_trash(), *_topdir_trashes(original_path)]

    def find(self, original_path: str) -> list[TrashedItem]:
        """Return every trashed item that came from *original_path*, newest first."""
        matches = []
        for trash_dir in self._candidate_dirs(original_path):
            info_dir = os.path.join(trash_dir, "info")
            try:
                names = os.listdir(info_dir)
            except OSError:
                continue
            for name in names:
                if not name.endswith(_INFO_SUFFIX):
                    continue
                item = read_trash_info(os.path.join(info_dir, name), trash_dir)
                if item is not None and paths_equal(item.original_path, original_path):
                    matches.append(item)
        matches.sort(key=lambda item: item.deletion_date, reverse=True)
        return matches

    def _restore(self, original_path: str) -> Result:
        if not self.can_restore:
            return Result.error("Restoring from the trash is not supported on this platform.")
        original_path = normalize_path(original_path)
        matches = [m for m in self.find(original_path) if os.path.lexists(m.files_path)]
        if not matches:
            return Result.error(f'Could not find "{original_path}" in trash.')
        if os.path.lexists(original_path):
            return Result.error(f'"{original_path}" already exists')
        newest = matches[0]
        try:
            parent = parent_dir(original_path)
            if parent is not None:
                os.makedirs(parent, exist_ok=True)
            shutil.move(newest.files_path, original_path)
            os.remove(newest.info_path)
        except OSError as exc:
            return Result.from_exception(exc)
        log.debug("Restored %s from %s", original_path, newest.files_path)
        return Result.ok()
