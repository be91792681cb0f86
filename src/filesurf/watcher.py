"""Polling directory watcher.

The watcher re-reads a whole subtree at a fixed interval and diffs
consecutive snapshots, so it works on any filesystem without native change
notification.  Events for one cycle are emitted in a fixed order:

1. ``CREATED`` for new paths, directories before files.
2. ``DELETED`` for vanished paths, files before directories.
3. ``MOVED`` for detected moves (only with ``detect_moves=True``).
4. ``UPDATED`` for files whose modification time or size changed.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from ._paths import normalize_path
from .listing import LocalLister
from .result import Result

log = logging.getLogger(__name__)

__all__ = [
    "ChangeKind",
    "ChangeEvent",
    "EntryMeta",
    "Snapshot",
    "WatcherState",
    "DirectoryWatcher",
    "take_snapshot",
    "diff_snapshots",
]


class ChangeKind(str, Enum):
    """Kind of detected change: ``CREATED``, ``DELETED``, ``UPDATED`` or ``MOVED``."""
    CREATED = "created"
    DELETED = "deleted"
    UPDATED = "updated"
    MOVED = "moved"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class ChangeEvent:
    """A single change under a watched root.

    Attributes:
        path: Absolute path of the changed entry (the old path for moves).
        is_dir: True if the entry is a directory.
        kind: :class:`ChangeKind` of the change.
        new_path: Destination path for ``MOVED`` events, else ``None``.
    """
    path: str
    is_dir: bool
    kind: ChangeKind
    new_path: str | None = None

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "is_dir": self.is_dir,
            "kind": str(self.kind),
            "new_path": self.new_path,
        }


@dataclass(frozen=True)
class EntryMeta:
    """Metadata recorded for one path in a snapshot."""
    is_dir: bool
    modified_ns: int
    size: int


Snapshot = dict[str, EntryMeta]


class WatcherState(str, Enum):
    IDLE = "idle"
    SAMPLING = "sampling"
    WAITING = "waiting"
    STOPPED = "stopped"

    def __str__(self) -> str:          # noqa: D105
        return self.value


# ---------------------------------------------------------------------------
# Snapshot and diff
# ---------------------------------------------------------------------------

def take_snapshot(root: str, lister: LocalLister | None = None, *,
                  include_hidden: bool = True) -> Result[Snapshot]:
    """Record every path below *root*, breadth first.

    The root itself is not part of the snapshot.  A failing listing call
    aborts the snapshot and its error is returned.
    """
    lister = lister or LocalLister()
    snapshot: Snapshot = {}
    queue = deque([root])
    while queue:
        path = queue.popleft()
        dirs = lister.list_dirs(path, include_hidden=include_hidden, include_system=True)
        if not dirs.is_ok:
            return dirs
        files = lister.list_files(path, include_hidden=include_hidden, include_system=True)
        if not files.is_ok:
            return files
        for info in dirs.value:
            snapshot[info.path] = EntryMeta(True, info.modified_ns, 0)
            queue.append(info.path)
        for info in files.value:
            snapshot[info.path] = EntryMeta(False, info.modified_ns, info.size)
    return Result.ok(snapshot)


def _dirs_first(items: list[tuple[str, EntryMeta]]) -> Iterator[tuple[str, EntryMeta]]:
    yield from (item for item in items if item[1].is_dir)
    yield from (item for item in items if not item[1].is_dir)


def _files_first(items: list[tuple[str, EntryMeta]]) -> Iterator[tuple[str, EntryMeta]]:
    yield from (item for item in items if not item[1].is_dir)
    yield from (item for item in items if item[1].is_dir)


def _pair_moves(deleted: list[tuple[str, EntryMeta]],
                created: list[tuple[str, EntryMeta]]) -> dict[str, str]:
    """Map old path -> new path for files whose (size, mtime) match exactly one counterpart."""
    def by_signature(items):
        groups: dict[tuple[int, int], list[str]] = {}
        for path, meta in items:
            if not meta.is_dir:
                groups.setdefault((meta.size, meta.modified_ns), []).append(path)
        return groups

    gone = by_signature(deleted)
    new = by_signature(created)
    moves = {}
    for signature, old_paths in gone.items():
        new_paths = new.get(signature, [])
        if len(old_paths) == 1 and len(new_paths) == 1:
            moves[old_paths[0]] = new_paths[0]
    return moves


def diff_snapshots(old: Snapshot, new: Snapshot, *,
                   detect_moves: bool = False) -> list[ChangeEvent]:
    """Return the ordered change events turning *old* into *new*.

    A path whose kind changed (file replaced by a directory or the reverse)
    is reported as deleted and created.

    Args:
        old: Previous snapshot.
        new: Current snapshot.
        detect_moves: Collapse a deleted file and a created file with the
            same size and modification time into one ``MOVED`` event when
            the pair is unambiguous.
    """
    def kind_changed(path, meta, other):
        return path in other and other[path].is_dir != meta.is_dir

    created = [(p, m) for p, m in new.items() if p not in old or kind_changed(p, m, old)]
    deleted = [(p, m) for p, m in old.items() if p not in new or kind_changed(p, m, new)]

    moves = _pair_moves(deleted, created) if detect_moves else {}
    moved_to = set(moves.values())

    events = []
    for path, meta in _dirs_first(created):
        if path not in moved_to:
            events.append(ChangeEvent(path, meta.is_dir, ChangeKind.CREATED))
    for path, meta in _files_first(deleted):
        if path not in moves:
            events.append(ChangeEvent(path, meta.is_dir, ChangeKind.DELETED))
    for old_path, new_path in moves.items():
        events.append(ChangeEvent(old_path, False, ChangeKind.MOVED, new_path))
    for path, meta in new.items():
        if meta.is_dir:
            continue
        before = old.get(path)
        if before is None or before.is_dir:
            continue
        if before.modified_ns != meta.modified_ns or before.size != meta.size:
            events.append(ChangeEvent(path, False, ChangeKind.UPDATED))
    return events


# ---------------------------------------------------------------------------
# Watcher
# ---------------------------------------------------------------------------

Subscriber = Callable[[ChangeEvent], None]


class DirectoryWatcher:
    """Poll *root* and emit :class:`ChangeEvent` objects to subscribers.

    Each instance watches one root and shares no state with other
    instances.  Events are delivered synchronously on the watching thread;
    slow subscribers delay the next sample.

    Args:
        root: Directory to watch.
        interval: Seconds between samples.
        lister: Directory listing collaborator.
        include_hidden: Include hidden entries in snapshots.
        detect_moves: Report unambiguous file moves as ``MOVED`` events.
    """

    def __init__(self, root: str, interval: float = 1.0, *,
                 lister: LocalLister | None = None,
                 include_hidden: bool = True,
                 detect_moves: bool = False):
        if interval < 0:
            raise ValueError(f"interval must not be negative, got {interval}")
        self.root = normalize_path(root)
        self.interval = interval
        self.include_hidden = include_hidden
        self.detect_moves = detect_moves
        self._lister = lister or LocalLister()
        self._subscribers: list[Subscriber] = []
        self._state = WatcherState.IDLE
        self._cancel = threading.Event()
        self._thread: threading.Thread | None = None
        self.result: Result | None = None

    @property
    def state(self) -> WatcherState:
        return self._state

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def _emit(self, event: ChangeEvent) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                log.exception("Watcher subscriber failed on %s", event)

    def _sample(self) -> Result[Snapshot]:
        self._state = WatcherState.SAMPLING
        return take_snapshot(self.root, self._lister, include_hidden=self.include_hidden)

    def run(self, cancel: threading.Event | None = None) -> Result:
        """Watch until *cancel* is set; returns Ok on cancellation.

        The wait between samples is the only point where cancellation is
        observed.  A failing snapshot stops the watch and returns its error.
        """
        cancel = cancel or self._cancel
        log.debug("Watching %s every %ss", self.root, self.interval)
        try:
            first = self._sample()
            if not first.is_ok:
                log.warning("Stopped watching %s: %s", self.root, first.message)
                return first
            snapshot = first.value
            while True:
                self._state = WatcherState.WAITING
                if cancel.wait(self.interval):
                    break
                sampled = self._sample()
                if not sampled.is_ok:
                    log.warning("Stopped watching %s: %s", self.root, sampled.message)
                    return sampled
                events = diff_snapshots(snapshot, sampled.value,
                                        detect_moves=self.detect_moves)
                snapshot = sampled.value
                if events:
                    log.debug("%s: %d changes", self.root, len(events))
                for event in events:
                    self._emit(event)
            log.debug("Stopped watching %s", self.root)
            return Result.ok()
        finally:
            self._state = WatcherState.STOPPED

    def start(self) -> threading.Thread:
        """Run the watch loop on a daemon thread; the outcome lands in :attr:`result`."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError(f"Already watching {self.root}")
        self._cancel = threading.Event()

        def target():
            self.result = self.run(self._cancel)

        self._thread = threading.Thread(
            target=target, name=f"filesurf-watch:{self.root}", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: float | None = None) -> Result | None:
        """Cancel a watch started with :meth:`start` and wait for it to end."""
        self._cancel.set()
        if self._thread is not None:
            self._thread.join(timeout)
        return self.result
