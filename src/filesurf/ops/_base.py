"""Undoable operation interface and the shared per-entry batch driver."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..entries import FileSystemEntry
from ..result import Result

log = logging.getLogger("filesurf.ops")


class UndoableOperation(ABC):
    """A reversible, user-initiated filesystem action.

    ``invoke()`` applies the action and ``undo()`` reverses it; both return a
    :class:`~filesurf.result.Result`.  Operations may be invoked and undone
    repeatedly as long as the state they captured is still valid.
    """

    @abstractmethod
    def invoke(self) -> Result:
        """Apply the action."""

    @abstractmethod
    def undo(self) -> Result:
        """Reverse the action."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BatchOperation(UndoableOperation):
    """An operation applied entry by entry over a fixed, ordered entry list.

    Subclasses implement :meth:`invoke_action` and :meth:`undo_action`; the
    driver runs them for every entry in order, never stopping at a failure,
    and returns Ok only when every entry succeeded.  A failed batch returns a
    summary naming every failed entry followed by one ``"<path>: <detail>"``
    message per failure.
    """

    #: verbs used in the failure summary, e.g. "Could not move 2 of 5 entries"
    verb = "process"
    undo_verb = "restore"

    def __init__(self, entries: Sequence[FileSystemEntry]):
        self.entries: tuple[FileSystemEntry, ...] = tuple(entries)

    @abstractmethod
    def invoke_action(self, entry: FileSystemEntry, index: int) -> Result:
        """Apply the action to the entry at *index*."""

    @abstractmethod
    def undo_action(self, entry: FileSystemEntry, index: int) -> Result:
        """Reverse the action for the entry at *index*."""

    def invoke(self) -> Result:
        return self._run(self.invoke_action, self.verb)

    def undo(self) -> Result:
        return self._run(self.undo_action, self.undo_verb)

    def _run(self, action, verb: str) -> Result:
        failed: list[str] = []
        details: list[str] = []
        for index, entry in enumerate(self.entries):
            try:
                result = action(entry, index)
            except OSError as exc:
                result = Result.from_exception(exc)
            if result.is_ok:
                continue
            failed.append(entry.path)
            for message in result.errors:
                log.warning("%s: could not %s %s: %s",
                            type(self).__name__, verb, entry.path, message)
                details.append(f"{entry.path}: {message}")

        log.debug("%s: %s %d entries, %d failed",
                  type(self).__name__, verb, len(self.entries), len(failed))
        if not failed:
            return Result.ok()
        summary = (f"Could not {verb} {len(failed)} of {len(self.entries)} "
                   f"entries: {', '.join(failed)}")
        return Result.error(summary, *details)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.entries)} entries)"
