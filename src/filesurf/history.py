"""Linear undo/redo history of invoked operations."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .ops import UndoableOperation
from .result import Result

log = logging.getLogger(__name__)


class UndoRedoHistory:
    """Undo/redo stack over :class:`~filesurf.ops.UndoableOperation` objects.

    Operations before the cursor can be undone; operations at or after it can
    be redone.  Recording a new operation discards the redo tail.  An
    operation whose undo or redo fails is dropped from the history, since its
    captured state no longer matches the disk.

    Args:
        limit: Maximum number of operations kept; the oldest are evicted
            first.  ``None`` keeps everything.
        on_change: Called with no arguments whenever the history changes.
    """

    def __init__(self, limit: int | None = None,
                 on_change: Callable[[], None] | None = None):
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        self._ops: list[UndoableOperation] = []
        self._cursor = 0
        self._limit = limit
        self._on_change = on_change

    def __len__(self) -> int:
        return len(self._ops)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._ops)

    @property
    def undo_target(self) -> UndoableOperation | None:
        return self._ops[self._cursor - 1] if self.can_undo else None

    @property
    def redo_target(self) -> UndoableOperation | None:
        return self._ops[self._cursor] if self.can_redo else None

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def record(self, op: UndoableOperation) -> None:
        """Push an already-invoked *op*, discarding anything that could be redone."""
        del self._ops[self._cursor:]
        self._ops.append(op)
        if self._limit is not None and len(self._ops) > self._limit:
            del self._ops[: len(self._ops) - self._limit]
        self._cursor = len(self._ops)
        self._changed()

    def execute(self, op: UndoableOperation) -> Result:
        """Invoke *op* and record it when it succeeds."""
        result = op.invoke()
        if result.is_ok:
            self.record(op)
        else:
            log.debug("Not recording failed %r", op)
        return result

    def undo(self) -> Result | None:
        """Undo the operation before the cursor; None when there is nothing to undo."""
        if not self.can_undo:
            return None
        self._cursor -= 1
        op = self._ops[self._cursor]
        result = op.undo()
        if not result.is_ok:
            log.warning("Undo of %r failed, dropping it: %s", op, result.message)
            del self._ops[self._cursor]
        self._changed()
        return result

    def redo(self) -> Result | None:
        """Re-invoke the operation at the cursor; None when there is nothing to redo."""
        if not self.can_redo:
            return None
        op = self._ops[self._cursor]
        result = op.invoke()
        if result.is_ok:
            self._cursor += 1
        else:
            log.warning("Redo of %r failed, dropping it: %s", op, result.message)
            del self._ops[self._cursor]
        self._changed()
        return result

    def clear(self) -> None:
        self._ops.clear()
        self._cursor = 0
        self._changed()
