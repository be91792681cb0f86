"""Tests for UndoRedoHistory."""

import pytest

from filesurf import NewFileAt, Result, UndoableOperation, UndoRedoHistory


class Counter(UndoableOperation):
    """Operation that counts calls and can be told to fail."""

    def __init__(self, name, fail_invoke=False, fail_undo=False):
        self.name = name
        self.fail_invoke = fail_invoke
        self.fail_undo = fail_undo
        self.invoked = 0
        self.undone = 0

    def invoke(self):
        self.invoked += 1
        return Result.error("invoke failed") if self.fail_invoke else Result.ok()

    def undo(self):
        self.undone += 1
        return Result.error("undo failed") if self.fail_undo else Result.ok()


class TestUndoRedo:
    def test_empty(self):
        h = UndoRedoHistory()
        assert h.undo() is None
        assert h.redo() is None
        assert not h.can_undo
        assert not h.can_redo

    def test_execute_records_success(self):
        h = UndoRedoHistory()
        op = Counter("a")
        assert h.execute(op).is_ok
        assert h.undo_target is op
        assert len(h) == 1

    def test_execute_skips_failure(self):
        h = UndoRedoHistory()
        assert not h.execute(Counter("a", fail_invoke=True)).is_ok
        assert len(h) == 0

    def test_undo_then_redo(self):
        h = UndoRedoHistory()
        a, b = Counter("a"), Counter("b")
        h.execute(a)
        h.execute(b)
        assert h.undo().is_ok
        assert b.undone == 1
        assert h.redo_target is b
        assert h.redo().is_ok
        assert b.invoked == 2
        assert not h.can_redo

    def test_record_drops_redo_tail(self):
        h = UndoRedoHistory()
        a, b, c = Counter("a"), Counter("b"), Counter("c")
        h.record(a)
        h.record(b)
        h.undo()
        h.record(c)
        assert not h.can_redo
        assert h.undo_target is c
        h.undo()
        assert h.undo_target is a

    def test_failed_undo_drops_operation(self):
        h = UndoRedoHistory()
        a, b = Counter("a"), Counter("b", fail_undo=True)
        h.record(a)
        h.record(b)
        assert not h.undo().is_ok
        assert len(h) == 1
        assert not h.can_redo
        assert h.undo_target is a

    def test_failed_redo_drops_operation(self):
        h = UndoRedoHistory()
        a = Counter("a")
        h.record(a)
        h.undo()
        a.fail_invoke = True
        assert not h.redo().is_ok
        assert len(h) == 0

    def test_limit_evicts_oldest(self):
        h = UndoRedoHistory(limit=2)
        ops = [Counter(str(i)) for i in range(3)]
        for op in ops:
            h.record(op)
        assert len(h) == 2
        h.undo()
        h.undo()
        assert h.undo() is None
        assert ops[0].undone == 0

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            UndoRedoHistory(limit=0)

    def test_on_change(self):
        calls = []
        h = UndoRedoHistory(on_change=lambda: calls.append(1))
        h.record(Counter("a"))
        h.undo()
        h.clear()
        assert len(calls) == 3

    def test_with_real_operation(self, io, tmp_path):
        h = UndoRedoHistory()
        assert h.execute(NewFileAt(io, str(tmp_path), "f.txt")).is_ok
        assert h.undo().is_ok
        assert not (tmp_path / "f.txt").exists()
        assert h.redo().is_ok
        assert (tmp_path / "f.txt").exists()
