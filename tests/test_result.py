"""Tests for the Result model."""

from filesurf import Result


class TestConstruction:
    def test_ok_without_value(self):
        r = Result.ok()
        assert r.is_ok
        assert r.value is None
        assert r.errors == []

    def test_ok_with_value(self):
        r = Result.ok(42)
        assert r.is_ok
        assert r.value == 42

    def test_error_messages(self):
        r = Result.error("one", "two")
        assert not r.is_ok
        assert r.errors == ["one", "two"]
        assert r.message == "one\ntwo"

    def test_error_without_message_still_fails(self):
        r = Result.error()
        assert not r.is_ok
        assert r.errors == ["Operation failed"]

    def test_from_exception(self):
        r = Result.from_exception(FileNotFoundError(2, "No such file", "/x"))
        assert not r.is_ok
        assert "No such file" in r.message

    def test_from_exception_without_text(self):
        r = Result.from_exception(RuntimeError())
        assert r.errors == ["RuntimeError"]


class TestMerge:
    def test_merge_concatenates(self):
        a = Result.error("a")
        b = Result.error("b")
        assert a.merge(b) is a
        assert a.errors == ["a", "b"]

    def test_ok_stays_ok(self):
        r = Result.ok().merge(Result.ok())
        assert r.is_ok

    def test_error_wins(self):
        r = Result.ok().merge(Result.error("bad"))
        assert not r.is_ok
        assert r.errors == ["bad"]

    def test_merge_is_associative(self):
        left = Result.error("a").merge(Result.error("b")).merge(Result.error("c"))
        right = Result.error("a").merge(Result.error("b").merge(Result.error("c")))
        assert left.errors == right.errors

    def test_combine(self):
        r = Result.combine([Result.ok(), Result.error("x"), Result.error("y")])
        assert r.errors == ["x", "y"]

    def test_combine_empty(self):
        assert Result.combine([]).is_ok


class TestRepr:
    def test_repr(self):
        assert repr(Result.ok()) == "Result.ok()"
        assert repr(Result.ok(1)) == "Result.ok(1)"
        assert repr(Result.error("bad")) == "Result.error('bad')"
