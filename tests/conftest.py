"""Shared fixtures for filesurf tests."""

import os

import pytest
from click.testing import CliRunner
from dulwich import porcelain

from filesurf import LocalFileIO, LocalLister
from filesurf.result import Result

AUTHOR = b"Test User <test@example.com>"


@pytest.fixture
def io():
    return LocalFileIO()


@pytest.fixture
def lister():
    return LocalLister()


@pytest.fixture
def tree(tmp_path):
    """A small tree: a.txt, b.md, sub/c.txt, sub/deeper/d.txt, .hidden."""
    (tmp_path / "a.txt").write_text("aaa")
    (tmp_path / "b.md").write_text("bb")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_text("c")
    (tmp_path / "sub" / "deeper").mkdir()
    (tmp_path / "sub" / "deeper" / "d.txt").write_text("dddd")
    (tmp_path / ".hidden").write_text("h")
    return tmp_path


# ---------------------------------------------------------------------------
# Git fixtures
# ---------------------------------------------------------------------------

def commit_all(repo_path, message=b"commit"):
    porcelain.add(repo_path, paths=[
        os.path.join(dirpath, name)
        for dirpath, dirnames, filenames in os.walk(repo_path)
        if ".git" not in dirpath.split(os.sep)
        for name in filenames
    ])
    return porcelain.commit(repo_path, message=message, author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def commit():
    """Stage every file of a working tree and commit it."""
    return commit_all


@pytest.fixture
def git_repo(tmp_path):
    """Working-tree repo with one commit: README.md, src/app.py, src/pkg/mod.py."""
    root = tmp_path / "repo"
    root.mkdir()
    porcelain.init(str(root)).close()
    (root / "README.md").write_text("readme\n")
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "app.py").write_text("print('app')\n")
    (root / "src" / "pkg" / "mod.py").write_text("x = 1\n")
    commit_all(str(root), b"initial")
    return root


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeTrash:
    """In-memory trash: moves entries into a private directory."""

    def __init__(self, store):
        self.store = store
        self.calls = []

    def _stash(self, path):
        self.calls.append(("trash", path))
        if not os.path.lexists(path):
            return Result.error(f'Could not find "{path}"')
        os.rename(path, os.path.join(self.store, path.replace(os.sep, "_")))
        return Result.ok()

    def _restore(self, path):
        self.calls.append(("restore", path))
        stashed = os.path.join(self.store, path.replace(os.sep, "_"))
        if not os.path.lexists(stashed):
            return Result.error(f'Could not find "{path}" in trash.')
        os.rename(stashed, path)
        return Result.ok()

    move_file_to_trash = move_dir_to_trash = _stash
    restore_file = restore_dir = _restore


@pytest.fixture
def fake_trash(tmp_path_factory):
    return FakeTrash(str(tmp_path_factory.mktemp("trash")))


@pytest.fixture
def runner():
    return CliRunner()
