"""Repository client backed by dulwich.

Every method returns a :class:`~filesurf.result.Result`; exceptions raised
by dulwich (or the filesystem beneath it) are converted at this boundary.
"""

from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass

from dulwich import porcelain
from dulwich.repo import Repo as _DRepo

from ..result import Result

log = logging.getLogger("filesurf.vcs")


@dataclass(frozen=True)
class StatusEntry:
    """One changed path reported by the repository.

    Attributes:
        path: Absolute path of the changed file.
        index_changed: The index differs from HEAD for this path.
        worktree_changed: The working tree differs from the index
            (untracked files count as working-tree changes).
    """
    path: str
    index_changed: bool
    worktree_changed: bool


def _decode(path: bytes | str) -> str:
    if isinstance(path, bytes):
        return os.fsdecode(path)
    return path


def _text(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    return value


def _unstage(repo, rel_paths: list[str]) -> None:
    # dulwich moved unstage from Repo onto its worktree
    get_worktree = getattr(repo, "get_worktree", None)
    target = get_worktree() if get_worktree is not None else repo
    target.unstage(rel_paths)


def _call(fn, *args, **kwargs) -> Result:
    try:
        return Result.ok(fn(*args, **kwargs))
    except Exception as exc:
        log.warning("git: %s failed: %s", getattr(fn, "__name__", fn), exc)
        return Result.from_exception(exc)


class DulwichClient:
    """Thin, Result-returning wrapper around one dulwich repository.

    Use :meth:`open` to bind a working tree and :meth:`close` to release
    the underlying handles.
    """

    def __init__(self, repo: _DRepo):
        self._repo = repo
        self._closed = False

    @classmethod
    def open(cls, root: str) -> DulwichClient:
        """Open the repository whose working tree is *root*."""
        return cls(_DRepo(root))

    @property
    def root(self) -> str:
        return os.path.abspath(self._repo.path)

    # -- status -----------------------------------------------------------

    def status(self) -> Result[list[StatusEntry]]:
        """Changed paths, including untracked files and excluding ignored ones."""
        res = _call(porcelain.status, self._repo, untracked_files="all")
        if not res.is_ok:
            return res
        st = res.value
        flags: dict[str, list[bool]] = {}

        def mark(path, slot):
            rel = _decode(path).replace("/", os.sep)
            flags.setdefault(rel, [False, False])[slot] = True

        for paths in st.staged.values():
            for path in paths:
                mark(path, 0)
        for path in st.unstaged:
            mark(path, 1)
        for path in st.untracked:
            mark(path, 1)

        root = self.root
        return Result.ok([
            StatusEntry(os.path.join(root, rel), index, worktree)
            for rel, (index, worktree) in sorted(flags.items())
        ])

    # -- index ------------------------------------------------------------

    def _index_paths(self, rel: str) -> list[str]:
        """Index entries equal to *rel* or below it (as tree paths)."""
        tree_path = rel.replace(os.sep, "/").encode()
        prefix = tree_path.rstrip(b"/") + b"/"
        index = self._repo.open_index()
        return [os.fsdecode(p) for p in index
                if p == tree_path or p.startswith(prefix) or not tree_path]

    def stage(self, paths: list[str]) -> Result:
        """Add *paths* to the index; missing paths are staged as deletions."""
        present = [p for p in paths if os.path.lexists(p)]
        missing = [p for p in paths if not os.path.lexists(p)]
        result = Result.ok()
        if present:
            result.merge(_call(porcelain.add, self._repo, paths=present))
        for path in missing:
            rel = os.path.relpath(path, self.root)
            tracked = [os.path.join(self.root, p) for p in self._index_paths(rel)]
            if not tracked:
                result.merge(Result.error(f'"{path}" did not match any files'))
                continue
            result.merge(_call(porcelain.remove, self._repo, paths=tracked, cached=True))
        return result

    def unstage(self, paths: list[str]) -> Result:
        """Reset the index entries for *paths* (directories expand) to HEAD."""
        rel_paths: list[str] = []
        for path in paths:
            rel = os.path.relpath(path, self.root)
            if rel == os.curdir:
                rel = ""
            if os.path.isdir(path):
                found = self._index_paths(rel)
                rel_paths.extend(found)
                continue
            rel_paths.append(rel.replace(os.sep, "/"))
        if not rel_paths:
            return Result.ok()
        return _call(_unstage, self._repo, rel_paths)

    # -- history ----------------------------------------------------------

    def commit(self, message: str, author: str | None = None) -> Result[str]:
        """Commit the index; the value is the new commit's hex SHA."""
        kwargs = {}
        if author:
            kwargs["author"] = author.encode()
            kwargs["committer"] = author.encode()
        res = _call(porcelain.commit, self._repo, message=message.encode(), **kwargs)
        if res.is_ok:
            res.value = _text(res.value)
        return res

    def push(self, remote: str | None = None) -> Result:
        kwargs = {"remote_location": remote} if remote else {}
        return self._transfer(porcelain.push, kwargs)

    def pull(self, remote: str | None = None) -> Result:
        kwargs = {"remote_location": remote} if remote else {}
        return self._transfer(porcelain.pull, kwargs)

    def _transfer(self, fn, kwargs) -> Result:
        err = io.BytesIO()
        res = _call(fn, self._repo, outstream=io.BytesIO(), errstream=err, **kwargs)
        if not res.is_ok:
            detail = err.getvalue().decode("utf-8", "replace").strip()
            if detail:
                res.errors.append(detail)
        res.value = None
        return res

    # -- branches ---------------------------------------------------------

    def branches(self) -> Result[list[str]]:
        res = _call(porcelain.branch_list, self._repo)
        if res.is_ok:
            res.value = sorted(_text(name) for name in res.value)
        return res

    def current_branch(self) -> Result[str]:
        res = _call(porcelain.active_branch, self._repo)
        if res.is_ok:
            res.value = _text(res.value)
        return res

    def switch_branch(self, name: str) -> Result:
        # dulwich renamed checkout_branch to checkout
        checkout = getattr(porcelain, "checkout", None) or porcelain.checkout_branch
        res = _call(checkout, self._repo, name)
        res.value = None
        return res

    # -- lifecycle --------------------------------------------------------

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            self._repo.close()

    def __repr__(self) -> str:
        return f"DulwichClient({self.root!r})"
