"""Per-path version-control status with upward propagation."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from enum import Enum

from .._paths import is_within, normalize_path, parent_dir, path_key, paths_equal
from ..result import Result
from ._client import DulwichClient, StatusEntry

log = logging.getLogger("filesurf.vcs")

REPO_MARKER = ".git"
MISSING_REPO_MESSAGE = "No git repository found"


class VcsStatus(str, Enum):
    """Status of a path: ``NOT_VERSION_CONTROLLED``, ``STAGED`` or ``UNSTAGED``."""
    NOT_VERSION_CONTROLLED = "not-version-controlled"
    STAGED = "staged"
    UNSTAGED = "unstaged"

    def __str__(self) -> str:          # noqa: D105
        return self.value


def find_repository_root(path: str) -> str | None:
    """Walk upward from *path* to the nearest directory holding a ``.git`` marker."""
    current: str | None = normalize_path(path)
    while current is not None:
        if os.path.lexists(os.path.join(current, REPO_MARKER)):
            return current
        current = parent_dir(current)
    return None


def classify(entry: StatusEntry) -> VcsStatus:
    """Index-side changes win over working-tree changes."""
    if entry.index_changed:
        return VcsStatus.STAGED
    if entry.worktree_changed:
        return VcsStatus.UNSTAGED
    return VcsStatus.NOT_VERSION_CONTROLLED


def validate_commit_message(message: str) -> bool:
    """Reject blank messages and messages with NUL, ``"`` or control characters other than tab."""
    if not message or message.isspace():
        return False
    for ch in message:
        if ch == "\0" or ch == '"' or (ord(ch) < 0x20 and ch != "\t"):
            return False
    return True


class StatusTracker:
    """Track the repository containing a directory and the status of its paths.

    The tracker holds at most one repository binding.  Calling
    :meth:`init_if_version_controlled` with a directory in the same
    repository only refreshes; a directory in another repository releases
    the old binding first.  The status map is rebuilt wholesale on every
    refresh.  Instances are not thread safe.

    Args:
        open_repository: Factory returning a client for a working-tree root;
            defaults to :meth:`DulwichClient.open`.
        author: Default commit author (``"Name <email>"``).
    """

    def __init__(self, open_repository: Callable[[str], DulwichClient] | None = None,
                 author: str | None = None):
        self._open = open_repository or DulwichClient.open
        self.author = author
        self._client: DulwichClient | None = None
        self._root: str | None = None
        self._statuses: dict[str, VcsStatus] = {}

    # -- binding ----------------------------------------------------------

    @property
    def root(self) -> str | None:
        """Working-tree root of the bound repository, or ``None``."""
        return self._root

    @property
    def is_bound(self) -> bool:
        return self._client is not None

    def init_if_version_controlled(self, directory: str) -> bool:
        """Bind the repository containing *directory*; True when one is bound."""
        root = find_repository_root(directory)
        if root is not None and self._client is not None and paths_equal(root, self._root):
            self.refresh()
            return True

        self.close()
        if root is None:
            return False
        try:
            self._client = self._open(root)
        except Exception as exc:
            log.warning("Could not open repository at %s: %s", root, exc)
            return False
        self._root = root
        log.info("Bound repository %s", root)
        self.refresh()
        return True

    def close(self) -> None:
        """Release the bound repository, if any, and clear all statuses."""
        if self._client is not None:
            log.info("Released repository %s", self._root)
            client, self._client = self._client, None
            client.close()
        self._root = None
        self._statuses.clear()

    def __enter__(self) -> StatusTracker:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- status -----------------------------------------------------------

    def refresh(self) -> Result:
        """Rebuild the status map from the repository."""
        self._statuses.clear()
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        res = self._client.status()
        if not res.is_ok:
            log.warning("Status query for %s failed: %s", self._root, res.message)
            return res
        for entry in res.value:
            status = classify(entry)
            self._statuses[path_key(entry.path)] = status
            if status is not VcsStatus.NOT_VERSION_CONTROLLED:
                self._propagate(entry.path, status)
        return Result.ok()

    def _propagate(self, path: str, status: VcsStatus) -> None:
        parent = parent_dir(path)
        while (parent is not None and is_within(parent, self._root)
               and not paths_equal(parent, self._root)):
            key = path_key(parent)
            if status is VcsStatus.UNSTAGED:
                self._statuses[key] = VcsStatus.UNSTAGED
            elif self._statuses.get(key) is not VcsStatus.UNSTAGED:
                self._statuses[key] = VcsStatus.STAGED
            parent = parent_dir(parent)

    def get_status(self, path: str) -> VcsStatus:
        if self._client is None:
            return VcsStatus.NOT_VERSION_CONTROLLED
        return self._statuses.get(path_key(path), VcsStatus.NOT_VERSION_CONTROLLED)

    def statuses(self) -> dict[str, VcsStatus]:
        """Copy of the status map, keyed by normalized path."""
        return dict(self._statuses)

    # -- delegated actions ------------------------------------------------

    def _refreshed(self, res: Result) -> Result:
        if res.is_ok:
            self.refresh()
        return res

    def stage(self, *paths: str) -> Result:
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        return self._refreshed(self._client.stage([normalize_path(p) for p in paths]))

    def unstage(self, *paths: str) -> Result:
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        return self._refreshed(self._client.unstage([normalize_path(p) for p in paths]))

    def commit(self, message: str, author: str | None = None) -> Result[str]:
        """Validate *message* locally, then commit it trimmed."""
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        if not validate_commit_message(message):
            return Result.error(f'Commit message: "{message}" is invalid.')
        return self._refreshed(self._client.commit(message.strip(), author or self.author))

    def push(self, remote: str | None = None) -> Result:
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        return self._client.push(remote)

    def pull(self, remote: str | None = None) -> Result:
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        return self._refreshed(self._client.pull(remote))

    def branches(self) -> list[str]:
        if self._client is None:
            return []
        res = self._client.branches()
        return res.value if res.is_ok else []

    def current_branch(self) -> str:
        if self._client is None:
            return ""
        res = self._client.current_branch()
        return res.value if res.is_ok else ""

    def switch_branch(self, name: str) -> Result:
        if self._client is None:
            return Result.error(MISSING_REPO_MESSAGE)
        return self._refreshed(self._client.switch_branch(name))
