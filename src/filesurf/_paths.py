"""Path helpers for local filesystem entries.

Names and paths compare the way the host filesystem compares them:
case-insensitively on Windows and case-sensitively everywhere else.
"""

from __future__ import annotations

import os

CASE_INSENSITIVE = os.name == "nt"

_SEPARATORS = "/\\" if os.name == "nt" else "/"


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Return *path* as an absolute path with no redundant or trailing separators.

    Root paths keep their separator (``/``, ``C:\\``).
    """
    text = os.fspath(path)
    if not text or text.isspace():
        return text
    return os.path.normpath(os.path.abspath(text))


def combine(base: str, name: str) -> str:
    """Join *name* onto *base*, ignoring separators around *name*."""
    return os.path.join(base, name.strip(_SEPARATORS))


def parent_dir(path: str) -> str | None:
    """Return the parent directory of *path*, or ``None`` when *path* is a root."""
    path = normalize_path(path)
    parent = os.path.dirname(path)
    if not parent or parent == path:
        return None
    return parent


def file_name(path: str) -> str:
    """Return the last segment of *path* (trailing separators are ignored)."""
    return os.path.basename(path.rstrip(_SEPARATORS)) or path


def split_name(name: str) -> tuple[str, str]:
    """Split *name* into ``(stem, extension)``; the extension keeps its dot."""
    return os.path.splitext(name)


def names_equal(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    if CASE_INSENSITIVE:
        return a.casefold() == b.casefold()
    return a == b


def path_key(path: str) -> str:
    """Key under which *path* is stored in path-indexed maps."""
    key = os.path.normcase(normalize_path(path))
    return key.casefold() if CASE_INSENSITIVE else key


def paths_equal(a: str | None, b: str | None) -> bool:
    if a is None or b is None:
        return False
    return path_key(a) == path_key(b)


def is_within(path: str, root: str) -> bool:
    """True when *path* is *root* itself or lies somewhere below it."""
    path_k = path_key(path)
    root_k = path_key(root)
    if path_k == root_k:
        return True
    prefix = root_k if root_k.endswith(os.sep) else root_k + os.sep
    return path_k.startswith(prefix)
