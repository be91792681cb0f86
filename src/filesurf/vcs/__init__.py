"""Version-control status tracking."""

from ._client import DulwichClient, StatusEntry
from ._tracker import (
    MISSING_REPO_MESSAGE,
    REPO_MARKER,
    StatusTracker,
    VcsStatus,
    classify,
    find_repository_root,
    validate_commit_message,
)

__all__ = [
    "DulwichClient",
    "StatusEntry",
    "StatusTracker",
    "VcsStatus",
    "REPO_MARKER",
    "MISSING_REPO_MESSAGE",
    "classify",
    "find_repository_root",
    "validate_commit_message",
]
