"""filesurf: undoable file operations, polling change detection and git status tracking."""

from .entries import EntryKind, FileSystemEntry
from .fileio import LocalFileIO
from .history import UndoRedoHistory
from .listing import EntryInfo, LocalLister
from .naming import (
    can_be_renamed_collectively,
    get_available_name,
    get_available_names,
    get_copy_name,
    get_copy_names,
    get_name_multiple_dirs,
    is_valid_name,
)
from .ops import (
    BatchOperation,
    CopyTo,
    DuplicateFiles,
    FlattenFolder,
    MoveTo,
    MoveToTrash,
    NewDirAt,
    NewFileAt,
    RenameMultiple,
    RenameOne,
    UndoableOperation,
)
from .result import Result
from .trash import SystemTrash
from .vcs import DulwichClient, StatusEntry, StatusTracker, VcsStatus, find_repository_root
from .watcher import (
    ChangeEvent,
    ChangeKind,
    DirectoryWatcher,
    EntryMeta,
    WatcherState,
    diff_snapshots,
    take_snapshot,
)

__all__ = [
    # Result model
    "Result",
    # Entries
    "EntryKind",
    "FileSystemEntry",
    # Naming
    "is_valid_name",
    "get_available_name",
    "get_name_multiple_dirs",
    "get_copy_name",
    "get_copy_names",
    "get_available_names",
    "can_be_renamed_collectively",
    # Collaborators
    "LocalFileIO",
    "LocalLister",
    "EntryInfo",
    "SystemTrash",
    # Operations
    "UndoableOperation",
    "BatchOperation",
    "MoveToTrash",
    "MoveTo",
    "CopyTo",
    "DuplicateFiles",
    "RenameMultiple",
    "RenameOne",
    "NewFileAt",
    "NewDirAt",
    "FlattenFolder",
    "UndoRedoHistory",
    # Watcher
    "ChangeKind",
    "ChangeEvent",
    "EntryMeta",
    "WatcherState",
    "DirectoryWatcher",
    "take_snapshot",
    "diff_snapshots",
    # Version control
    "DulwichClient",
    "StatusEntry",
    "StatusTracker",
    "VcsStatus",
    "find_repository_root",
]
