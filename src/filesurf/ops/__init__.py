"""Undoable filesystem operations."""

from ._base import BatchOperation, UndoableOperation
from ._batch import CopyTo, DuplicateFiles, MoveTo, MoveToTrash, RenameMultiple
from ._flatten import FlattenFolder
from ._single import NewDirAt, NewFileAt, RenameOne

__all__ = [
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
]
