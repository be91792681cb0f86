"""filesurf CLI: undoable file commands, directory watching and git status."""

from ._helpers import main  # noqa: F401

# Import command modules to register Click commands with the main group.
from . import _ops, _watch, _vcs  # noqa: F401
