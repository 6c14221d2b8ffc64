"""File Focus

Organize files and directories into named groups, independent of the
directory structure, and browse those groups as a tree.
"""

__version__ = "0.1.0"

from .core.group_store import GroupStore
from .core.file_focus import FileFocus
from .domain import FileKind, Group, GroupRepository
from .exceptions import (
    ConfigurationError,
    DuplicateGroupError,
    FileFocusError,
    GroupNotFoundError,
    StorageError,
)
from .models.config import Config
from .tree import (
    CancellationToken,
    DataTransfer,
    GroupNode,
    MoveResult,
    ResourceNode,
    TreeProjector,
)

__all__ = [
    # Core components
    "GroupStore",
    "FileFocus",
    "TreeProjector",
    "Config",

    # Types
    "FileKind",
    "Group",
    "GroupRepository",
    "GroupNode",
    "ResourceNode",
    "MoveResult",
    "DataTransfer",
    "CancellationToken",

    # Errors
    "FileFocusError",
    "ConfigurationError",
    "DuplicateGroupError",
    "GroupNotFoundError",
    "StorageError",
]
