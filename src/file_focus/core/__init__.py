"""Core grouping engine."""

from .group_store import GroupStore
from .file_focus import FileFocus

__all__ = ["GroupStore", "FileFocus"]
