"""
Domain value objects for File Focus.

Resource identifiers are plain strings holding a normalized absolute path.
The helpers here derive the display pieces (basename, location hint, URI)
from an identifier without touching the filesystem.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union
from urllib.parse import unquote, urlparse


class FileKind(Enum):
    """Resolved filesystem kind of a resource."""
    FILE = "file"
    DIRECTORY = "directory"
    UNKNOWN = "unknown"

    @property
    def is_expandable(self) -> bool:
        return self is FileKind.DIRECTORY


def normalize_resource_id(
    path: Union[str, Path],
    root: Optional[Union[str, Path]] = None
) -> str:
    """
    Normalize a path into a resource identifier.

    ``file://`` URIs are decoded to their path. Relative paths are resolved
    against ``root`` (or the current directory), ``.`` and ``..`` segments are
    collapsed and symlinks are resolved, so the same file always yields the
    same identifier.

    Args:
        path: Absolute or relative path to the resource
        root: Workspace root used for relative paths

    Returns:
        The normalized absolute path as a string
    """
    if isinstance(path, str):
        if path.startswith("file://"):
            path = unquote(urlparse(path).path)
        path = Path(path)

    if not path.is_absolute() and root is not None:
        path = Path(root) / path

    return str(path.expanduser().resolve())


def resource_basename(resource_id: str) -> str:
    """Last path segment of a resource, or the raw identifier if there is none."""
    name = os.path.basename(resource_id.rstrip("/\\"))
    return name or resource_id


def location_hint(resource_id: str) -> str:
    """
    Short hint made of the last two segments of the parent directory.

    ``/a/b/c/file.txt`` gives ``[b/c]``. Used to tell apart root members that
    share a basename.
    """
    parent_segments = Path(resource_id).as_posix().split("/")[:-1][-2:]
    return f"[{'/'.join(parent_segments)}]"


def resource_uri(resource_id: str) -> str:
    """``file://`` URI for a resource; identifiers that aren't absolute pass through."""
    path = Path(resource_id)
    if path.is_absolute():
        return path.as_uri()
    return resource_id
