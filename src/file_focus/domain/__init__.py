"""
Domain Layer - File Focus

Groups, resource identifiers and the repository contract used to persist them.
"""

from .entities import Group
from .repositories import GroupRepository
from .value_objects import (
    FileKind,
    location_hint,
    normalize_resource_id,
    resource_basename,
    resource_uri,
)

__all__ = [
    "Group",
    "GroupRepository",
    "FileKind",
    "location_hint",
    "normalize_resource_id",
    "resource_basename",
    "resource_uri",
]
