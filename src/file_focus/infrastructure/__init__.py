"""
Infrastructure Layer

Filesystem access and persistence behind the domain's interfaces.
"""

from .adapters import FilesystemAdapter, ResourceProvider
from .repositories import InMemoryGroupRepository, JsonGroupRepository

__all__ = [
    "FilesystemAdapter",
    "ResourceProvider",
    "InMemoryGroupRepository",
    "JsonGroupRepository",
]
