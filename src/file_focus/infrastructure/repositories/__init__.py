"""Repository implementations for persisting groups."""

from .json_repository import JsonGroupRepository, GROUPS_SCHEMA, validate_document
from .memory_repository import InMemoryGroupRepository

__all__ = [
    "JsonGroupRepository",
    "InMemoryGroupRepository",
    "GROUPS_SCHEMA",
    "validate_document",
]
