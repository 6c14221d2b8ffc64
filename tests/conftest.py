"""Shared fixtures for file focus tests."""

from typing import Dict, List, Tuple

import pytest

from file_focus.core.group_store import GroupStore
from file_focus.domain.value_objects import FileKind
from file_focus.events.event_bus import EventBus
from file_focus.infrastructure.adapters.filesystem_adapter import ResourceProvider
from file_focus.infrastructure.repositories.memory_repository import InMemoryGroupRepository
from file_focus.tree.projector import TreeProjector


class FakeResourceProvider(ResourceProvider):
    """
    Resource provider backed by dictionaries.

    Paths missing from ``kinds`` fail to stat; directories missing from
    ``listings`` fail to list.
    """

    def __init__(self):
        self.kinds: Dict[str, FileKind] = {}
        self.listings: Dict[str, List[Tuple[str, FileKind]]] = {}
        self.stat_calls: List[str] = []
        self.list_calls: List[str] = []
        self.closed = False

    async def stat(self, resource_id: str) -> FileKind:
        self.stat_calls.append(resource_id)
        if resource_id not in self.kinds:
            raise FileNotFoundError(resource_id)
        return self.kinds[resource_id]

    async def list_directory(self, directory_id: str) -> List[Tuple[str, FileKind]]:
        self.list_calls.append(directory_id)
        if directory_id not in self.listings:
            raise PermissionError(directory_id)
        return list(self.listings[directory_id])

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def provider():
    return FakeResourceProvider()


@pytest.fixture
def repository():
    return InMemoryGroupRepository()


@pytest.fixture
def store(repository):
    return GroupStore(repository)


@pytest.fixture
def event_bus():
    bus = EventBus()
    yield bus
    bus.clear()


@pytest.fixture
def projector(store, provider, event_bus):
    return TreeProjector(store, provider, event_bus=event_bus)


@pytest.fixture
def tree_events(projector):
    """Every tree change notification fired by the projector."""
    events = []
    projector.on_did_change_tree_data(events.append)
    return events
