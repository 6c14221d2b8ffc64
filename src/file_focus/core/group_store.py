"""
Group Store - in-memory collection of groups for one workspace root.

The store is constructed once per root and mutated in place for the life of
the process. All reads and writes go through its methods; mutations are
synchronous and never touch disk. Persistence is explicit: callers decide
which groups to write and hand them to :meth:`GroupStore.persist`, which
delegates to the repository.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..domain.entities import Group
from ..domain.repositories import GroupRepository

logger = logging.getLogger(__name__)


class GroupStore:
    """Owns the groups of a workspace and the single pinned group id."""

    def __init__(self, repository: GroupRepository):
        self._repository = repository
        self._groups: Dict[str, Group] = {}
        self._pinned_group_id: Optional[str] = None
        self._dirty: Set[str] = set()

    async def load(self) -> None:
        """Replace in-memory state with what the repository holds."""
        groups = await self._repository.load_groups()
        self._groups = {group.id: group for group in groups}
        pinned = await self._repository.load_pinned_group_id()
        self._pinned_group_id = pinned if pinned in self._groups else None
        self._dirty.clear()
        logger.info(f"Loaded {len(self._groups)} groups")

    # Lookup

    def lookup(self, group_id: str) -> Optional[Group]:
        return self._groups.get(group_id)

    def all_groups(self) -> List[Tuple[str, Group]]:
        """All (id, group) pairs. Order is unspecified; callers sort for display."""
        return list(self._groups.items())

    def __contains__(self, group_id: str) -> bool:
        return group_id in self._groups

    def __len__(self) -> int:
        return len(self._groups)

    # Resource membership

    def add_resource(self, group_id: str, resource_id: str) -> bool:
        """
        Append a resource to a group.

        No-op when the group is missing or already lists the resource.

        Returns:
            True if the group changed
        """
        group = self._groups.get(group_id)
        if group is None or not group.add_resource(resource_id):
            return False
        self._dirty.add(group_id)
        return True

    def remove_resource(self, group_id: str, resource_id: str) -> bool:
        """Remove a resource from a group. No-op when absent."""
        group = self._groups.get(group_id)
        if group is None or not group.remove_resource(resource_id):
            return False
        self._dirty.add(group_id)
        return True

    # Group lifecycle

    def create_group(self, name: str, resources: Iterable[str] = ()) -> Group:
        """Create a group with a fresh id."""
        group = Group(name=name, resources=list(resources))
        self._groups[group.id] = group
        self._dirty.add(group.id)
        logger.info(f"Created group '{name}' ({group.id})")
        return group

    def rename_group(self, group_id: str, name: str) -> bool:
        group = self._groups.get(group_id)
        if group is None:
            return False
        group.rename(name)
        self._dirty.add(group_id)
        return True

    def delete_group(self, group_id: str) -> Optional[Group]:
        """
        Remove a group, un-pinning it if it was the pinned one.

        Returns:
            The removed group, or None if there was no such group
        """
        group = self._groups.pop(group_id, None)
        if group is None:
            return None
        self._dirty.discard(group_id)
        if self._pinned_group_id == group_id:
            self._pinned_group_id = None
        logger.info(f"Deleted group '{group.name}' ({group_id})")
        return group

    # Pinning

    @property
    def pinned_group_id(self) -> Optional[str]:
        return self._pinned_group_id

    def mark_pinned(self, group_id: Optional[str]) -> None:
        """Pin a group, replacing any previous pin. ``None`` clears the pin."""
        self._pinned_group_id = group_id

    def is_pinned(self, group_id: str) -> bool:
        return group_id is not None and group_id == self._pinned_group_id

    # Persistence

    @property
    def dirty_group_ids(self) -> Set[str]:
        """Groups mutated since they were last persisted."""
        return set(self._dirty)

    async def persist(self, group: Group) -> bool:
        """Write one group through the repository and clear its dirty flag."""
        self._dirty.discard(group.id)
        return await self._repository.save_group(group)

    async def persist_dirty(self) -> List[str]:
        """Persist every dirty group still present. Returns the ids written."""
        written = []
        for group_id in sorted(self._dirty):
            group = self._groups.get(group_id)
            if group is not None:
                await self.persist(group)
                written.append(group_id)
        self._dirty.clear()
        return written

    async def persist_removal(self, group_id: str) -> bool:
        return await self._repository.delete_group(group_id)

    async def persist_pinned(self) -> bool:
        return await self._repository.save_pinned_group_id(self._pinned_group_id)
