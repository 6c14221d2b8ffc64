"""In-memory repository for groups.

Keeps serialized copies so callers can't mutate persisted state by holding on
to a Group, and records every save for inspection.
"""

from typing import Any, Dict, List, Optional

from ...domain.entities import Group
from ...domain.repositories import GroupRepository


class InMemoryGroupRepository(GroupRepository):
    """Dict-backed GroupRepository for ephemeral sessions."""

    def __init__(self, groups: Optional[List[Group]] = None, pinned_group_id: Optional[str] = None):
        self._groups: Dict[str, Dict[str, Any]] = {
            group.id: group.to_dict() for group in (groups or [])
        }
        self._pinned_group_id = pinned_group_id
        self.saved_group_ids: List[str] = []

    async def load_groups(self) -> List[Group]:
        return [Group.from_dict(data) for data in self._groups.values()]

    async def save_group(self, group: Group) -> bool:
        self._groups[group.id] = group.to_dict()
        self.saved_group_ids.append(group.id)
        return True

    async def delete_group(self, group_id: str) -> bool:
        self._groups.pop(group_id, None)
        if self._pinned_group_id == group_id:
            self._pinned_group_id = None
        return True

    async def load_pinned_group_id(self) -> Optional[str]:
        return self._pinned_group_id

    async def save_pinned_group_id(self, group_id: Optional[str]) -> bool:
        self._pinned_group_id = group_id
        return True

    def stored(self, group_id: str) -> Optional[Dict[str, Any]]:
        """Serialized form of a persisted group."""
        return self._groups.get(group_id)
