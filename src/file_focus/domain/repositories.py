"""Repository interfaces for groups.

A repository is the persistence sink the group store writes through. Write
failures are the repository's concern: implementations report them on their
own channel and return ``False`` instead of raising.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Group


class GroupRepository(ABC):
    """Repository for Group entities and the pinned group designation."""

    @abstractmethod
    async def load_groups(self) -> List[Group]:
        """Load every persisted group."""
        pass

    @abstractmethod
    async def save_group(self, group: Group) -> bool:
        """Save a group, replacing any previous version."""
        pass

    @abstractmethod
    async def delete_group(self, group_id: str) -> bool:
        """Delete a persisted group."""
        pass

    @abstractmethod
    async def load_pinned_group_id(self) -> Optional[str]:
        """Load the pinned group id, if any."""
        pass

    @abstractmethod
    async def save_pinned_group_id(self, group_id: Optional[str]) -> bool:
        """Save (or clear) the pinned group id."""
        pass
