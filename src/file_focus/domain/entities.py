"""Group entity.

A Group is a user-named, ordered collection of resource identifiers that is
independent of where those resources live on disk.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from uuid import uuid4


@dataclass(kw_only=True)
class Group:
    """
    Represents a named group of resources.

    The resource sequence keeps insertion order and never holds the same
    identifier twice. The same resource may appear in any number of groups.
    """

    # Entity ID
    id: str = field(default_factory=lambda: str(uuid4()))

    name: str
    resources: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Collapse duplicates from hand-edited storage, keeping first occurrence
        self.resources = list(dict.fromkeys(self.resources))

    def contains(self, resource_id: str) -> bool:
        """Check if the group lists a resource."""
        return resource_id in self.resources

    def add_resource(self, resource_id: str) -> bool:
        """Append a resource unless it is already listed.

        Returns:
            True if the resource was added
        """
        if resource_id in self.resources:
            return False
        self.resources.append(resource_id)
        return True

    def remove_resource(self, resource_id: str) -> bool:
        """Remove a resource if listed.

        Returns:
            True if the resource was removed
        """
        if resource_id not in self.resources:
            return False
        self.resources.remove(resource_id)
        return True

    def rename(self, name: str) -> None:
        """Change the display name."""
        self.name = name

    def to_dict(self) -> Dict[str, Any]:
        """Convert group to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "resources": list(self.resources),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Rebuild a group from its serialized form."""
        return cls(
            id=data["id"],
            name=data["name"],
            resources=list(data.get("resources", [])),
        )

    def __len__(self) -> int:
        return len(self.resources)
