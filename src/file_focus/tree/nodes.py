"""
Display nodes and rendered tree items.

Display nodes are transient: the projector builds fresh ones on every read
and nothing keeps them across a refresh. A node is one of two variants,
told apart by its ``node_type`` tag.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Union

from ..domain.value_objects import FileKind


class NodeType(Enum):
    """Tag distinguishing the display node variants."""
    GROUP = "group"
    RESOURCE = "resource"


@dataclass(frozen=True)
class GroupNode:
    """A group at the root level of the tree. Always expandable."""
    group_id: str
    name: str
    label: str
    is_pinned: bool = False
    node_type: NodeType = field(default=NodeType.GROUP, init=False)

    @property
    def is_expandable(self) -> bool:
        return True


@dataclass(frozen=True)
class ResourceNode:
    """
    A file or directory shown under a group.

    Root members are listed directly in the group; descendants were found by
    listing a directory. ``group_id`` is the group the node was reached from.
    """
    resource_id: str
    kind: FileKind
    is_root_member: bool
    group_id: str
    label: str
    tooltip: str
    description: Optional[str] = None
    node_type: NodeType = field(default=NodeType.RESOURCE, init=False)

    @property
    def is_expandable(self) -> bool:
        return self.kind.is_expandable


DisplayNode = Union[GroupNode, ResourceNode]


class CollapsibleState(Enum):
    NONE = 0
    COLLAPSED = 1
    EXPANDED = 2


class ContextValue:
    GROUP = "GroupItem"
    ROOT_RESOURCE = "FocusRootItem"
    RESOURCE = "FocusItem"


@dataclass(frozen=True)
class TreeCommand:
    """Command the host runs when a tree item is activated."""
    command: str
    title: str
    arguments: List[Any] = field(default_factory=list)


OPEN_COMMAND = "fileFocus.open"


@dataclass(frozen=True)
class TreeItem:
    """What the host needs to draw one row of the tree."""
    label: str
    collapsible_state: CollapsibleState
    context_value: str
    description: Optional[str] = None
    tooltip: Optional[str] = None
    icon: Optional[str] = None
    resource_id: Optional[str] = None
    command: Optional[TreeCommand] = None
