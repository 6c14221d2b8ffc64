"""Tree projection of groups and their resources."""

from .data_transfer import (
    TREE_MIME_TYPE,
    URI_LIST_MIME_TYPE,
    CancellationToken,
    DataTransfer,
    DataTransferItem,
)
from .nodes import (
    CollapsibleState,
    ContextValue,
    DisplayNode,
    GroupNode,
    NodeType,
    ResourceNode,
    TreeCommand,
    TreeItem,
)
from .projector import MoveResult, TreeProjector, is_draggable_selection

__all__ = [
    "TREE_MIME_TYPE",
    "URI_LIST_MIME_TYPE",
    "CancellationToken",
    "DataTransfer",
    "DataTransferItem",
    "CollapsibleState",
    "ContextValue",
    "DisplayNode",
    "GroupNode",
    "NodeType",
    "ResourceNode",
    "TreeCommand",
    "TreeItem",
    "MoveResult",
    "TreeProjector",
    "is_draggable_selection",
]
