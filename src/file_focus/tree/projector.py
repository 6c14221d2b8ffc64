"""
Tree Projector - projects the group store and the filesystem into a tree.

The tree has three levels of behaviour:

* root: one node per group, sorted case-insensitively by name
* group: one node per member resource, sorted case-insensitively by basename
* directory: one node per entry, in the order the filesystem lists them

Nodes are built lazily on each read. The projector also implements the
drag-and-drop protocol that moves root member resources between groups.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Set, Tuple

from ..core.group_store import GroupStore
from ..domain.value_objects import (
    FileKind,
    location_hint,
    resource_basename,
    resource_uri,
)
from ..events.domain_events import TreeChanged
from ..events.event_bus import EventBus
from ..infrastructure.adapters.filesystem_adapter import ResourceProvider
from .data_transfer import (
    TREE_MIME_TYPE,
    URI_LIST_MIME_TYPE,
    CancellationToken,
    DataTransfer,
    DataTransferItem,
    is_cancelled,
)
from .nodes import (
    OPEN_COMMAND,
    CollapsibleState,
    ContextValue,
    DisplayNode,
    GroupNode,
    NodeType,
    ResourceNode,
    TreeCommand,
    TreeItem,
)

logger = logging.getLogger(__name__)

DEFAULT_FAVOURITE_GLYPH = "⭐"


@dataclass
class MoveResult:
    """Outcome of a drop."""
    target_group_id: Optional[str] = None
    moved: List[Tuple[str, str]] = field(default_factory=list)  # (resource_id, source_group_id)
    dirty_group_ids: Set[str] = field(default_factory=set)

    @property
    def moved_count(self) -> int:
        return len(self.moved)


def is_draggable_selection(nodes: Sequence[Any]) -> bool:
    """Only a non-empty selection made purely of root member resources can be dragged."""
    if not nodes:
        return False
    for node in nodes:
        if not isinstance(node, ResourceNode) or not node.is_root_member:
            return False
    return True


class TreeProjector:
    """
    Builds display nodes on demand and handles drag-and-drop between groups.

    Args:
        store: Group store to read and mutate
        provider: Stat and directory listing capability
        event_bus: Bus used for tree change notifications
        favourite_glyph: Prefix for the pinned group's label
        show_location_hint: Whether root members get a parent folder hint
    """

    drop_mime_types = [TREE_MIME_TYPE]
    drag_mime_types = [URI_LIST_MIME_TYPE]

    def __init__(
        self,
        store: GroupStore,
        provider: ResourceProvider,
        event_bus: Optional[EventBus] = None,
        favourite_glyph: str = DEFAULT_FAVOURITE_GLYPH,
        show_location_hint: bool = True,
    ):
        self.store = store
        self.provider = provider
        self.event_bus = event_bus or EventBus()
        self.favourite_glyph = favourite_glyph
        self.show_location_hint = show_location_hint

    # Change notifications

    def on_did_change_tree_data(self, handler: Callable[[TreeChanged], Any]) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unregisters it."""
        return self.event_bus.subscribe(TreeChanged, handler)

    async def refresh(self) -> None:
        """Tell listeners the whole tree must be re-read."""
        await self.event_bus.publish(TreeChanged())

    # Tree reads

    async def get_children(
        self,
        node: Optional[DisplayNode] = None,
        token: Optional[CancellationToken] = None
    ) -> List[DisplayNode]:
        """Children of ``node``, or the root level when ``node`` is None."""
        if node is None:
            return self._group_nodes()

        if node.node_type is NodeType.GROUP:
            return await self._resources_for_group(node.group_id)
        elif node.node_type is NodeType.RESOURCE:
            if node.kind is FileKind.DIRECTORY:
                return await self._folder_contents(node, token)
            return []

        raise TypeError(f"Unknown node type: {node.node_type!r}")

    def get_tree_item(self, node: DisplayNode) -> TreeItem:
        """Render a node for the host."""
        if node.node_type is NodeType.GROUP:
            return TreeItem(
                label=node.label,
                collapsible_state=CollapsibleState.COLLAPSED,
                context_value=ContextValue.GROUP,
            )
        elif node.node_type is NodeType.RESOURCE:
            return self._resource_item(node)

        raise TypeError(f"Unknown node type: {node.node_type!r}")

    def create_group_node(self, group_id: str, name: str) -> GroupNode:
        is_pinned = self.store.is_pinned(group_id)
        label = f"{self.favourite_glyph}{name}" if is_pinned else name
        return GroupNode(group_id=group_id, name=name, label=label, is_pinned=is_pinned)

    def create_resource_node(
        self,
        resource_id: str,
        kind: FileKind,
        is_root_member: bool,
        group_id: str,
        label: Optional[str] = None,
    ) -> ResourceNode:
        description = None
        if is_root_member and self.show_location_hint:
            description = location_hint(resource_id)
        return ResourceNode(
            resource_id=resource_id,
            kind=kind,
            is_root_member=is_root_member,
            group_id=group_id,
            label=label or resource_basename(resource_id),
            tooltip=resource_id,
            description=description,
        )

    def _group_nodes(self) -> List[GroupNode]:
        groups = sorted(self.store.all_groups(), key=lambda pair: pair[1].name.casefold())
        return [self.create_group_node(group_id, group.name) for group_id, group in groups]

    async def _resources_for_group(self, group_id: str) -> List[ResourceNode]:
        group = self.store.lookup(group_id)
        if group is None:
            return []

        resources = sorted(group.resources, key=lambda r: resource_basename(r).casefold())
        kinds = await asyncio.gather(*(self._resolve_kind(r) for r in resources))

        return [
            self.create_resource_node(resource_id, kind, True, group_id)
            for resource_id, kind in zip(resources, kinds)
        ]

    async def _resolve_kind(self, resource_id: str) -> FileKind:
        try:
            return await self.provider.stat(resource_id)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not stat {resource_id}: {e}")
            return FileKind.UNKNOWN

    async def _folder_contents(
        self,
        node: ResourceNode,
        token: Optional[CancellationToken]
    ) -> List[ResourceNode]:
        if is_cancelled(token):
            return []

        try:
            entries = await self.provider.list_directory(node.resource_id)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not list {node.resource_id}: {e}")
            return []

        children = []
        for name, kind in entries:
            if kind not in (FileKind.FILE, FileKind.DIRECTORY):
                continue
            child_id = os.path.join(node.resource_id, name)
            children.append(
                self.create_resource_node(child_id, kind, False, node.group_id, label=name)
            )
        return children

    def _resource_item(self, node: ResourceNode) -> TreeItem:
        context_value = ContextValue.ROOT_RESOURCE if node.is_root_member else ContextValue.RESOURCE

        if node.kind is FileKind.DIRECTORY:
            collapsible_state = CollapsibleState.COLLAPSED
            icon = "folder"
            command = None
        elif node.kind is FileKind.FILE:
            collapsible_state = CollapsibleState.NONE
            icon = "file"
            command = TreeCommand(command=OPEN_COMMAND, title="Open File", arguments=[node.resource_id])
        else:
            collapsible_state = CollapsibleState.NONE
            icon = "warning"
            command = None

        return TreeItem(
            label=node.label,
            collapsible_state=collapsible_state,
            context_value=context_value,
            description=node.description,
            tooltip=node.tooltip,
            icon=icon,
            resource_id=node.resource_id,
            command=command,
        )

    # Drag and drop

    async def handle_drag(
        self,
        source: Sequence[DisplayNode],
        data_transfer: DataTransfer,
        token: Optional[CancellationToken] = None
    ) -> None:
        """Put the selection on the transfer payload if it can be moved."""
        if not is_draggable_selection(source):
            return

        nodes = list(source)
        data_transfer.set(TREE_MIME_TYPE, DataTransferItem(nodes))
        data_transfer.set(
            URI_LIST_MIME_TYPE,
            DataTransferItem("\r\n".join(resource_uri(node.resource_id) for node in nodes)),
        )

    async def handle_drop(
        self,
        target: Optional[DisplayNode],
        data_transfer: DataTransfer,
        token: Optional[CancellationToken] = None
    ) -> MoveResult:
        """
        Move the dragged root members into the group under ``target``.

        Items whose source group is gone, or is the target itself, are
        skipped, as is every item after the target group disappears. Each
        successful move fires a refresh. Afterwards every source group that
        lost a resource is persisted, then the target if it still exists.
        Cancellation stops before the next item; applied moves are kept.
        """
        result = MoveResult()

        transfer_item = data_transfer.get(TREE_MIME_TYPE)
        if transfer_item is None or target is None:
            return result

        target_group = self.store.lookup(target.group_id)
        if target_group is None:
            return result

        sources = list(transfer_item.value or [])
        if not is_draggable_selection(sources):
            return result

        result.target_group_id = target_group.id
        for source in sources:
            if is_cancelled(token):
                logger.debug("Drop cancelled, keeping moves applied so far")
                break

            # Listeners awaited by refresh() may delete the target mid-drop
            if self.store.lookup(target_group.id) is not target_group:
                logger.debug(f"Drop target '{target_group.name}' is gone, skipping {source.resource_id}")
                continue

            source_group = self.store.lookup(source.group_id)
            if source_group is None or source_group.id == target_group.id:
                continue

            result.dirty_group_ids.add(source_group.id)
            self.store.remove_resource(source_group.id, source.resource_id)
            self.store.add_resource(target_group.id, source.resource_id)
            result.moved.append((source.resource_id, source_group.id))
            logger.info(
                f"Moved {source.resource_id} from '{source_group.name}' to '{target_group.name}'"
            )
            await self.refresh()

        for group_id in sorted(result.dirty_group_ids):
            group = self.store.lookup(group_id)
            if group is not None:
                await self.store.persist(group)

        if self.store.lookup(target_group.id) is target_group:
            await self.store.persist(target_group)
        return result
