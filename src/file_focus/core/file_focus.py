"""
File Focus service - one workspace root, its groups and its tree.

Wires the group store, the repository, the filesystem adapter and the tree
projector together and exposes the user-level commands. Every command that
changes a group persists it and refreshes the tree.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..domain.entities import Group
from ..domain.repositories import GroupRepository
from ..domain.value_objects import normalize_resource_id
from ..events.event_bus import EventBus
from ..exceptions import DuplicateGroupError, FileFocusError, GroupNotFoundError
from ..infrastructure.adapters.filesystem_adapter import FilesystemAdapter, ResourceProvider
from ..infrastructure.repositories.json_repository import JsonGroupRepository
from ..models.config import Config
from ..tree.data_transfer import CancellationToken, DataTransfer
from ..tree.projector import MoveResult, TreeProjector
from .group_store import GroupStore

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileFocus:
    """
    Workspace-level facade over the grouping engine.

    Args:
        config: Workspace configuration
        repository: Persistence sink, defaults to the JSON document in
            ``config.storage_path``
        provider: Filesystem capability, defaults to the local filesystem
        event_bus: Bus for tree change notifications
    """

    def __init__(
        self,
        config: Config,
        repository: Optional[GroupRepository] = None,
        provider: Optional[ResourceProvider] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.config = config
        self.repository = repository or JsonGroupRepository(config.storage_path)
        self.provider = provider or FilesystemAdapter(max_workers=config.max_workers)
        self.store = GroupStore(self.repository)
        self.projector = TreeProjector(
            self.store,
            self.provider,
            event_bus=event_bus,
            favourite_glyph=config.favourite_glyph,
            show_location_hint=config.show_location_hint,
        )

    async def open(self) -> "FileFocus":
        """Load persisted groups."""
        await self.store.load()
        return self

    def close(self) -> None:
        self.provider.close()

    @property
    def root_path(self) -> Path:
        return self.config.root_path

    # Lookup

    def groups(self) -> List[Group]:
        """Groups in display order."""
        return [group for _, group in sorted(
            self.store.all_groups(), key=lambda pair: pair[1].name.casefold()
        )]

    def find_group(self, reference: str) -> Group:
        """
        Resolve a group by id, or by name ignoring case.

        Raises:
            GroupNotFoundError: If nothing matches
        """
        group = self.store.lookup(reference)
        if group is not None:
            return group

        wanted = reference.casefold()
        for _, group in self.store.all_groups():
            if group.name.casefold() == wanted:
                return group

        raise GroupNotFoundError(reference)

    def normalize(self, path: PathLike) -> str:
        return normalize_resource_id(path, self.root_path)

    # Group lifecycle

    async def create_group(self, name: str, resources: Iterable[PathLike] = ()) -> Group:
        name = name.strip()
        if not name:
            raise FileFocusError("Group name cannot be empty")
        self._ensure_name_free(name)

        group = self.store.create_group(name, [self.normalize(r) for r in resources])
        await self.store.persist(group)
        await self.projector.refresh()
        return group

    async def rename_group(self, reference: str, name: str) -> Group:
        group = self.find_group(reference)
        name = name.strip()
        if not name:
            raise FileFocusError("Group name cannot be empty")
        if name.casefold() != group.name.casefold():
            self._ensure_name_free(name)

        old_name = group.name
        self.store.rename_group(group.id, name)
        await self.store.persist(group)
        logger.info(f"Renamed group '{old_name}' to '{name}'")
        await self.projector.refresh()
        return group

    async def delete_group(self, reference: str) -> Group:
        group = self.find_group(reference)
        was_pinned = self.store.is_pinned(group.id)

        self.store.delete_group(group.id)
        await self.store.persist_removal(group.id)
        if was_pinned:
            await self.store.persist_pinned()
        await self.projector.refresh()
        return group

    def _ensure_name_free(self, name: str) -> None:
        wanted = name.casefold()
        for _, group in self.store.all_groups():
            if group.name.casefold() == wanted:
                raise DuplicateGroupError(name)

    # Membership

    async def add_resources(self, reference: str, paths: Iterable[PathLike]) -> List[str]:
        """Add resources to a group. Returns the identifiers that were new."""
        group = self.find_group(reference)
        added = [
            resource_id for resource_id in (self.normalize(p) for p in paths)
            if self.store.add_resource(group.id, resource_id)
        ]
        if added:
            await self.store.persist(group)
            logger.info(f"Added {len(added)} resources to '{group.name}'")
            await self.projector.refresh()
        return added

    async def remove_resources(self, reference: str, paths: Iterable[PathLike]) -> List[str]:
        """Remove resources from a group. Returns the identifiers that were removed."""
        group = self.find_group(reference)
        removed = []
        for path in paths:
            # Stored identifiers may predate normalization, accept them verbatim
            raw = str(path)
            if self.store.remove_resource(group.id, raw):
                removed.append(raw)
            else:
                resource_id = self.normalize(path)
                if self.store.remove_resource(group.id, resource_id):
                    removed.append(resource_id)
        if removed:
            await self.store.persist(group)
            logger.info(f"Removed {len(removed)} resources from '{group.name}'")
            await self.projector.refresh()
        return removed

    # Pinning

    async def pin_group(self, reference: Optional[str]) -> Optional[Group]:
        """Pin a group, or clear the pin with ``None``."""
        group = self.find_group(reference) if reference is not None else None
        self.store.mark_pinned(group.id if group is not None else None)
        await self.store.persist_pinned()
        await self.projector.refresh()
        return group

    # Moving

    async def move_resources(
        self,
        paths: Iterable[PathLike],
        source: str,
        target: str,
        token: Optional[CancellationToken] = None,
    ) -> MoveResult:
        """
        Move resources between groups through the drag-and-drop protocol.

        The resources are picked from the source group's root members the way
        a host selection would be; paths the group doesn't list are ignored.
        """
        source_group = self.find_group(source)
        target_group = self.find_group(target)

        paths = list(paths)
        wanted = {self.normalize(p) for p in paths} | {str(p) for p in paths}
        source_node = self.projector.create_group_node(source_group.id, source_group.name)
        selection = [
            node for node in await self.projector.get_children(source_node)
            if node.resource_id in wanted
        ]

        transfer = DataTransfer()
        await self.projector.handle_drag(selection, transfer, token)
        target_node = self.projector.create_group_node(target_group.id, target_group.name)
        return await self.projector.handle_drop(target_node, transfer, token)
