"""
JSON file repository for groups.

All groups of a workspace live in one JSON document::

    {
      "version": 1,
      "pinned_group_id": "..." | null,
      "groups": {"<id>": {"id": "<id>", "name": "...", "resources": [...]}}
    }

The document is validated against ``GROUPS_SCHEMA`` when loaded. Writes go
to a sibling temp file which then replaces the document, so a crash never
leaves a half-written file behind.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import aiofiles
import aiofiles.os
import jsonschema

from ...domain.entities import Group
from ...domain.repositories import GroupRepository
from ...exceptions import StorageError

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1

GROUPS_SCHEMA = {
    "type": "object",
    "required": ["groups"],
    "properties": {
        "version": {"type": "integer", "minimum": 1},
        "pinned_group_id": {"type": ["string", "null"]},
        "groups": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "required": ["id", "name", "resources"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "name": {"type": "string"},
                    "resources": {
                        "type": "array",
                        "items": {"type": "string"}
                    }
                }
            }
        }
    }
}


def validate_document(document: Dict[str, Any]) -> List[str]:
    """
    Validate a groups document.

    Returns:
        List of validation error messages, empty when valid
    """
    try:
        jsonschema.validate(document, GROUPS_SCHEMA)
    except jsonschema.ValidationError as e:
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return [f"Validation error at {path}: {e.message}"]

    errors = []
    for key, group in document["groups"].items():
        if group["id"] != key:
            errors.append(f"Group key '{key}' does not match its id '{group['id']}'")
    return errors


class JsonGroupRepository(GroupRepository):
    """File-based implementation of GroupRepository using a JSON document."""

    def __init__(self, storage_path: Path):
        self.storage_path = Path(storage_path)
        self._cache: Optional[Dict[str, Any]] = None
        self._write_lock = asyncio.Lock()

    async def _load_document(self) -> Dict[str, Any]:
        if self._cache is not None:
            return self._cache

        if not self.storage_path.exists():
            self._cache = self._empty_document()
            return self._cache

        try:
            async with aiofiles.open(self.storage_path, 'r', encoding='utf-8') as f:
                document = json.loads(await f.read())
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt groups file {self.storage_path}: {e}") from e
        except OSError as e:
            raise StorageError(f"Cannot read groups file {self.storage_path}: {e}") from e

        errors = validate_document(document)
        if errors:
            raise StorageError(f"Invalid groups file {self.storage_path}: {'; '.join(errors)}")

        document.setdefault("version", DOCUMENT_VERSION)
        document.setdefault("pinned_group_id", None)
        self._cache = document
        return self._cache

    async def _write_document(self, document: Dict[str, Any]) -> bool:
        temp_path = self.storage_path.with_name(self.storage_path.name + ".tmp")
        async with self._write_lock:
            try:
                await aiofiles.os.makedirs(self.storage_path.parent, exist_ok=True)
                async with aiofiles.open(temp_path, 'w', encoding='utf-8') as f:
                    await f.write(json.dumps(document, indent=2, ensure_ascii=False))
                await aiofiles.os.replace(temp_path, self.storage_path)
            except OSError as e:
                logger.error(f"Error writing groups file {self.storage_path}: {e}")
                # Next read goes back to what is actually on disk
                self._cache = None
                await self._discard_temp_file(temp_path)
                return False
        return True

    async def _discard_temp_file(self, temp_path: Path) -> None:
        try:
            if await aiofiles.os.path.exists(temp_path):
                await aiofiles.os.remove(temp_path)
        except OSError as e:
            logger.warning(f"Could not remove temp file {temp_path}: {e}")

    @staticmethod
    def _empty_document() -> Dict[str, Any]:
        return {"version": DOCUMENT_VERSION, "pinned_group_id": None, "groups": {}}

    async def load_groups(self) -> List[Group]:
        document = await self._load_document()
        return [Group.from_dict(data) for data in document["groups"].values()]

    async def save_group(self, group: Group) -> bool:
        document = await self._load_document()
        document["groups"][group.id] = group.to_dict()
        saved = await self._write_document(document)
        if saved:
            logger.debug(f"Saved group '{group.name}' ({group.id})")
        return saved

    async def delete_group(self, group_id: str) -> bool:
        document = await self._load_document()
        if document["groups"].pop(group_id, None) is None:
            return True
        if document.get("pinned_group_id") == group_id:
            document["pinned_group_id"] = None
        return await self._write_document(document)

    async def load_pinned_group_id(self) -> Optional[str]:
        document = await self._load_document()
        return document.get("pinned_group_id")

    async def save_pinned_group_id(self, group_id: Optional[str]) -> bool:
        document = await self._load_document()
        document["pinned_group_id"] = group_id
        return await self._write_document(document)
