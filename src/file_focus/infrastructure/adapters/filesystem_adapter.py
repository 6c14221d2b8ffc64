"""
Filesystem Adapter - Anti-Corruption Layer for filesystem queries.

The tree projector only needs two questions answered about the disk: what
kind of thing lives at a path, and what a directory contains. This adapter
answers them off the event loop using a thread pool.
"""

import asyncio
import os
import stat as stat_module
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import List, Tuple

from ...domain.value_objects import FileKind


class ResourceProvider(ABC):
    """Stat and directory listing capability consumed by the tree projector."""

    @abstractmethod
    async def stat(self, resource_id: str) -> FileKind:
        """
        Resolve the kind of a resource.

        Raises:
            OSError: If the resource cannot be stat'ed
        """
        pass

    @abstractmethod
    async def list_directory(self, directory_id: str) -> List[Tuple[str, FileKind]]:
        """
        List a directory as (name, kind) pairs in enumeration order.

        Raises:
            OSError: If the directory cannot be read
        """
        pass

    def close(self) -> None:
        """Release any resources held by the provider."""
        pass


class FilesystemAdapter(ResourceProvider):
    """
    Adapter for local filesystem queries.

    Errors are not caught here; callers decide how to degrade.
    """

    def __init__(self, max_workers: int = 4):
        self._executor = ThreadPoolExecutor(max_workers=max_workers)

    async def stat(self, resource_id: str) -> FileKind:
        def _stat():
            mode = os.stat(resource_id).st_mode
            if stat_module.S_ISDIR(mode):
                return FileKind.DIRECTORY
            if stat_module.S_ISREG(mode):
                return FileKind.FILE
            return FileKind.UNKNOWN

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(self._executor, _stat)

    async def list_directory(self, directory_id: str) -> List[Tuple[str, FileKind]]:
        def _list():
            entries = []
            with os.scandir(directory_id) as iterator:
                for entry in iterator:
                    try:
                        if entry.is_dir():
                            kind = FileKind.DIRECTORY
                        elif entry.is_file():
                            kind = FileKind.FILE
                        else:
                            kind = FileKind.UNKNOWN
                    except OSError:
                        kind = FileKind.UNKNOWN
                    entries.append((entry.name, kind))
            return entries

        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(self._executor, _list)

    def close(self) -> None:
        """Shut down the worker threads."""
        self._executor.shutdown(wait=False)
