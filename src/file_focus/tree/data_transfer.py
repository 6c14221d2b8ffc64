"""Drag-and-drop transfer payload and cancellation token."""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

TREE_MIME_TYPE = "application/vnd.code.tree.fileFocusTree"
URI_LIST_MIME_TYPE = "text/uri-list"


@dataclass(frozen=True)
class DataTransferItem:
    """One entry of a transfer payload."""
    value: Any

    def as_string(self) -> str:
        if isinstance(self.value, str):
            return self.value
        return str(self.value)


class DataTransfer:
    """Opaque bag of transfer items keyed by MIME-like identifiers."""

    def __init__(self):
        self._items: Dict[str, DataTransferItem] = {}

    def set(self, mime_type: str, item: DataTransferItem) -> None:
        self._items[mime_type.lower()] = item

    def get(self, mime_type: str) -> Optional[DataTransferItem]:
        return self._items.get(mime_type.lower())

    def __contains__(self, mime_type: str) -> bool:
        return mime_type.lower() in self._items

    def __iter__(self) -> Iterator[Tuple[str, DataTransferItem]]:
        return iter(list(self._items.items()))

    def __len__(self) -> int:
        return len(self._items)


class CancellationToken:
    """Cooperative cancellation signal passed in by the host."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.is_cancellation_requested
