"""
Domain Events - Specific event implementations.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .event_bus import DomainEvent


@dataclass(kw_only=True)
class TreeChanged(DomainEvent):
    """
    Event fired when the tree needs to be re-read.

    ``node`` is the subtree that changed; ``None`` means the whole tree.
    """
    node: Optional[Any] = None

    @property
    def is_root(self) -> bool:
        return self.node is None
