"""
Event System

Change notifications flow from the tree projector to its host through the
event bus.
"""

from .event_bus import EventBus, DomainEvent
from .domain_events import TreeChanged

__all__ = [
    "EventBus",
    "DomainEvent",
    "TreeChanged",
]
