"""Dispatch of resource change events to a store.

A watcher of the cluster API emits one event per observed change. Events must
be applied in the order they were observed; the store serializes concurrent
callers but does not reorder them.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
import logging

from .resource import Resource
from .store import Store

__all__ = [
    "EventType",
    "ResourceEvent",
    "apply_event",
    "apply_events",
]

_LOGGER = logging.getLogger(__name__)


class EventType(StrEnum):
    """The kind of change observed for a resource."""

    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class ResourceEvent:
    """A single change to a resource."""

    type: EventType
    resource: Resource


def apply_event(store: Store, event: ResourceEvent) -> None:
    """Apply a single event to the store."""
    _LOGGER.debug("Applying %s event for %s", event.type, event.resource)
    if event.type == EventType.ADD:
        store.add(event.resource)
    elif event.type == EventType.UPDATE:
        store.update(event.resource)
    elif event.type == EventType.DELETE:
        store.delete(event.resource)
    else:
        raise ValueError(f"Unsupported event type: {event.type}")


def apply_events(store: Store, events: Iterable[ResourceEvent]) -> int:
    """Apply events to the store in order and return how many were applied."""
    count = 0
    for event in events:
        apply_event(store, event)
        count += 1
    return count
