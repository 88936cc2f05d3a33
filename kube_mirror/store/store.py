"""Store module for mirroring resources into an external document store."""

from abc import ABC, abstractmethod

from kube_mirror.resource import Resource


class Store(ABC):
    """Abstract base class for a write-through store of cluster resources.

    Writes are fire-and-forget from the caller's perspective: a failure to
    persist a change is logged by the store and never raised to the caller.
    Implementations apply writes in exactly the order they are invoked.
    """

    @abstractmethod
    def add(self, resource: Resource) -> None:
        """Create or overwrite the document for a resource."""

    @abstractmethod
    def update(self, resource: Resource) -> None:
        """Overwrite the document for a resource.

        This is a no-op when no document exists for the resource identity.
        """

    @abstractmethod
    def delete(self, resource: Resource) -> None:
        """Remove the document for a resource, if present."""

    @abstractmethod
    def ensure_indexes(self) -> None:
        """Create the configured indexes.

        This is called once at startup before any writes and may be called again
        on restart. Failures for individual indexes are logged and do not prevent
        creating the remaining indexes.
        """
