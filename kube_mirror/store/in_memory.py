"""Module for in memory document store."""

from collections import defaultdict
from collections.abc import Iterable
import copy
import logging
import threading
from typing import Any, DefaultDict

from kube_mirror.config import IndexSpec
from kube_mirror.exceptions import IndexCreationError
from kube_mirror.resource import Resource

from . import indexes
from .projection import create_document
from .store import Store

_LOGGER = logging.getLogger(__name__)


class InMemoryStore(Store):
    """In-memory implementation of the Store interface.

    Documents are held per collection keyed by the object uid and are lost when
    the process exits. Indexes are recorded when declared but not enforced.
    """

    def __init__(self, index_specs: Iterable[IndexSpec] = ()) -> None:
        """Initialize the InMemoryStore."""
        self._index_specs = list(index_specs)
        self._documents: DefaultDict[str, dict[str, dict[str, Any]]] = defaultdict(
            dict
        )
        self._indexes: DefaultDict[str, dict[str, IndexSpec]] = defaultdict(dict)
        self._lock = threading.Lock()

    def add(self, resource: Resource) -> None:
        """Create or overwrite the document for a resource."""
        document = create_document(resource)
        with self._lock:
            self._documents[resource.collection_name][resource.uid] = document
            _LOGGER.debug("Object added to memory: %s", resource.log_fields("mem-add"))

    def update(self, resource: Resource) -> None:
        """Overwrite the document for a resource if it already exists."""
        document = create_document(resource)
        with self._lock:
            collection = self._documents.get(resource.collection_name, {})
            if resource.uid not in collection:
                _LOGGER.debug(
                    "Object %s (_id=%s) not in memory, skipping update",
                    resource,
                    resource.uid,
                )
                return
            collection[resource.uid] = document
            _LOGGER.debug(
                "Object updated in memory: %s", resource.log_fields("mem-update")
            )

    def delete(self, resource: Resource) -> None:
        """Remove the document for a resource, if present."""
        with self._lock:
            collection = self._documents.get(resource.collection_name, {})
            if collection.pop(resource.uid, None) is None:
                _LOGGER.debug("Object %s (_id=%s) already absent", resource, resource.uid)
                return
            _LOGGER.debug(
                "Object deleted from memory: %s", resource.log_fields("mem-delete")
            )

    def ensure_indexes(self) -> None:
        """Record the configured indexes for each collection."""
        indexes.ensure_indexes(self._index_specs, self._declare_index)

    def _declare_index(self, collection: str, spec: IndexSpec) -> str:
        name = spec.index_name
        with self._lock:
            if (existing := self._indexes[collection].get(name)) is not None:
                if (existing.key_list(), existing.options()) != (
                    spec.key_list(),
                    spec.options(),
                ):
                    raise IndexCreationError(
                        collection, name, "index already exists with different options"
                    )
            self._indexes[collection][name] = spec
        return name

    def get_document(self, collection: str, uid: str) -> dict[str, Any] | None:
        """Return a copy of the document with the given uid."""
        with self._lock:
            document = self._documents.get(collection, {}).get(uid)
            return copy.deepcopy(document) if document is not None else None

    def list_documents(self, collection: str | None = None) -> list[dict[str, Any]]:
        """Return copies of all documents, optionally for a single collection."""
        with self._lock:
            if collection is None:
                documents = [
                    document
                    for docs in self._documents.values()
                    for document in docs.values()
                ]
            else:
                documents = list(self._documents.get(collection, {}).values())
            return copy.deepcopy(documents)

    def list_indexes(self, collection: str) -> list[str]:
        """Return the names of the indexes declared for a collection."""
        with self._lock:
            return list(self._indexes.get(collection, {}))
