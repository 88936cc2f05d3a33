"""Write-through store backed by MongoDB.

Each resource type is mirrored into its own collection and each object is a
single document whose `_id` is the object uid. All writes on a store go through
one lock so they reach MongoDB in exactly the order they were invoked.
"""

from collections.abc import Iterable
import logging
import threading

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from kube_mirror.config import IndexSpec, MongoConfig
from kube_mirror.exceptions import IndexCreationError, StoreUnavailableError
from kube_mirror.resource import Resource

from . import indexes
from .projection import create_filter, create_filter_and_document
from .store import Store

_LOGGER = logging.getLogger(__name__)

# Documents are encoded before they are sent, so encoding errors are not
# raised as PyMongoError.
WRITE_ERRORS = (PyMongoError, BSONError, OverflowError)


class MongoStore(Store):
    """Store that writes every change through to MongoDB."""

    def __init__(
        self,
        client: MongoClient,
        database: str,
        index_specs: Iterable[IndexSpec] = (),
    ) -> None:
        """Initialize the MongoStore, taking ownership of the client."""
        self._client = client
        self._database = database
        self._index_specs = list(index_specs)
        self._lock = threading.Lock()

    @classmethod
    def connect(
        cls, config: MongoConfig, index_specs: Iterable[IndexSpec] = ()
    ) -> "MongoStore":
        """Connect to the configured server and verify it is reachable."""
        try:
            client: MongoClient = MongoClient(
                config.uri,
                serverSelectionTimeoutMS=config.server_selection_timeout_ms,
            )
        except PyMongoError as err:
            raise StoreUnavailableError(f"Could not connect to MongoDB: {err}") from err
        try:
            client.admin.command("ping")
        except PyMongoError as err:
            client.close()
            raise StoreUnavailableError(f"Could not reach MongoDB: {err}") from err
        _LOGGER.info("Connected to MongoDB database %s", config.database)
        return cls(client, config.database, index_specs)

    def _collection(self, name: str) -> Collection:
        return self._client[self._database][name]

    def add(self, resource: Resource) -> None:
        """Create or overwrite the document for a resource."""
        query, document = create_filter_and_document(resource)
        with self._lock:
            try:
                self._collection(resource.collection_name).replace_one(
                    query, document, upsert=True
                )
            except WRITE_ERRORS as err:
                _LOGGER.warning(
                    "Could not add object %s (_id=%s) to MongoDB: %s",
                    resource,
                    resource.uid,
                    err,
                )
                return
            _LOGGER.debug("Object added to MongoDB: %s", resource.log_fields("wt-add"))

    def update(self, resource: Resource) -> None:
        """Overwrite the document for a resource if it already exists."""
        query, document = create_filter_and_document(resource)
        with self._lock:
            try:
                result = self._collection(resource.collection_name).replace_one(
                    query, document, upsert=False
                )
            except WRITE_ERRORS as err:
                _LOGGER.warning(
                    "Could not update object %s (_id=%s) in MongoDB: %s",
                    resource,
                    resource.uid,
                    err,
                )
                return
            if result.matched_count == 0:
                _LOGGER.debug(
                    "Object %s (_id=%s) not in MongoDB, skipping update",
                    resource,
                    resource.uid,
                )
                return
            _LOGGER.debug(
                "Object updated in MongoDB: %s", resource.log_fields("wt-update")
            )

    def delete(self, resource: Resource) -> None:
        """Remove the document for a resource, if present."""
        query = create_filter(resource)
        with self._lock:
            try:
                self._collection(resource.collection_name).delete_one(query)
            except WRITE_ERRORS as err:
                _LOGGER.warning(
                    "Could not delete object %s (_id=%s) from MongoDB: %s",
                    resource,
                    resource.uid,
                    err,
                )
                return
            _LOGGER.debug(
                "Object deleted from MongoDB: %s", resource.log_fields("wt-delete")
            )

    def ensure_indexes(self) -> None:
        """Create the configured indexes in their collections."""
        indexes.ensure_indexes(self._index_specs, self._create_index)

    def _create_index(self, collection: str, spec: IndexSpec) -> str:
        try:
            return self._collection(collection).create_index(
                spec.key_list(), **spec.options()
            )
        except PyMongoError as err:
            raise IndexCreationError(collection, spec.index_name, str(err)) from err
