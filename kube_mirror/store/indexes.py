"""Declaration of the configured indexes of each collection.

Indexes are declared in the configuration and created once at startup. Index
creation is idempotent in the store, so declaring the same indexes again on
restart has no effect. A failure to create an index only affects query
performance of the mirror, so it is logged and the remaining indexes are still
created.
"""

from collections.abc import Callable, Iterable
import logging

from kube_mirror.config import IndexSpec
from kube_mirror.exceptions import IndexCreationError

__all__ = [
    "IndexSpec",
    "IndexCreator",
    "ensure_indexes",
]

_LOGGER = logging.getLogger(__name__)

IndexCreator = Callable[[str, IndexSpec], str]
"""Creates an index in the named collection and returns the index name."""


def ensure_indexes(specs: Iterable[IndexSpec], create_index: IndexCreator) -> list[str]:
    """Create each index in the collection of its resource type.

    Returns the names of the indexes that exist after the call.
    """
    created: list[str] = []
    for spec in specs:
        collection = spec.collection_name
        try:
            index_name = create_index(collection, spec)
        except IndexCreationError as err:
            _LOGGER.error(
                "Could not create index %s on %s: %s",
                err.index_name,
                err.collection,
                err.message,
            )
            continue
        _LOGGER.debug("Created index %s on %s", index_name, collection)
        created.append(index_name)
    return created
