"""Store that discards all writes, used when mirroring is disabled."""

import logging

from kube_mirror.resource import Resource

from .store import Store

_LOGGER = logging.getLogger(__name__)


class NoopStore(Store):
    """Store implementation that persists nothing."""

    def add(self, resource: Resource) -> None:
        _LOGGER.debug("Discarding add of %s", resource)

    def update(self, resource: Resource) -> None:
        _LOGGER.debug("Discarding update of %s", resource)

    def delete(self, resource: Resource) -> None:
        _LOGGER.debug("Discarding delete of %s", resource)

    def ensure_indexes(self) -> None:
        _LOGGER.debug("Mirroring disabled, no indexes to create")
