"""Selection of the active store at startup."""

import logging

from kube_mirror.config import MirrorConfig
from kube_mirror.exceptions import ConfigException

from .fallback import parse_fallback_type, resolve_fallback
from .mongo import MongoStore
from .store import Store

_LOGGER = logging.getLogger(__name__)


def open_store(config: MirrorConfig) -> Store:
    """Return the store that receives all writes for the process lifetime.

    MongoDB is used when configured, otherwise the configured fallback store.
    A configured but unreachable MongoDB is an error rather than a reason to
    use the fallback, since writes accepted by the fallback would never reach
    MongoDB.
    """
    if config.fallback is not None:
        parse_fallback_type(config.fallback.type)

    if config.mongo is not None and config.mongo.configured:
        return MongoStore.connect(config.mongo, config.indexes)

    if config.fallback is None:
        raise ConfigException("No MongoDB uri and no fallback store configured")
    if config.mongo is not None and not config.mongo.enabled:
        _LOGGER.info("MongoDB store is disabled")
    return resolve_fallback(config.fallback.type, config)
