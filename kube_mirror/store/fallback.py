"""Registry of the stores used in place of the primary store.

A fallback store is selected by the `fallback.type` configuration value when
the primary store is not configured or has been disabled. Only the types in
`FallbackType` are supported and any other value is a configuration error.
"""

from collections.abc import Callable
from enum import StrEnum
import logging

from kube_mirror.config import MirrorConfig
from kube_mirror.exceptions import UnknownFallbackError

from .in_memory import InMemoryStore
from .noop import NoopStore
from .store import Store

__all__ = [
    "FallbackType",
    "FALLBACKS",
    "parse_fallback_type",
    "resolve_fallback",
]

_LOGGER = logging.getLogger(__name__)


class FallbackType(StrEnum):
    """Supported fallback store types."""

    MEMORY = "memory"
    NOOP = "noop"


FALLBACKS: dict[FallbackType, Callable[[MirrorConfig], Store]] = {
    FallbackType.MEMORY: lambda config: InMemoryStore(config.indexes),
    FallbackType.NOOP: lambda config: NoopStore(),
}


def parse_fallback_type(fallback_type: str) -> FallbackType:
    """Return the FallbackType for a configured value."""
    try:
        return FallbackType(fallback_type)
    except ValueError as err:
        raise UnknownFallbackError(fallback_type) from err


def resolve_fallback(fallback_type: str, config: MirrorConfig) -> Store:
    """Construct a new fallback store of the configured type."""
    resolved = parse_fallback_type(fallback_type)
    _LOGGER.info("Using %s fallback store", resolved)
    return FALLBACKS[resolved](config)
