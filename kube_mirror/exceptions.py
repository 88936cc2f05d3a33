"""Exceptions related to kube-mirror."""

__all__ = [
    "MirrorException",
    "InputException",
    "ConfigException",
    "UnknownFallbackError",
    "StoreUnavailableError",
    "IndexCreationError",
]


class MirrorException(Exception):
    """Generic base exception used for this library."""


class InputException(MirrorException):
    """Raised when a resource object is not formatted as expected."""


class ConfigException(MirrorException):
    """Raised when the configuration is invalid or cannot be read."""


class UnknownFallbackError(ConfigException):
    """Raised when a configured fallback type is not a recognized store."""

    def __init__(self, fallback_type: str) -> None:
        super().__init__(f"unknown fallback type: '{fallback_type}'")
        self.fallback_type = fallback_type


class StoreUnavailableError(ConfigException):
    """Raised when the primary store cannot be reached at startup."""


class IndexCreationError(MirrorException):
    """Raised when a single index could not be created in the store."""

    def __init__(self, collection: str, index_name: str, message: str | None) -> None:
        super().__init__(
            f"Index {index_name} on {collection} failed: {message or 'Unknown error'}"
        )
        self.collection = collection
        self.index_name = index_name
        self.message = message
