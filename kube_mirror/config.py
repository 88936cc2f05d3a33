"""Configuration objects for kube-mirror.

The configuration is a YAML document, for example:

```yaml
mongo:
  uri: mongodb://localhost:27017
  database: kube-mirror
fallback:
  type: memory
indexes:
  - kind: Widget
    group: example.com
    version: v1
    keys:
      - path: spec.name
    unique: true
```
"""

from dataclasses import dataclass, field
from enum import IntEnum
import logging
from pathlib import Path
from typing import Any

from mashumaro import DataClassDictMixin
from mashumaro.config import BaseConfig
from mashumaro.exceptions import MissingField, InvalidFieldValue
import yaml

from .exceptions import ConfigException
from .resource import GroupVersionKind

__all__ = [
    "IndexOrder",
    "IndexKey",
    "IndexSpec",
    "MongoConfig",
    "FallbackConfig",
    "MirrorConfig",
    "parse_config",
    "read_config",
]

_LOGGER = logging.getLogger(__name__)

DEFAULT_DATABASE = "kube-mirror"
DEFAULT_SERVER_SELECTION_TIMEOUT_MS = 5000


class IndexOrder(IntEnum):
    """Sort direction of a single index key."""

    ASCENDING = 1
    DESCENDING = -1


@dataclass
class IndexKey(DataClassDictMixin):
    """A single field of an index."""

    path: str
    """The dotted path of the indexed field e.g. `spec.name`."""

    order: IndexOrder = IndexOrder.ASCENDING
    """The sort direction of the field in the index."""


@dataclass
class IndexSpec(DataClassDictMixin):
    """An index declared for the collection of one resource type."""

    kind: str
    """The kind of the resources in the indexed collection."""

    version: str
    """The API version of the resources in the indexed collection."""

    keys: list[IndexKey]
    """The ordered fields of the index."""

    group: str = ""
    """The API group of the resources, empty for the core group."""

    name: str | None = None
    """Explicit index name, defaults to the name generated by MongoDB."""

    unique: bool = False
    """Reject documents with duplicate values for the index keys."""

    sparse: bool = False
    """Only index documents containing the indexed fields."""

    expire_after_seconds: int | None = None
    """Remove documents this many seconds after the indexed date field."""

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind(kind=self.kind, group=self.group, version=self.version)

    @property
    def collection_name(self) -> str:
        return self.group_version_kind.collection_name

    @property
    def index_name(self) -> str:
        """Return the explicit name or the name MongoDB would generate."""
        if self.name:
            return self.name
        return "_".join(f"{key.path}_{int(key.order)}" for key in self.keys)

    def key_list(self) -> list[tuple[str, int]]:
        """Return the keys in the form accepted by `create_index`."""
        return [(key.path, int(key.order)) for key in self.keys]

    def options(self) -> dict[str, Any]:
        """Return the keyword options accepted by `create_index`."""
        options: dict[str, Any] = {"name": self.index_name}
        if self.unique:
            options["unique"] = True
        if self.sparse:
            options["sparse"] = True
        if self.expire_after_seconds is not None:
            options["expireAfterSeconds"] = self.expire_after_seconds
        return options

    class Config(BaseConfig):
        omit_none = True


@dataclass
class MongoConfig(DataClassDictMixin):
    """Configuration for the MongoDB primary store."""

    uri: str = ""
    """The connection string, the primary store is not used when empty."""

    database: str = DEFAULT_DATABASE
    """The database holding the mirrored collections."""

    enabled: bool = True
    """Set to false to bypass the primary store and use the fallback."""

    server_selection_timeout_ms: int = DEFAULT_SERVER_SELECTION_TIMEOUT_MS
    """How long to wait for a reachable server when connecting."""

    @property
    def configured(self) -> bool:
        return bool(self.uri) and self.enabled


@dataclass
class FallbackConfig(DataClassDictMixin):
    """Configuration for the store used when the primary store is not used."""

    type: str
    """The fallback store type e.g. `memory`."""


@dataclass
class MirrorConfig(DataClassDictMixin):
    """Top level configuration for kube-mirror."""

    mongo: MongoConfig | None = None
    fallback: FallbackConfig | None = None
    indexes: list[IndexSpec] = field(default_factory=list)

    class Config(BaseConfig):
        omit_none = True


def _validate(config: MirrorConfig) -> None:
    for index in config.indexes:
        if not index.keys:
            raise ConfigException(
                f"Index on {index.collection_name} must declare at least one key"
            )


def parse_config(content: str) -> MirrorConfig:
    """Parse a YAML configuration document."""
    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as err:
        raise ConfigException(f"Configuration is not valid yaml: {err}") from err
    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ConfigException(f"Configuration must be a mapping, was: {type(doc)}")
    try:
        config = MirrorConfig.from_dict(doc)
    except (MissingField, InvalidFieldValue, ValueError, TypeError) as err:
        raise ConfigException(f"Invalid configuration: {err}") from err
    _validate(config)
    return config


def read_config(path: Path) -> MirrorConfig:
    """Read the configuration from a YAML file."""
    _LOGGER.debug("Reading configuration from %s", path)
    try:
        content = path.read_text()
    except OSError as err:
        raise ConfigException(f"Unable to read configuration {path}: {err}") from err
    return parse_config(content)
