"""Representation of the cluster resources mirrored into the store.

A resource is an unstructured kubernetes object. The engine only needs its
identity (`metadata.uid`) and its group/version/kind, which decides the
collection where the document for the resource lives.
"""

from dataclasses import dataclass
from typing import Any

from .exceptions import InputException

__all__ = [
    "CORE_GROUP",
    "GroupVersionKind",
    "Resource",
    "collection_name",
]

# The legacy core API group has an empty name. MongoDB rejects collection names
# containing "..", so the empty group is written with this placeholder. It is
# not a valid DNS subdomain so it never matches a real group.
CORE_GROUP = "_core"


def collection_name(gvk: "GroupVersionKind") -> str:
    """Return the collection identifier for a group/version/kind.

    The result is lowercase `<kind>.<group>.<version>`. Documents written for a
    resource type always live in this collection, so the format must not change.
    """
    group = gvk.group or CORE_GROUP
    return f"{gvk.kind}.{group}.{gvk.version}".lower()


@dataclass(frozen=True, order=True)
class GroupVersionKind:
    """Identifier for a kubernetes resource type."""

    kind: str
    group: str
    version: str

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> "GroupVersionKind":
        """Split an apiVersion of the form `group/version` or `version`."""
        group, _, version = api_version.rpartition("/")
        return cls(kind=kind, group=group, version=version)

    @property
    def api_version(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    @property
    def collection_name(self) -> str:
        """Name of the collection holding documents of this type."""
        return collection_name(self)

    def __str__(self) -> str:
        return f"{self.kind}.{self.api_version}"


@dataclass(frozen=True)
class Resource:
    """An unstructured kubernetes object with a stable identity."""

    obj: dict[str, Any]
    """The raw object as returned by the kubernetes API."""

    @classmethod
    def parse_doc(cls, doc: Any) -> "Resource":
        """Parse a Resource from a raw kubernetes object."""
        if not isinstance(doc, dict):
            raise InputException(f"Invalid object is not a mapping: {doc}")
        if not doc.get("apiVersion"):
            raise InputException(f"Invalid object missing apiVersion: {doc}")
        if not doc.get("kind"):
            raise InputException(f"Invalid object missing kind: {doc}")
        if not (metadata := doc.get("metadata")):
            raise InputException(f"Invalid object missing metadata: {doc}")
        if not isinstance(metadata, dict):
            raise InputException(f"Invalid object metadata is not a mapping: {doc}")
        if not metadata.get("uid"):
            raise InputException(f"Invalid object missing metadata.uid: {doc}")
        return cls(obj=doc)

    @property
    def metadata(self) -> dict[str, Any]:
        return self.obj.get("metadata") or {}

    @property
    def uid(self) -> str:
        """The unique identifier of the object, used as the document identity."""
        return str(self.metadata.get("uid", ""))

    @property
    def api_version(self) -> str:
        return str(self.obj.get("apiVersion", ""))

    @property
    def kind(self) -> str:
        return str(self.obj.get("kind", ""))

    @property
    def name(self) -> str:
        return str(self.metadata.get("name", ""))

    @property
    def namespace(self) -> str | None:
        return self.metadata.get("namespace")

    @property
    def group_version_kind(self) -> GroupVersionKind:
        return GroupVersionKind.from_api_version(self.api_version, self.kind)

    @property
    def group(self) -> str:
        return self.group_version_kind.group

    @property
    def version(self) -> str:
        return self.group_version_kind.version

    @property
    def collection_name(self) -> str:
        """Name of the collection holding the document for this object."""
        return self.group_version_kind.collection_name

    @property
    def namespaced_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def log_fields(self, op: str) -> dict[str, Any]:
        """Return the fields describing a store operation on this object."""
        return {
            "op": op,
            "kind": self.kind,
            "namespace": self.namespace,
            "name": self.name,
            "uid": self.uid,
        }

    def __str__(self) -> str:
        """Return the kind and namespaced name concatenated as an id."""
        return f"{self.kind}/{self.namespaced_name}"
