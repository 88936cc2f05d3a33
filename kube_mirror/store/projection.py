"""Projection of resources into the documents persisted in a store."""

import copy
from typing import Any

from kube_mirror.resource import Resource

ID_FIELD = "_id"


def create_filter(resource: Resource) -> dict[str, Any]:
    """Return a filter matching the document for the resource identity."""
    return {ID_FIELD: resource.uid}


def create_document(resource: Resource) -> dict[str, Any]:
    """Return the full document persisted for a resource.

    The document is a deep copy of the object so that later changes to either
    side are never shared.
    """
    document = copy.deepcopy(resource.obj)
    document[ID_FIELD] = resource.uid
    return document


def create_filter_and_document(
    resource: Resource,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the identity filter and the replacement document for a resource."""
    return create_filter(resource), create_document(resource)
