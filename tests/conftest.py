"""Shared fixtures for kube-mirror tests."""

from collections.abc import Callable
from typing import Any

import pytest

from kube_mirror.resource import Resource


def widget_doc(
    uid: str = "abc123", name: str = "foo", namespace: str | None = "default"
) -> dict[str, Any]:
    """Return a raw Widget object as it would be read from the cluster."""
    metadata: dict[str, Any] = {"name": f"widget-{uid}", "uid": uid}
    if namespace:
        metadata["namespace"] = namespace
    return {
        "apiVersion": "example.com/v1",
        "kind": "Widget",
        "metadata": metadata,
        "spec": {"name": name},
    }


@pytest.fixture
def widget() -> Callable[..., Resource]:
    """Fixture to create Widget resources for tests."""

    def _widget(**kwargs: Any) -> Resource:
        return Resource.parse_doc(widget_doc(**kwargs))

    return _widget
