"""Tests for the fallback store registry."""

from collections.abc import Callable

import pytest

from kube_mirror.config import IndexKey, IndexSpec, MirrorConfig
from kube_mirror.exceptions import ConfigException, UnknownFallbackError
from kube_mirror.resource import Resource
from kube_mirror.store import FallbackType, InMemoryStore, NoopStore, Store
from kube_mirror.store.fallback import FALLBACKS, parse_fallback_type, resolve_fallback


@pytest.mark.parametrize(
    "fallback_type", ["unknown-xyz", "", "Memory", " memory", "mongo"]
)
def test_unknown_fallback(fallback_type: str) -> None:
    """Test resolving a type that is not supported."""
    with pytest.raises(UnknownFallbackError, match="unknown fallback type") as exc_info:
        resolve_fallback(fallback_type, MirrorConfig())
    assert exc_info.value.fallback_type == fallback_type
    assert isinstance(exc_info.value, ConfigException)


def test_parse_fallback_type() -> None:
    """Test parsing a supported fallback type."""
    assert parse_fallback_type("memory") == FallbackType.MEMORY
    assert parse_fallback_type("noop") == FallbackType.NOOP


def test_every_type_is_registered() -> None:
    """Test each supported type has a store constructor."""
    assert set(FALLBACKS) == set(FallbackType)


@pytest.mark.parametrize(
    ("fallback_type", "store_cls"),
    [
        ("memory", InMemoryStore),
        ("noop", NoopStore),
    ],
)
def test_resolve_fallback(
    fallback_type: str,
    store_cls: type[Store],
    widget: Callable[..., Resource],
) -> None:
    """Test resolved stores support every store operation."""
    store = resolve_fallback(fallback_type, MirrorConfig())
    assert isinstance(store, store_cls)
    assert isinstance(store, Store)

    resource = widget(uid="abc123")
    store.ensure_indexes()
    store.add(resource)
    store.update(resource)
    store.delete(resource)
    store.delete(resource)


def test_resolve_creates_independent_stores(widget: Callable[..., Resource]) -> None:
    """Test each resolution returns a new store."""
    first = resolve_fallback("memory", MirrorConfig())
    second = resolve_fallback("memory", MirrorConfig())
    assert first is not second
    first.add(widget(uid="abc123"))
    assert isinstance(second, InMemoryStore)
    assert second.list_documents() == []


def test_memory_fallback_uses_configured_indexes() -> None:
    """Test the memory store declares the configured indexes."""
    config = MirrorConfig(
        indexes=[
            IndexSpec(
                kind="Widget",
                group="example.com",
                version="v1",
                keys=[IndexKey(path="spec.name")],
            )
        ]
    )
    store = resolve_fallback("memory", config)
    assert isinstance(store, InMemoryStore)
    store.ensure_indexes()
    assert store.list_indexes("widget.example.com.v1") == ["spec.name_1"]
