from __future__ import annotations

import pytest

from tests.helpers.builders import make_order_type, make_waste_type
from tests.helpers.memory import InMemoryDocumentStore
from wasteflow.adapters.documents import (
    ENTITIES,
    ORDER_TYPES,
    ORDERS,
    WASTE_TYPES,
    DocumentCollectionRepository,
)
from wasteflow.domain.fixtures import SEED_VERSION, seed_entities, seed_waste_types
from wasteflow.domain.model import OrderType, WasteType


def test_seeded_collection_is_written_once() -> None:
    store = InMemoryDocumentStore()

    first = DocumentCollectionRepository(store, ENTITIES)
    assert len(first.all()) == len(seed_entities())
    second = DocumentCollectionRepository(store, ENTITIES)
    second.all()

    assert store.saves == ["entities"]
    assert store.versions["entities"] == SEED_VERSION


def test_collection_without_seed_starts_empty() -> None:
    store = InMemoryDocumentStore()

    orders = DocumentCollectionRepository(store, ORDERS)

    assert orders.all() == ()
    assert store.saves == []


def test_stored_collection_is_not_reseeded() -> None:
    store = InMemoryDocumentStore(seed=False)

    waste_types = DocumentCollectionRepository(store, WASTE_TYPES)

    assert waste_types.all() == ()


def test_flush_writes_only_changed_collections() -> None:
    store = InMemoryDocumentStore(seed=False)
    repo = DocumentCollectionRepository[WasteType](store, WASTE_TYPES)

    repo.flush()
    assert store.saves == []

    repo.add(make_waste_type("gft"))
    assert repo.dirty
    repo.flush()

    assert not repo.dirty
    assert store.saves == ["waste_types"]
    assert [doc["id"] for doc in store.documents["waste_types"]] == ["gft"]


def test_flush_keeps_stored_version() -> None:
    store = InMemoryDocumentStore(seed=False)
    store.versions["order_types"] = 7
    repo = DocumentCollectionRepository[OrderType](store, ORDER_TYPES)

    repo.add(make_order_type("basic"))
    repo.flush()

    assert store.versions["order_types"] == 7


def test_add_rejects_duplicate_ids_and_save_requires_existing() -> None:
    store = InMemoryDocumentStore(seed=False)
    repo = DocumentCollectionRepository[WasteType](store, WASTE_TYPES)
    repo.add(make_waste_type("gft"))

    with pytest.raises(ValueError, match="gft"):
        repo.add(make_waste_type("gft"))
    with pytest.raises(KeyError):
        repo.save(make_waste_type("rest"))


def test_remove_reports_missing_records() -> None:
    store = InMemoryDocumentStore(seed=False)
    repo = DocumentCollectionRepository[WasteType](store, WASTE_TYPES)
    repo.add(make_waste_type("gft"))

    assert repo.remove("gft")
    assert not repo.remove("gft")
    assert repo.get("gft") is None


def test_discard_rereads_the_store() -> None:
    store = InMemoryDocumentStore()
    repo = DocumentCollectionRepository[WasteType](store, WASTE_TYPES)
    first = repo.all()[0]
    repo.remove(first.id)

    repo.discard()

    assert not repo.dirty
    assert len(repo.all()) == len(seed_waste_types())
    assert repo.get(first.id) is not first
