from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select

from tests.helpers.builders import FIXED_TIME
from wasteflow.adapters.sqlalchemy import SqlAlchemyDocumentStore, document_table

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


def test_missing_collection_loads_as_none(sqlite_session: Session) -> None:
    store = SqlAlchemyDocumentStore(sqlite_session)

    assert store.load("entities") is None
    assert store.version("entities") is None


def test_save_inserts_then_replaces(sqlite_session: Session) -> None:
    store = SqlAlchemyDocumentStore(sqlite_session)

    store.save("waste_types", [{"id": "gft"}], version=1)
    store.save("waste_types", [{"id": "gft"}, {"id": "rest"}], version=2)
    sqlite_session.commit()

    assert store.load("waste_types") == [{"id": "gft"}, {"id": "rest"}]
    assert store.version("waste_types") == 2
    keys = sqlite_session.execute(select(document_table.c.key)).scalars().all()
    assert keys == ["waste_types"]


def test_initialize_if_absent_runs_factory_once(sqlite_session: Session) -> None:
    store = SqlAlchemyDocumentStore(sqlite_session)
    calls: list[str] = []

    def factory() -> list[dict[str, object]]:
        calls.append("seed")
        return [{"id": "seeded"}]

    assert store.initialize_if_absent("order_types", factory, version=1)
    assert not store.initialize_if_absent("order_types", factory, version=1)
    assert calls == ["seed"]
    assert store.load("order_types") == [{"id": "seeded"}]


def test_non_list_payload_is_rejected(sqlite_session: Session) -> None:
    sqlite_session.execute(
        document_table.insert().values(
            key="broken", version=1, payload={"id": "x"}, updated_at=FIXED_TIME
        )
    )
    store = SqlAlchemyDocumentStore(sqlite_session)

    with pytest.raises(TypeError, match="broken"):
        store.load("broken")
