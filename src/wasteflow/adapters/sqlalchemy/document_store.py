"""Document store persisted in a single SQL table."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import insert, select, update

from wasteflow.adapters.sqlalchemy.mappings import document_table
from wasteflow.domain.model import utcnow

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy.orm import Session

    from wasteflow.domain.ports import Document


class SqlAlchemyDocumentStore:
    def __init__(self, session: Session) -> None:
        self.session = session

    def load(self, key: str) -> list[Document] | None:
        stmt = select(document_table.c.payload).where(document_table.c.key == key)
        payload = self.session.execute(stmt).scalar_one_or_none()
        if payload is None:
            return None
        if not isinstance(payload, list):
            raise TypeError(f"Stored document {key!r} is not a JSON array")
        return [dict(item) for item in cast(list[dict[str, Any]], payload)]

    def version(self, key: str) -> int | None:
        stmt = select(document_table.c.version).where(document_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, key: str, documents: Sequence[Document], *, version: int) -> None:
        values = {"payload": list(documents), "version": version, "updated_at": utcnow()}
        if self._exists(key):
            self.session.execute(
                update(document_table).where(document_table.c.key == key).values(**values)
            )
        else:
            self.session.execute(insert(document_table).values(key=key, **values))

    def initialize_if_absent(
        self,
        key: str,
        factory: Callable[[], Sequence[Document]],
        *,
        version: int,
    ) -> bool:
        if self._exists(key):
            return False
        self.save(key, factory(), version=version)
        return True

    def _exists(self, key: str) -> bool:
        stmt = select(document_table.c.key).where(document_table.c.key == key)
        return self.session.execute(stmt).scalar_one_or_none() is not None
