"""Repositories that keep one document collection in memory per unit of work."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from wasteflow.domain.fixtures import SEED_VERSION

if TYPE_CHECKING:
    from wasteflow.adapters.documents.translator import CollectionCodec
    from wasteflow.domain.model import Record
    from wasteflow.domain.ports import Document, DocumentStore

log = getLogger(__name__)


class DocumentCollectionRepository[TRecord: Record]:
    """Identity map over a single stored collection.

    The collection is read (and seeded when absent) on first access. Changes stay in
    memory until ``flush`` writes the whole collection back in insertion order.
    """

    def __init__(self, store: DocumentStore, codec: CollectionCodec[TRecord]) -> None:
        self._store = store
        self._codec = codec
        self._records: dict[str, TRecord] | None = None
        self._dirty = False

    @property
    def key(self) -> str:
        return self._codec.key

    @property
    def dirty(self) -> bool:
        return self._dirty

    def add(self, record: TRecord) -> None:
        records = self._loaded()
        if record.id in records:
            raise ValueError(f"{self.key} already contains a record with id {record.id}")
        records[record.id] = record
        self._dirty = True

    def get(self, record_id: str) -> TRecord | None:
        return self._loaded().get(record_id)

    def all(self) -> tuple[TRecord, ...]:
        return tuple(self._loaded().values())

    def save(self, record: TRecord) -> None:
        records = self._loaded()
        if record.id not in records:
            raise KeyError(f"{self.key} has no record with id {record.id}")
        records[record.id] = record
        self._dirty = True

    def remove(self, record_id: str) -> bool:
        removed = self._loaded().pop(record_id, None)
        if removed is None:
            return False
        self._dirty = True
        return True

    def flush(self) -> None:
        if not self._dirty or self._records is None:
            return
        documents = [self._codec.encode(record) for record in self._records.values()]
        version = self._store.version(self.key) or SEED_VERSION
        self._store.save(self.key, documents, version=version)
        self._dirty = False
        log.debug("Flushed %d %s", len(documents), self.key)

    def discard(self) -> None:
        """Forget in-memory state so the next access re-reads the store."""

        self._records = None
        self._dirty = False

    def _loaded(self) -> dict[str, TRecord]:
        if self._records is None:
            self._records = self._load()
        return self._records

    def _load(self) -> dict[str, TRecord]:
        seed = self._codec.seed
        if seed is not None:
            encode = self._codec.encode
            seeded = self._store.initialize_if_absent(
                self.key,
                lambda: [encode(record) for record in seed()],
                version=SEED_VERSION,
            )
            if seeded:
                log.info("Seeded %s (version %d)", self.key, SEED_VERSION)
        documents: list[Document] = self._store.load(self.key) or []
        records: dict[str, TRecord] = {}
        for document in documents:
            record = self._codec.decode(document)
            records[record.id] = record
        return records
