"""Ports for persisting master-data collections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from wasteflow.domain.model import Agreement, Entity, Order, OrderType, Record, WasteType

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type Document = dict[str, Any]


@runtime_checkable
class DocumentStore(Protocol):
    """Key-value storage of JSON documents, one array of records per key."""

    def load(self, key: str) -> list[Document] | None: ...

    def save(self, key: str, documents: Sequence[Document], *, version: int) -> None: ...

    def version(self, key: str) -> int | None: ...

    def initialize_if_absent(
        self,
        key: str,
        factory: Callable[[], Sequence[Document]],
        *,
        version: int,
    ) -> bool:
        """Write ``factory()`` under ``key`` unless a document already exists.

        Returns whether the seed was written.
        """
        ...


@runtime_checkable
class Repository[TRecord: Record](Protocol):
    """Minimal repository contract for one keyed collection."""

    def add(self, record: TRecord) -> None: ...

    def get(self, record_id: str) -> TRecord | None: ...

    def all(self) -> tuple[TRecord, ...]: ...

    def save(self, record: TRecord) -> None: ...

    def remove(self, record_id: str) -> bool: ...


@runtime_checkable
class EntityRepository(Repository[Entity], Protocol):
    """Repository contract for entities."""


@runtime_checkable
class WasteTypeRepository(Repository[WasteType], Protocol):
    """Repository contract for waste types."""


@runtime_checkable
class OrderTypeRepository(Repository[OrderType], Protocol):
    """Repository contract for order types."""


@runtime_checkable
class AgreementRepository(Repository[Agreement], Protocol):
    """Repository contract for agreements."""


@runtime_checkable
class OrderRepository(Repository[Order], Protocol):
    """Repository contract for orders."""
